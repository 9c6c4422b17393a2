import pytest

from src.utils.csv_ingest import (
    InvalidFileTypeError,
    is_csv_upload,
    parse_csv_text,
    read_csv_upload,
)


def test_parse_csv_text_keeps_order_and_drops_blank_rows():
    text = "name, age ,city\nAna,31,Madrid\n,,\nLuis,45,Lima\n"
    rows = parse_csv_text(text)
    assert rows == [
        {"name": "Ana", "age": "31", "city": "Madrid"},
        {"name": "Luis", "age": "45", "city": "Lima"},
    ]


def test_parse_csv_text_fills_missing_trailing_columns():
    rows = parse_csv_text("sku,price,category\nA1,9.99\nB2\n")
    assert rows == [
        {"sku": "A1", "price": "9.99", "category": ""},
        {"sku": "B2", "price": "", "category": ""},
    ]


def test_parse_csv_text_ignores_extra_values_and_crlf():
    rows = parse_csv_text("a,b\r\n1,2,3\r\n")
    assert rows == [{"a": "1", "b": "2"}]


def test_parse_csv_text_quoted_commas_shift_columns():
    # Known limitation: quoting is not understood.
    rows = parse_csv_text('product,price\n"Mug, large",12\n')
    assert rows == [{"product": '"Mug', "price": 'large"'}]


def test_parse_csv_text_header_only_or_empty():
    assert parse_csv_text("") == []
    assert parse_csv_text("a,b,c") == []
    assert parse_csv_text("a,b,c\n") == []


def test_is_csv_upload_accepts_csv_mime_or_extension():
    assert is_csv_upload("data.csv", "text/csv")
    assert is_csv_upload("export.CSV", None)
    assert is_csv_upload("export", "application/vnd.ms-excel")
    assert not is_csv_upload("report.pdf", "application/pdf")
    assert not is_csv_upload("notes.txt", "text/plain")


def test_read_csv_upload_rejects_non_csv_before_parsing():
    with pytest.raises(InvalidFileTypeError):
        read_csv_upload(b"not,really\ncsv,data", filename="photo.png", mime_type="image/png")


def test_read_csv_upload_decodes_bom_and_latin1():
    rows = read_csv_upload("\ufeffcity,spend\nMálaga,10\n".encode("utf-8"), "a.csv", "text/csv")
    assert rows == [{"city": "Málaga", "spend": "10"}]

    rows = read_csv_upload("city,spend\nMálaga,10\n".encode("latin-1"), "b.csv", "text/csv")
    assert rows[0]["city"] == "Málaga"
