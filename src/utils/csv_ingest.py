import logging
import os
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

ParsedRow = Dict[str, str]

CSV_MIME_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


class InvalidFileTypeError(ValueError):
    """Raised when an upload is not a CSV file."""


def parse_csv_text(text: str) -> List[ParsedRow]:
    """
    Parse comma-separated text into row dicts keyed by the header line.

    Values are split on bare commas: quoted fields that contain commas are not
    supported and will shift the remaining columns. Lines with fewer values than
    headers get "" for the missing trailing columns. Rows where every value is
    empty are dropped.
    """
    if not text:
        return []
    lines = text.split("\n")
    headers = [h.strip() for h in lines[0].rstrip("\r").split(",")]
    rows: List[ParsedRow] = []
    for line in lines[1:]:
        values = [v.strip() for v in line.rstrip("\r").split(",")]
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        if any(value != "" for value in row.values()):
            rows.append(row)
    return rows


def is_csv_upload(filename: Optional[str], mime_type: Optional[str]) -> bool:
    mime = (mime_type or "").split(";")[0].strip().lower()
    if mime in CSV_MIME_TYPES:
        return True
    _, ext = os.path.splitext(filename or "")
    return ext.lower() == ".csv"


def decode_csv_bytes(data: bytes) -> str:
    for encoding in ("utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def read_csv_upload(data: bytes, filename: Optional[str] = None, mime_type: Optional[str] = None) -> List[ParsedRow]:
    if not is_csv_upload(filename, mime_type):
        raise InvalidFileTypeError(f"Please upload a CSV file (got {mime_type or filename or 'unknown'}).")
    rows = parse_csv_text(decode_csv_bytes(data or b""))
    logger.info("CSV_PARSED filename=%s rows=%d", filename, len(rows))
    return rows
