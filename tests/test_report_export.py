import os

from src.utils.fallback_strategy import build_fallback_strategy
from src.utils.pdf_generator import build_report_html, convert_report_to_pdf, render_report_pdf
from src.utils.strategy_plots import render_strategy_plots
from src.utils.strategy_report import build_strategy_report


def _report():
    answers = {"product": "Candles", "budget": "4000", "customers": "Gift buyers", "growthGoal": "Holiday sales"}
    result = {"strategy": build_fallback_strategy(4000), "source": "fallback", "reason": "offline", "model": None}
    return result, build_strategy_report(answers, result)


def test_plots_are_written_as_png(tmp_path):
    result, _ = _report()
    paths = render_strategy_plots(result["strategy"], str(tmp_path / "plots"))

    assert [os.path.basename(p) for p in paths] == ["budget_allocation.png", "expected_reach.png"]
    for path in paths:
        with open(path, "rb") as f:
            assert f.read(8) == b"\x89PNG\r\n\x1a\n"


def test_plots_skip_empty_strategy(tmp_path):
    assert render_strategy_plots({"campaigns": [], "budgetAllocation": []}, str(tmp_path)) == []


def test_report_html_renders_tables_and_ignores_missing_images(tmp_path):
    _, report = _report()
    html = build_report_html(report, [str(tmp_path / "missing.png")])

    assert "<table>" in html
    assert "<h1>Marketing Strategy Plan</h1>" in html
    assert "Charts" not in html


def test_pdf_bytes_and_file(tmp_path):
    result, report = _report()
    plots = render_strategy_plots(result["strategy"], str(tmp_path / "plots"))

    pdf_bytes = render_report_pdf(report, plots)
    assert pdf_bytes is not None
    assert pdf_bytes.startswith(b"%PDF")

    out = tmp_path / "plan.pdf"
    assert convert_report_to_pdf(report, str(out), image_paths=plots) is True
    assert out.read_bytes().startswith(b"%PDF")
