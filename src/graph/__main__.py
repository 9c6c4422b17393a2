import argparse
import contextlib
import json
import os
import sys

from src.graph.graph import run_planner
from src.utils.csv_ingest import InvalidFileTypeError, read_csv_upload
from src.utils.pdf_generator import convert_report_to_pdf
from src.utils.strategy_plots import render_strategy_plots


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a marketing strategy without the web UI.")
    parser.add_argument("--product", type=str, required=True, help="Product or service description.")
    parser.add_argument("--budget", type=str, default="", help="Monthly marketing budget (USD).")
    parser.add_argument("--customers", type=str, default="", help="Target customer profile.")
    parser.add_argument("--goal", type=str, default="", help="Growth objective.")
    parser.add_argument("--csv", type=str, default="", help="Optional CSV file with customer/product data.")
    parser.add_argument("--output", type=str, default="", help="Write the strategy JSON here (default: stdout).")
    parser.add_argument("--pdf", type=str, default="", help="Also export the plan as a PDF.")
    parser.add_argument("--offline", action="store_true", help="Skip the AI call and use the budget templates.")
    args = parser.parse_args()

    rows = []
    if args.csv:
        if not os.path.exists(args.csv):
            print(f"CSV not found: {args.csv}", file=sys.stderr)
            return 2
        with open(args.csv, "rb") as f:
            try:
                rows = read_csv_upload(f.read(), filename=os.path.basename(args.csv))
            except InvalidFileTypeError as exc:
                print(str(exc), file=sys.stderr)
                return 2

    answers = {
        "product": args.product,
        "budget": args.budget,
        "customers": args.customers,
        "growthGoal": args.goal,
    }
    # stdout carries the JSON when --output is not given
    status_stream = sys.stdout if args.output else sys.stderr
    with contextlib.redirect_stdout(status_stream):
        final_state = run_planner(answers, rows, offline=args.offline)
    result = final_state["strategy_result"]
    payload = {
        "source": result["source"],
        "reason": result.get("reason"),
        "model": result.get("model"),
        "strategy": result["strategy"],
        "budget_audit": final_state.get("budget_audit", {}),
    }

    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Strategy ({result['source']}) written to {args.output}")
    else:
        print(text)

    if args.pdf:
        plots_dir = os.path.join(os.path.dirname(os.path.abspath(args.pdf)), "plots")
        plots = render_strategy_plots(result["strategy"], plots_dir)
        if not convert_report_to_pdf(final_state["final_report"], args.pdf, image_paths=plots):
            print("PDF export failed", file=sys.stderr)
            return 1
        print(f"PDF written to {args.pdf}", file=status_stream)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
