"""
Entry point for the PVG turnover ROI calculator.

Usage:
    python main.py          # launches the web app at localhost:5000
    python main.py --cli    # runs the terminal interface
"""

import argparse

import config as cfg


def main() -> None:
    parser = argparse.ArgumentParser(
        description="The Cost of Turnover: PVG ROI Calculator",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument(
        "--no-pdf",
        action="store_true",
        help="In terminal mode, skip writing the PDF report",
    )
    args = parser.parse_args()

    if args.cli:
        from cli import run_cli
        run_cli(pdf_path=None if args.no_pdf else cfg.PDF_FILENAME)
    else:
        from app import run_web
        run_web()


if __name__ == "__main__":
    main()
