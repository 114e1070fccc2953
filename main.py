"""
Entry point for the FD + Nifty 50/50 projection calculator.

Usage:
    python main.py               # launches the web app at localhost:5000
    python main.py --cli         # runs the terminal interface
    python main.py --no-browser  # web app without opening a browser tab
"""

import argparse


def main() -> None:
    parser = argparse.ArgumentParser(
        description="FD + Nifty 50/50: how long the FD lasts and what the Nifty half is worth",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open a browser tab when starting the web app",
    )
    args = parser.parse_args()

    if args.cli:
        from cli import run_cli
        run_cli()
    else:
        from app import run_web
        run_web(open_browser=not args.no_browser)


if __name__ == "__main__":
    main()
