"""
Interactive menu: generate the fixture files, generate the reports, or exit.

    python -m scripts.menu [--data-dir files]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from app.config import DEFAULT_DATA_DIR, ReportSettings
from app.engine import generate_reports
from scripts.seed_data import seed

MENU = """Menu:
1. Generate Info Files
2. Generate Reports
3. Exit"""


def main(argv: Optional[list[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    parser = argparse.ArgumentParser(description="Generate seller sales fixtures and reports.")
    parser.add_argument("--data-dir", type=Path, default=Path(DEFAULT_DATA_DIR))
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    settings = ReportSettings(data_dir=args.data_dir)

    while True:
        print(MENU)
        try:
            choice = input_fn("Choose an option: ").strip()
        except EOFError:
            return 0

        if choice == "1":
            try:
                seed(settings, rng_seed=None)
                print("Files generated successfully.")
            except OSError as exc:
                print(f"Error generating files: {exc}")
        elif choice == "2":
            status = generate_reports(settings)
            if all(status.values()):
                print("Reports generated successfully.")
            else:
                print("Error generating reports, see the log for details.")
        elif choice == "3":
            print("Exiting the program.")
            return 0
        else:
            print("Invalid option. Please try again.")


if __name__ == "__main__":
    sys.exit(main())
