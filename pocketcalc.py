"""
PocketCalc
Desktop entry point; the web portal runs separately via run_web.py
"""
import argparse
import logging
import tkinter as tk
import config
from database import Database
from gui import PocketCalcGUI


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pocketcalc",
        description=f"{config.APP_NAME} {config.VERSION} - desktop calculator with history and undo"
    )
    parser.add_argument("--db", default=config.DB_PATH,
                        help="SQLite file for history and theme (default: %(default)s)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug messages")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
                        format=config.LOG_FORMAT)

    root = tk.Tk()
    PocketCalcGUI(root, db=Database(args.db))
    root.mainloop()


if __name__ == "__main__":
    main()
