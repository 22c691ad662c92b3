# main.py
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication

from app.config import load_config
from app.errors import TypingTestError
from services.state_machine import TypingTestStateMachine
from ui.terminal import TerminalApp

DEFAULT_LOG_FILE = "tt.log"


def setup_logging(log_file: str = DEFAULT_LOG_FILE, verbose: bool = False) -> None:
    # the terminal belongs to the view, so records only go to the file
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.FileHandler(log_file, encoding="utf-8")],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        app = QCoreApplication.instance()
        if app is not None:
            # leave through the event loop so the terminal gets restored
            app.exit(1)
        else:
            sys.exit(1)

    sys.excepthook = excepthook


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tt", description="A minimalist CLI typing speed test.")
    parser.add_argument("--config", type=Path, default=None, help="JSON file with phrase/theme")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE, help="where to write the log")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    try:
        config = load_config(args.config)
    except TypingTestError as e:
        logging.error("Bad configuration: %s", e)
        print(f"tt: {e}", file=sys.stderr)
        return 2

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("tt")

    machine = TypingTestStateMachine(config)
    try:
        with TerminalApp(machine, config):
            return app.exec()
    except TypingTestError as e:
        logging.error("%s", e)
        print(f"tt: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
