"""Command-line front door for codepad.

Parses CLI options, configures logging, and validates the optional project
path. Then dispatches into the Qt runtime, which asks for a directory when
none was given.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .runtime import run_editor

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codepad",
        description="Minimal source editor with a directory tree and git menu.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Project directory. A directory picker is shown when omitted.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name (persisted for later runs).")
    parser.add_argument("--debug", action="store_true", help="Log debug output (including git commands) to stderr.")
    return parser


def configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the editor.

    A positional path must name an existing directory; otherwise the process
    exits with an error message before any window opens.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    path: Path | None = None
    if args.path is not None:
        path = Path(args.path)
        if not path.is_dir():
            raise SystemExit(f"Not a directory: {path}")

    raise SystemExit(run_editor(path, args.style))


if __name__ == "__main__":
    main()
