"""tedit CLI entry point.

Allows running via `python -m tedit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .config import Config, default_config_path, write_default_config
from .version import get_version_string


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tedit",
        description="A small terminal text editor.",
    )
    parser.add_argument("file", nargs="?", help="the path to the edited file")
    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        default=str(default_config_path()),
        help="path to the config file (default: %(default)s)",
    )
    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="overwrite the selected config file with default values",
    )
    parser.add_argument("--log-file", metavar="FILE", help="write debug logs to FILE")
    parser.add_argument("-V", "--version", action="store_true", help="print version and exit")
    return parser.parse_args(argv)


def configure_logging(log_file: Optional[str]) -> None:
    """Send logs to ``log_file``; otherwise keep them off the screen."""
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(threadName)s %(name)s %(levelname)s: %(message)s",
        )
    else:
        logging.getLogger("tedit").addHandler(logging.NullHandler())


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    if args.version:
        print(get_version_string())
        return 0
    configure_logging(args.log_file)

    if args.generate_config:
        try:
            path = write_default_config(args.config)
        except OSError as e:
            print(f"tedit: could not write {args.config}: {e}", file=sys.stderr)
            return 1
        print(f"created {path}")
        return 0

    config = Config.resolve(args.file, args.config)

    # Lazy import to avoid importing terminal deps for --version
    from .editor import Editor
    editor = Editor(config)
    try:
        editor.run()
    except OSError as e:
        print(f"tedit: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
