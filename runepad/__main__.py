"""Runepad CLI entry point.

Allows running via `python -m runepad` and provides the console script
defined in `pyproject.toml`.

    runepad [--version] [--textual] [--log-file PATH] [FILE]
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys
from typing import Optional

USAGE = "usage: runepad [--version] [--textual] [--log-file PATH] [FILE]"


def get_version_string() -> str:
    try:
        return f"runepad {importlib.metadata.version('runepad')}"
    except importlib.metadata.PackageNotFoundError:
        return "runepad (not installed)"


def parse_args(args: list[str]) -> dict:
    """Very small arg parsing: flags first or anywhere, at most one filename.

    Raises:
        ValueError: on an unknown option, a missing --log-file argument, or
            more than one filename.
    """
    options = {'version': False, 'textual': False, 'log_file': None, 'filename': None}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ('--version', '-V'):
            options['version'] = True
        elif arg == '--textual':
            options['textual'] = True
        elif arg == '--log-file':
            if i + 1 >= len(args):
                raise ValueError("--log-file needs a path")
            i += 1
            options['log_file'] = args[i]
        elif arg.startswith('-') and arg != '-':
            raise ValueError(f"unknown option {arg}")
        elif options['filename'] is not None:
            raise ValueError("only one file can be edited at a time")
        else:
            options['filename'] = arg
        i += 1
    return options


def main(argv: Optional[list[str]] = None) -> int:
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        print(f"runepad: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    if options['version']:
        print(get_version_string())
        return 0

    # The terminal is the display, so logs only go to a file on request
    if options['log_file']:
        logging.basicConfig(
            filename=options['log_file'],
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    # Lazy imports to avoid loading UI deps for --version
    if options['textual']:
        from .textual_app import main as textual_main
        textual_main(options['filename'])
        return 0

    from .editor import Editor
    editor = Editor()
    editor.load_file(options['filename'])
    editor.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
