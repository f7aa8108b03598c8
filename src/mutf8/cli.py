"""Command-line interface for mutf8."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import mutf8
from mutf8.codec.bulk import unicode_length
from mutf8.codec.quoted import from_quoted_ascii, utf8_as_quoted_ascii
from mutf8.codec.validate import is_legal_utf8

logger = logging.getLogger(__name__)


def _report(name: str, data: bytes, args: argparse.Namespace) -> bool:
    """Print the result for one input and return whether it was legal."""
    legal = is_legal_utf8(data, version_leq_47=args.legacy)
    logger.debug("%s: %d bytes, legal=%s", name, len(data), legal)
    if args.minimal:
        print("legal" if legal else "illegal")
    elif not legal:
        print(f"{name}: illegal")
    elif args.quote:
        print(f"{name}: {utf8_as_quoted_ascii(data)}")
    else:
        measured = unicode_length(data, len(data))
        suffix = ", latin1" if measured.is_latin1 else ""
        print(f"{name}: legal, {measured.length} characters{suffix}")
    return legal


def main(argv: list[str] | None = None) -> None:
    """Run the ``mutf8check`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = argparse.ArgumentParser(
        description="Validate and render Modified UTF-8 data."
    )
    parser.add_argument("files", nargs="*", help="Files to check")
    parser.add_argument(
        "--legacy",
        action="store_true",
        help="Accept overlong encodings (class file version 47 and older)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--quote", action="store_true", help="Print legal input as quoted-ascii"
    )
    mode.add_argument(
        "--unquote",
        action="store_true",
        help="Convert quoted-ascii input to Modified UTF-8 on stdout",
    )
    mode.add_argument(
        "--minimal", action="store_true", help="Output only legal or illegal"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"mutf8 {mutf8.__version__}"
    )

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    inputs: list[tuple[str, bytes]] = []
    failed = False
    if args.files:
        for filepath in args.files:
            try:
                data = Path(filepath).read_bytes()
            except OSError as e:
                print(f"mutf8check: {filepath}: {e}", file=sys.stderr)
                failed = True
                continue
            inputs.append((filepath, data))
    else:
        inputs.append(("stdin", sys.stdin.buffer.read()))

    for name, data in inputs:
        if args.unquote:
            try:
                encoded = from_quoted_ascii(data.rstrip(b"\r\n"))
            except ValueError as e:
                print(f"mutf8check: {name}: {e}", file=sys.stderr)
                failed = True
                continue
            sys.stdout.buffer.write(encoded + b"\n")
            sys.stdout.flush()
        elif not _report(name, data, args):
            failed = True

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
