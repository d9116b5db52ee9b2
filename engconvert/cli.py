"""Command line front end for converting language files between ENG and XML."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Sequence

from engconvert.converter import convert_eng_to_xml, convert_xml_to_eng
from engconvert.logger import Logger

_EXTENSIONS = {"eng": ".eng", "xml": ".xml"}

# Encoding values offered to the user, with a short description of each.
ENCODINGS = {
    "Windows-1252": "Default",
    "Windows-1250": "Eastern European",
    "Windows-1251": "Cyrillic",
    "Windows-1253": "Greek",
    "CP949": "Korean",
    "Shift_JIS": "Japanese",
    "c3-tc": "Traditional Chinese (C3)",
    "c3-sc": "Simplified Chinese (C3)",
}
DEFAULT_ENCODING = "Windows-1252"

_DESCRIPTION = (
    "Convert language files for the Impressions Games citybuilding games "
    "to and from XML format so they can be edited easily."
)


def suggest_output_path(input_path: str | os.PathLike[str], target_type: str) -> str:
    """Replace the four-character extension of the input with that of the target type.

    ``target_type`` is ``"eng"`` or ``"xml"`` (any case).
    """
    try:
        extension = _EXTENSIONS[target_type.lower()]
    except KeyError:
        raise ValueError(f"Unknown file type: {target_type}") from None
    path = os.fspath(input_path)
    return path[: max(len(path) - 4, 0)] + extension


def format_report(success: bool, logger: Logger) -> str:
    """Build the conversion report: a status line, a blank line and the log."""
    first_line = "Conversion OK" if success else "*** Conversion FAILED ***"
    return first_line + "\n\n" + "\n".join(logger.messages())


def _build_parser() -> argparse.ArgumentParser:
    encodings_help = "; ".join(f"{value}: {label}" for value, label in ENCODINGS.items())
    parser = argparse.ArgumentParser(prog="engconvert", description=_DESCRIPTION)
    commands = parser.add_subparsers(dest="command", required=True)
    for command, source, target in (
        ("eng-to-xml", "ENG", "XML"),
        ("xml-to-eng", "XML", "ENG"),
    ):
        sub = commands.add_parser(command, help=f"convert {source} to {target}")
        sub.add_argument("input", help=f"input {source} file")
        sub.add_argument(
            "output",
            nargs="?",
            help=f"output {target} file (default: input with a {target.lower()} extension)",
        )
        sub.add_argument(
            "-e",
            "--encoding",
            default=DEFAULT_ENCODING,
            choices=list(ENCODINGS),
            help=f"encoding of the strings ({encodings_help})",
        )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run a conversion, print its report, and return 0 on success or 1 on failure."""
    args = _build_parser().parse_args(argv)
    to_xml = args.command == "eng-to-xml"
    output = args.output or suggest_output_path(args.input, "xml" if to_xml else "eng")

    logger = Logger()
    logger.info(f"Using encoding: {args.encoding}")
    convert = convert_eng_to_xml if to_xml else convert_xml_to_eng
    success = convert(args.input, output, args.encoding, logger)
    print(format_report(success, logger))
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())