"""Command line converter between packed JSON and websafe renderings."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from .codec import CeremonyEncodingError
from .config import load_settings
from .objects import CEREMONY_TYPES

__all__ = ["main"]


LOGGER = logging.getLogger("webauthn_objects.cli")


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webauthn-objects",
        description="Convert WebAuthn ceremony objects between renderings",
    )
    parser.add_argument("kind", choices=sorted(CEREMONY_TYPES), help="Ceremony object type")
    parser.add_argument(
        "input",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default="-",
        help="JSON document to read (defaults to stdin)",
    )
    parser.add_argument(
        "--form",
        choices=("packed", "websafe"),
        default="packed",
        help="packed: binary fields as hex; websafe: binary fields as base64url",
    )
    parser.add_argument("--indent", type=int, help="JSON indentation (negative for compact)")
    return parser


def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
    settings = load_settings()
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(settings.log_level)

    indent = settings.json_indent if args.indent is None else args.indent
    if indent is not None and indent < 0:
        indent = None
    stdout = stdout or sys.stdout

    wrapper_type = CEREMONY_TYPES[args.kind]
    with args.input as handle:
        text = handle.read()

    try:
        wrapper = wrapper_type.from_json(text)
    except json.JSONDecodeError as exc:
        LOGGER.error("Input is not valid JSON: %s", exc)
        return 1
    except CeremonyEncodingError as exc:
        LOGGER.error("Failed to convert %s: %s", args.kind, exc)
        return 1

    LOGGER.debug("Converted %s with fields %s", args.kind, ", ".join(wrapper.packed))

    if args.form == "websafe":
        output = json.dumps(wrapper.to_websafe(), indent=indent, ensure_ascii=False)
    else:
        output = wrapper.to_json(indent=indent)
    stdout.write(output + "\n")
    return 0


def run() -> None:
    sys.exit(main())
