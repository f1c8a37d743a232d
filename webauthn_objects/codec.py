"""Byte codecs shared by the packed and unpacked ceremony renderings."""
from __future__ import annotations

import re
from typing import Any, Callable, NamedTuple, Optional

from fido2.utils import ByteBuffer

__all__ = [
    "CHAR_CODE",
    "CeremonyEncodingError",
    "Codec",
    "HEX",
    "coerce_bytes",
    "is_packed",
    "pack_byte_array",
    "pack_string",
    "unpack_byte_array",
    "unpack_string",
]


_HEX_PATTERN = re.compile(r"(?:[0-9a-fA-F]{2})*")

_BYTES_LIKE = (bytes, bytearray, memoryview, ByteBuffer)


class CeremonyEncodingError(ValueError):
    """Raised when a binary-bearing field cannot be converted between forms."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


def is_packed(value: Any) -> bool:
    """Return ``True`` unless ``value`` is already a byte sequence.

    This is the only place deciding which way a binary field is converted.
    Anything that is not bytes-like is assumed to be packed text; values that
    turn out not to be text are rejected when they are unpacked.
    """

    return not isinstance(value, _BYTES_LIKE)


def coerce_bytes(value: Any) -> bytes:
    """Return a bytes-like ``value`` as an immutable ``bytes`` copy."""

    if isinstance(value, ByteBuffer):
        return value.getvalue()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise CeremonyEncodingError(
        f"Expected a byte sequence, got {type(value).__name__}."
    )


def _require_text(value: Any, codec: str) -> str:
    if not isinstance(value, str):
        raise CeremonyEncodingError(
            f"Cannot {codec}-decode a {type(value).__name__} value; expected text."
        )
    return value


def pack_byte_array(data: Any) -> str:
    """Render ``data`` as lowercase hex, two digits per byte, no separators."""

    return coerce_bytes(data).hex()


def unpack_byte_array(text: Any) -> bytes:
    """Parse consecutive two-digit hex groups of ``text`` into bytes."""

    text = _require_text(text, "hex")
    if len(text) % 2:
        raise CeremonyEncodingError(f"Hex string has odd length ({len(text)}).")
    if not _HEX_PATTERN.fullmatch(text):
        raise CeremonyEncodingError(f"Hex string contains non-hex characters: {text!r}")
    return bytes.fromhex(text)


def pack_string(data: Any) -> str:
    """Render each byte of ``data`` as the character with that code point."""

    return coerce_bytes(data).decode("latin-1")


def unpack_string(text: Any) -> bytes:
    """Return one byte per character of ``text`` (code point modulo 256)."""

    text = _require_text(text, "character-code")
    return bytes(ord(char) & 0xFF for char in text)


class Codec(NamedTuple):
    """A pair of conversions between bytes and their packed text form."""

    name: str
    pack: Callable[[Any], str]
    unpack: Callable[[Any], bytes]


HEX = Codec("hex", pack_byte_array, unpack_byte_array)
CHAR_CODE = Codec("char-code", pack_string, unpack_string)
