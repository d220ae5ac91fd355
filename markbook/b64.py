"""Base64 encoding and lenient decoding, with PEM and MIME line wrapping."""

from __future__ import annotations

import base64

__all__ = [
    "InvalidBase64Error",
    "encode",
    "encode_pem",
    "encode_mime",
    "decode",
]

_STANDARD_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ" "abcdefghijklmnopqrstuvwxyz" "0123456789" "+/"
)
_URL_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ" "abcdefghijklmnopqrstuvwxyz" "0123456789" "-_"
)

# Both alphabets are accepted when decoding.
_POSITIONS = {
    **{char: index for index, char in enumerate(_STANDARD_ALPHABET)},
    **{char: index for index, char in enumerate(_URL_ALPHABET)},
}
_PADDING = frozenset("=.")

_PEM_LINE_LENGTH = 64
_MIME_LINE_LENGTH = 76


class InvalidBase64Error(ValueError):
    """Raised when text is not valid base64-encoded data."""


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def encode(data: bytes | bytearray | memoryview | str, url: bool = False) -> str:
    """Encode data as base64.

    With ``url`` set, the URL-safe alphabet is used and padding is written
    as ``.`` instead of ``=``.
    """
    raw = _as_bytes(data)
    if url:
        return base64.urlsafe_b64encode(raw).decode("ascii").replace("=", ".")
    return base64.b64encode(raw).decode("ascii")


def _insert_linebreaks(text: str, distance: int) -> str:
    return "\n".join(text[start:start + distance] for start in range(0, len(text), distance))


def encode_pem(data: bytes | bytearray | memoryview | str) -> str:
    """Encode data as base64 wrapped at 64 characters per line."""
    return _insert_linebreaks(encode(data), _PEM_LINE_LENGTH)


def encode_mime(data: bytes | bytearray | memoryview | str) -> str:
    """Encode data as base64 wrapped at 76 characters per line."""
    return _insert_linebreaks(encode(data), _MIME_LINE_LENGTH)


def _position(char: str) -> int:
    try:
        return _POSITIONS[char]
    except KeyError:
        raise InvalidBase64Error("Input is not valid base64-encoded data.") from None


def decode(text: str, remove_linebreaks: bool = False) -> bytes:
    """Decode base64 text.

    Either alphabet is accepted, padding may be ``=``, ``.`` or left out.
    With ``remove_linebreaks`` set, newline characters are dropped first.
    """
    if not text:
        return b""
    if remove_linebreaks:
        text = text.replace("\n", "")

    out = bytearray()
    for start in range(0, len(text), 4):
        chunk = text[start:start + 4]
        if len(chunk) < 2:
            raise InvalidBase64Error("Input is not valid base64-encoded data.")
        first = _position(chunk[0])
        second = _position(chunk[1])
        out.append(((first << 2) + ((second & 0x30) >> 4)) & 0xFF)

        if len(chunk) > 2 and chunk[2] not in _PADDING:
            third = _position(chunk[2])
            out.append(((second & 0x0F) << 4) + ((third & 0x3C) >> 2))

            if len(chunk) > 3 and chunk[3] not in _PADDING:
                out.append(((third & 0x03) << 6) + _position(chunk[3]))

    return bytes(out)