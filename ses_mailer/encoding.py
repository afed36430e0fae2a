"""Text transforms used when serialising messages.

``quoted_printable`` implements the RFC 2045 quoted-printable transfer
encoding with soft line breaks at 76 columns.  Input is normalised first:
CR and CRLF become LF, runs of spaces collapse to a single space and NUL
bytes are removed.  Characters outside printable ASCII are written as
``=XX`` escapes of their UTF-8 octets, so the encoded text is always 7-bit.
"""

from __future__ import annotations

import re
from email.header import Header
from typing import List

QP_LINE_LENGTH = 76
CRLF = "\r\n"

_ESCAPE = "="
_TAG_RE = re.compile(r"<!--.*?-->|<[^>]*>", re.DOTALL)
_SPACES_RE = re.compile(r" {2,}")
_LINE_BREAK_RE = re.compile(r"[\r\n]+")


def strip_tags(html: str) -> str:
    """Remove markup tags and comments from ``html``."""
    return _TAG_RE.sub("", html or "")


def normalize_text(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _SPACES_RE.sub(" ", text)
    return text.replace("\x00", "")


def _escape(char: str) -> str:
    return "".join(f"{_ESCAPE}{octet:02X}" for octet in char.encode("utf-8"))


def _encode_char(char: str, is_last: bool) -> str:
    if char in (" ", "\t"):
        return _escape(char) if is_last else char
    if char == _ESCAPE or not (32 <= ord(char) <= 126):
        return _escape(char)
    return char


def quoted_printable(text: str, line_length: int = QP_LINE_LENGTH, crlf: str = CRLF) -> str:
    """Encode ``text`` as quoted-printable.

    Args:
        text: The text to encode.
        line_length: Requested maximum line length.  RFC 2045 caps encoded
            lines at 76 characters, so larger values are clamped.
        crlf: Line terminator used for hard and soft line breaks.

    Returns:
        The encoded text, without a trailing line terminator.
    """
    limit = min(line_length, QP_LINE_LENGTH) if line_length > 0 else QP_LINE_LENGTH
    output: List[str] = []
    for line in normalize_text(text).split("\n"):
        last = len(line) - 1
        buffer = ""
        for index, char in enumerate(line):
            encoded = _encode_char(char, index == last)
            # Leave room for the trailing "=" of a soft break.
            if len(buffer) + len(encoded) >= limit:
                output.append(buffer + _ESCAPE + crlf)
                buffer = ""
            buffer += encoded
        output.append(buffer + crlf)
    result = "".join(output)
    return result[: -len(crlf)] if crlf else result


def encode_header_value(value: str) -> str:
    """Return ``value`` ready for a MIME header.

    Line breaks are folded into a single space so the value stays on one
    header line.  Plain ASCII values are otherwise returned unchanged;
    anything else becomes an RFC 2047 UTF-8 encoded-word.
    """
    value = _LINE_BREAK_RE.sub(" ", value)
    if value.isascii():
        return value
    return Header(value, "utf-8").encode()


__all__ = [
    "QP_LINE_LENGTH",
    "CRLF",
    "strip_tags",
    "normalize_text",
    "quoted_printable",
    "encode_header_value",
]
