"""Email address helpers.

Syntax validation is delegated to pydantic's ``EmailStr`` type (backed by
the ``email-validator`` package).  The helpers here also recognise the two
list forms accepted by the recipient setters: a sequence of addresses and a
``", "``-separated string.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Sequence, Union

from pydantic import EmailStr, TypeAdapter, ValidationError

RecipientKind = Literal["to", "cc", "bcc"]

RECIPIENT_KINDS: tuple[str, ...] = ("to", "cc", "bcc")
LIST_SEPARATOR = ", "

AddressInput = Union[str, Sequence[str]]

_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)


def normalize_email(value: object) -> Optional[str]:
    """Return the bare address in ``value``, or None if it is not one.

    Surrounding whitespace is dropped.  The ``Name <addr>`` form is refused;
    SES destinations must be bare addresses.
    """
    if not isinstance(value, str):
        return None
    address = value.strip()
    if not address or "<" in address or ">" in address:
        return None
    try:
        _EMAIL_ADAPTER.validate_python(address)
    except ValidationError:
        return None
    return address


def is_valid_email(value: object) -> bool:
    """Return True if ``value`` is a syntactically valid bare email address."""
    return normalize_email(value) is not None


def is_recipient_kind(kind: object) -> bool:
    return kind in RECIPIENT_KINDS


def expand_addresses(value: AddressInput) -> Optional[List[str]]:
    """Split a list-like address value into its elements.

    Args:
        value: A single address, a ``", "``-separated list or a sequence.

    Returns:
        The individual elements when ``value`` is a list form, or ``None``
        when it should be treated as a single address.
    """
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str) and LIST_SEPARATOR in value:
        return value.split(LIST_SEPARATOR)
    return None


def format_address(address: str, name: Optional[str] = None) -> str:
    """Return ``"Name <address>"`` when a display name is set."""
    if name:
        return f"{name} <{address}>"
    return address


__all__ = [
    "RecipientKind",
    "RECIPIENT_KINDS",
    "LIST_SEPARATOR",
    "AddressInput",
    "normalize_email",
    "is_valid_email",
    "is_recipient_kind",
    "expand_addresses",
    "format_address",
]
