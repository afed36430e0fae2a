"""Compose the form parameters posted to the SES query API.

Two actions are used for sending: ``SendEmail`` for formatted messages and
``SendRawEmail`` whenever the message carries attachments.  Composers are
pure functions of an :class:`~ses_mailer.message.OutgoingMessage`; the
transport takes care of form encoding.
"""

from __future__ import annotations

import base64
import re
from email.utils import encode_rfc2231
from typing import Dict, List

from ses_mailer.encoding import CRLF, encode_header_value, quoted_printable
from ses_mailer.message import Attachment, OutgoingMessage

Params = Dict[str, str]

_DESTINATION_PREFIXES = {
    "to": "Destination.ToAddresses.member",
    "cc": "Destination.CcAddresses.member",
    "bcc": "Destination.BccAddresses.member",
}

_UNSAFE_PARAM_RE = re.compile(r"[\"\\\r\n]")


def compose_send_email(message: OutgoingMessage) -> Params:
    """Return the ``SendEmail`` parameters for ``message``."""
    params: Params = {
        "Action": "SendEmail",
        "Source": message.source,
        "Message.Subject.Data": message.subject,
        "Message.Body.Text.Data": message.plain_text,
        "Message.Body.Html.Data": message.html_body,
    }

    for kind, prefix in _DESTINATION_PREFIXES.items():
        for index, address in enumerate(message.recipients.get(kind, []), start=1):
            params[f"{prefix}.{index}"] = address

    if message.effective_reply_to:
        params["ReplyToAddresses.member.1"] = message.effective_reply_to

    if message.charset:
        params["Message.Subject.Charset"] = message.charset
        params["Message.Body.Html.Charset"] = message.charset
        params["Message.Body.Text.Charset"] = message.charset

    return params


def _mime_param(name: str, value: str) -> str:
    """Return ``name="value"``, or the RFC 2231 ``name*=`` form when quoting can't carry it."""
    if value.isascii() and not _UNSAFE_PARAM_RE.search(value):
        return f'{name}="{value}"'
    return f"{name}*={encode_rfc2231(value, 'utf-8')}"


def _attachment_part(attachment: Attachment) -> List[str]:
    data = attachment.read_bytes()
    filename = attachment.filename
    encoded = base64.encodebytes(data).decode("ascii").rstrip("\n")
    return [
        f"Content-Type: {attachment.mime_type}; {_mime_param('name', filename)}",
        f"Content-Description: {encode_header_value(filename)}",
        f"Content-Disposition: attachment; {_mime_param('filename', filename)}; size={len(data)};",
        "Content-Transfer-Encoding: base64",
        "",
        encoded.replace("\n", CRLF),
        "",
    ]


def build_raw_message(message: OutgoingMessage, boundary: str) -> str:
    """Assemble the multipart/mixed MIME document for ``message``.

    Only headers are written for ``Cc`` and ``Bcc``; SES learns about API
    level destinations from the ``Destinations`` parameters instead.

    Raises:
        OSError: If an attachment can no longer be read.
    """
    to = message.recipients.get("to", [])
    cc = message.recipients.get("cc", [])
    bcc = message.recipients.get("bcc", [])

    sender_name = encode_header_value(message.sender_name) if message.sender_name else None
    lines: List[str] = [
        f"From: {sender_name} <{message.sender}>" if sender_name else f"From: {message.sender}",
        f"To: {', '.join(to)}",
        f"Subject: {encode_header_value(message.subject)}",
    ]
    if cc:
        lines.append(f"Cc: {', '.join(cc)}")
    if bcc:
        lines.append(f"Bcc: {', '.join(bcc)}")
    if message.effective_reply_to:
        lines.append(f"Reply-To: {message.effective_reply_to}")
    lines += [
        f'Content-Type: multipart/mixed; boundary="{boundary}"',
        "MIME-Version: 1.0",
        "",
        f"--{boundary}",
        'Content-Type: text/html; charset="UTF-8"',
        "Content-Transfer-Encoding: quoted-printable",
        "",
        quoted_printable(message.html_body),
        "",
    ]
    for attachment in message.attachments:
        lines.append(f"--{boundary}")
        lines += _attachment_part(attachment)
    lines.append(f"--{boundary}--")
    return CRLF.join(lines) + CRLF


def compose_send_raw_email(message: OutgoingMessage, boundary: str) -> Params:
    """Return the ``SendRawEmail`` parameters for ``message``.

    Only ``to`` recipients become indexed ``Destinations`` parameters.
    """
    params: Params = {
        "Action": "SendRawEmail",
        "Source": message.source,
    }
    for index, address in enumerate(message.recipients.get("to", []), start=1):
        params[f"Destinations.member.{index}"] = address

    raw = build_raw_message(message, boundary)
    params["RawMessage.Data"] = base64.b64encode(raw.encode("utf-8")).decode("ascii")
    return params


def compose(message: OutgoingMessage, boundary: str) -> Params:
    """Pick the raw composer when attachments are present."""
    if message.has_attachments:
        return compose_send_raw_email(message, boundary)
    return compose_send_email(message)


def verify_email_address(email: str) -> Params:
    return {"Action": "VerifyEmailAddress", "EmailAddress": email}


def list_verified_email_addresses() -> Params:
    return {"Action": "ListVerifiedEmailAddresses"}


__all__ = [
    "Params",
    "compose",
    "compose_send_email",
    "compose_send_raw_email",
    "build_raw_message",
    "verify_email_address",
    "list_verified_email_addresses",
]
