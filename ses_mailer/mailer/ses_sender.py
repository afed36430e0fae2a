"""Amazon SES email sender implementation.

This module defines ``SESMailer``, a fluent message builder that submits
mail through the Amazon Simple Email Service HTTPS query API.  Messages
without attachments are sent with the ``SendEmail`` action; as soon as a
file is attached the message is serialised as a multipart MIME document and
sent with ``SendRawEmail``.

Typical use::

    mailer = SESMailer(SESConfig.from_env())
    mailer.to("a@example.com, b@example.com").subject("Hi").message("<p>hi</p>")
    mailer.send()

Invalid addresses are logged and dropped rather than raised, and transport
failures are reported as ``False``.  A mailer instance holds the state of a
single message and must not be shared between threads.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ses_mailer.addresses import (
    AddressInput,
    RecipientKind,
    expand_addresses,
    is_recipient_kind,
    normalize_email,
)
from ses_mailer.config import SESConfig
from ses_mailer.mailer import EmailSender
from ses_mailer.message import Attachment, OutgoingMessage
from ses_mailer.request import (
    Params,
    compose,
    list_verified_email_addresses,
    verify_email_address,
)
from ses_mailer.signing import build_headers, endpoint_for
from ses_mailer.transport import (
    HTTPTransport,
    RequestsTransport,
    TransportError,
    TransportResponse,
)

LOGGER = logging.getLogger(__name__)

Outcome = Union[bool, TransportResponse]


class SESMailer(EmailSender):
    """SES implementation of the ``EmailSender`` interface."""

    def __init__(
        self,
        config: Optional[SESConfig] = None,
        transport: Optional[HTTPTransport] = None,
    ) -> None:
        self.config = config or SESConfig.from_env()
        self.config.validate()
        self.transport = transport or RequestsTransport()
        self.debug_mode = False
        self.outgoing = OutgoingMessage(
            sender=self.config.sender,
            sender_name=self.config.sender_name,
            reply_to=self.config.reply_to,
            charset=self.config.charset,
        )
        LOGGER.debug("SES mailer initialised for region %s", self.config.region)

    # ------------------------------------------------------------------
    # Builder
    # ------------------------------------------------------------------
    def sender(self, address: str, name: Optional[str] = None) -> "SESMailer":
        """Set the from address and, optionally, its display name."""
        normalized = normalize_email(address)
        if normalized:
            self.outgoing.sender = normalized
            if name is not None:
                self.outgoing.sender_name = name or None
        else:
            LOGGER.warning("From address %r is not valid", address)
        return self

    def reply_to(self, address: str) -> "SESMailer":
        normalized = normalize_email(address)
        if normalized:
            self.outgoing.reply_to = normalized
        else:
            LOGGER.warning("Reply-to address %r is not valid", address)
        return self

    def to(self, value: AddressInput) -> "SESMailer":
        return self.add_recipient(value, "to")

    def cc(self, value: AddressInput) -> "SESMailer":
        return self.add_recipient(value, "cc")

    def bcc(self, value: AddressInput) -> "SESMailer":
        return self.add_recipient(value, "bcc")

    def add_recipient(self, value: AddressInput, kind: RecipientKind) -> "SESMailer":
        """Add one or more recipients of the given kind.

        Args:
            value: A single address, a ``", "``-separated list, or a
                sequence of addresses.  List elements are added one by one.
            kind: One of ``to``, ``cc`` or ``bcc``.

        Addresses are stored without surrounding whitespace.  Invalid
        addresses, display-name forms and unknown kinds are logged and
        ignored; valid siblings in the same list are still added.
        """
        if not is_recipient_kind(kind):
            LOGGER.warning("Unknown recipient type %r", kind)
            return self

        addresses = expand_addresses(value)
        if addresses is not None:
            for address in addresses:
                self.add_recipient(address, kind)
            return self

        normalized = normalize_email(value)
        if normalized:
            self.outgoing.recipients[kind].append(normalized)
        else:
            LOGGER.warning("The %s address %r is not valid", kind, value)
        return self

    def subject(self, subject: str) -> "SESMailer":
        self.outgoing.subject = subject
        return self

    def message(self, html: str) -> "SESMailer":
        """Set the HTML body."""
        self.outgoing.html_body = html
        return self

    def message_alt(self, text: str) -> "SESMailer":
        """Set the plain-text alternative shown by clients without HTML support."""
        self.outgoing.text_body = text
        return self

    def charset(self, charset: Optional[str]) -> "SESMailer":
        self.outgoing.charset = charset or None
        return self

    def attach(self, path: Union[str, Path], name: Optional[str] = None) -> bool:
        """Attach the file at ``path``.

        Args:
            path: File to attach; it must exist now.
            name: Optional display name without extension.

        Returns:
            True when the file was attached, False when it does not exist.
        """
        try:
            attachment = Attachment.from_path(path, name)
        except FileNotFoundError:
            LOGGER.warning("Attachment %s does not exist", path)
            return False
        self.outgoing.attachments.append(attachment)
        return True

    def clear(self) -> "SESMailer":
        self.outgoing.clear()
        return self

    def debug(self, enabled: bool = True) -> "SESMailer":
        """Make send and verify calls return the raw response instead of a bool."""
        self.debug_mode = enabled
        return self

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def send(self, destroy: bool = True) -> Outcome:
        """Send the composed message.

        Args:
            destroy: Clear recipients, content and attachments after a
                successful send.

        Returns:
            True on success and False on failure; the raw response in debug
            mode.
        """
        if not self.config.access_key or not self.config.secret_key:
            LOGGER.warning("Sending without AWS credentials configured")
        try:
            params = compose(self.outgoing, self.config.mime_boundary)
        except OSError as exc:
            LOGGER.error("Email could not be composed: %s", exc)
            return False

        outcome = self._dispatch(params)
        if self.debug_mode:
            return outcome
        if outcome is False:
            LOGGER.error("Email could not be sent")
            return False
        if destroy:
            self.outgoing.clear()
        return True

    def send_email(
        self,
        recipient: str,
        html: str,
        subject: str = "",
        text: Optional[str] = None,
    ) -> Outcome:
        """Send a one-off message using the configured sender."""
        self.outgoing.clear()
        self.to(recipient).subject(subject).message(html)
        if text:
            self.message_alt(text)
        return self.send()

    def verify_address(self, email: str) -> Outcome:
        """Ask SES to send a verification email to ``email``."""
        outcome = self._dispatch(verify_email_address(email))
        if outcome is False:
            LOGGER.error("Email verification request failed")
        return outcome if self.debug_mode else outcome is not False

    def address_is_verified(self, email: str) -> Outcome:
        """Return True if ``email`` is listed among the verified addresses."""
        outcome = self._dispatch(list_verified_email_addresses())
        if self.debug_mode or outcome is False:
            return outcome
        # A plain substring check is enough to find the address in the XML.
        return email in outcome.body

    def _dispatch(self, params: Params) -> Union[TransportResponse, bool]:
        headers = build_headers(self.config.access_key, self.config.secret_key)
        url = endpoint_for(self.config.region)
        try:
            response = self.transport.post(
                url,
                params,
                headers,
                verify=self.config.verify,
                fail_on_error=not self.debug_mode,
                timeout=self.config.timeout,
            )
        except TransportError as exc:
            LOGGER.error("%s request to %s failed: %s", params.get("Action"), url, exc)
            return False
        LOGGER.debug("%s request to %s returned %s", params.get("Action"), url, response.status_code)
        return response


__all__ = ["SESMailer"]
