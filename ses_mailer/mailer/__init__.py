"""Abstract interface and the SES implementation for sending email.

This subpackage defines a common ``send_email`` interface along with the
concrete ``SESMailer`` that targets the Amazon SES HTTPS API.  Client code
that only needs one-shot delivery can depend on ``EmailSender`` without
knowing about the fluent builder underneath.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Union

from ses_mailer.transport import TransportResponse


class EmailSender(ABC):
    """Abstract base class for email senders.

    Implementations must provide a ``send_email`` method.  The arguments
    are those of a typical transactional email: a recipient address (or a
    list of them), the HTML body, an optional subject and an optional
    plain‑text alternative.
    """

    @abstractmethod
    def send_email(
        self,
        recipient: str,
        html: str,
        subject: str = "",
        text: Optional[str] = None,
    ) -> Union[bool, TransportResponse]:
        """Send a single email message.

        Args:
            recipient: The target email address.
            html: The HTML content of the message.
            subject: The email subject line.
            text: Optional plain‑text version.

        Returns:
            True when the message was handed to the provider, False
            otherwise.  Implementations with a debug mode may return the raw
            provider response instead.
        """
        raise NotImplementedError


__all__ = ["EmailSender"]
