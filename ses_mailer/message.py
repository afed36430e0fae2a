"""Data model for an outgoing message.

``OutgoingMessage`` is the mutable state accumulated by the fluent
:class:`~ses_mailer.mailer.ses_sender.SESMailer` setters.  It is consumed by
the request composers in :mod:`ses_mailer.request`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from ses_mailer.addresses import RECIPIENT_KINDS, format_address
from ses_mailer.encoding import strip_tags
from ses_mailer.mime_types import mime_type_for


def _empty_recipients() -> Dict[str, List[str]]:
    return {kind: [] for kind in RECIPIENT_KINDS}


@dataclass(frozen=True)
class Attachment:
    """A file to be attached to a raw MIME message."""

    file_path: Path
    display_name: str
    file_extension: str
    mime_type: str

    @classmethod
    def from_path(cls, path: Union[str, Path], name: Optional[str] = None) -> "Attachment":
        """Describe the file at ``path``.

        Args:
            path: Location of the file on disk.
            name: Optional display name (without extension); defaults to the
                file's stem.

        Raises:
            FileNotFoundError: If ``path`` is not an existing file.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Attachment file not found: {path}")
        extension = file_path.suffix.lstrip(".").lower()
        return cls(
            file_path=file_path,
            display_name=name or file_path.stem,
            file_extension=extension,
            mime_type=mime_type_for(extension),
        )

    @property
    def filename(self) -> str:
        if self.file_extension:
            return f"{self.display_name}.{self.file_extension}"
        return self.display_name

    def read_bytes(self) -> bytes:
        return self.file_path.read_bytes()


@dataclass
class OutgoingMessage:
    """Sender, recipients, content and attachments of one email."""

    sender: str = ""
    sender_name: Optional[str] = None
    reply_to: Optional[str] = None
    recipients: Dict[str, List[str]] = field(default_factory=_empty_recipients)
    subject: str = ""
    html_body: str = ""
    text_body: Optional[str] = None
    charset: Optional[str] = None
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def source(self) -> str:
        """The ``Source`` value: ``"Name <addr>"`` or the bare address."""
        return format_address(self.sender, self.sender_name)

    @property
    def effective_reply_to(self) -> str:
        return self.reply_to or self.sender

    @property
    def plain_text(self) -> str:
        """The explicit plain-text body, or the HTML body without markup."""
        if self.text_body:
            return self.text_body
        return strip_tags(self.html_body)

    @property
    def has_attachments(self) -> bool:
        return bool(self.attachments)

    def clear(self) -> None:
        """Forget recipients, content and attachments; keep sender settings."""
        self.recipients = _empty_recipients()
        self.subject = ""
        self.html_body = ""
        self.text_body = None
        self.attachments = []


__all__ = ["Attachment", "OutgoingMessage"]
