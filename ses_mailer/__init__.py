"""Top‑level package for the ses_mailer library.

This package composes email messages and submits them to the Amazon Simple
Email Service (SES) HTTPS query API.  Individual modules handle specific
concerns such as address validation, request composition, MIME encoding,
request signing and the HTTP transport.  The fluent ``SESMailer`` front end
lives in the ``mailer`` subpackage.

The ``__all__`` variable enumerates the primary public modules for
convenience when using ``from ses_mailer import ...``.
"""

from __future__ import annotations

__all__ = [
    "addresses",
    "config",
    "encoding",
    "mailer",
    "message",
    "mime_types",
    "request",
    "signing",
    "transport",
]

# SemVer version of the package
__version__: str = "0.1.0"
