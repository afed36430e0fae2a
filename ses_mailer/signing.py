"""Request authentication for the SES query API (``AWS3-HTTPS`` scheme).

Every request carries a ``Date`` header; the signature is the base64 encoded
HMAC-SHA256 digest of that header value keyed with the secret access key.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from email.utils import formatdate
from typing import Dict, Optional

from ses_mailer.config import DEFAULT_REGION

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def endpoint_for(region: str = DEFAULT_REGION) -> str:
    """Return the SES endpoint URL for ``region``."""
    return f"https://email.{region or DEFAULT_REGION}.amazonaws.com"


def rfc822_date(timestamp: Optional[float] = None) -> str:
    """Format ``timestamp`` (now by default) as an RFC 822 date in GMT."""
    return formatdate(timeval=timestamp, usegmt=True)


def sign(date: str, secret_key: str) -> str:
    digest = hmac.new(secret_key.encode("utf-8"), date.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(access_key: str, signature: str) -> str:
    return (
        f"AWS3-HTTPS AWSAccessKeyId={access_key}, "
        f"Algorithm=HmacSHA256, Signature={signature}"
    )


def build_headers(access_key: str, secret_key: str, date: Optional[str] = None) -> Dict[str, str]:
    """Return the ``Content-Type``, ``Date`` and ``X-Amzn-Authorization`` headers.

    Args:
        access_key: AWS access key id.
        secret_key: AWS secret access key used to sign ``date``.
        date: Pre-formatted date header; the current time when omitted.
    """
    date = date or rfc822_date()
    return {
        "Content-Type": FORM_CONTENT_TYPE,
        "Date": date,
        "X-Amzn-Authorization": authorization_header(access_key, sign(date, secret_key)),
    }


__all__ = [
    "FORM_CONTENT_TYPE",
    "endpoint_for",
    "rfc822_date",
    "sign",
    "authorization_header",
    "build_headers",
]
