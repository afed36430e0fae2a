"""Configuration for the SES mailer.

Settings are read once from environment variables and are treated as
read-only afterwards.  Variables used:

* ``AMAZON_SES_ACCESS_KEY`` / ``AMAZON_SES_SECRET_KEY`` – AWS credentials
* ``AMAZON_SES_FROM`` / ``AMAZON_SES_FROM_NAME`` – default sender
* ``AMAZON_SES_REPLY_TO`` – default reply-to; the sender when omitted
* ``AMAZON_SES_CERT_PATH`` – CA bundle used to verify the SES endpoint
* ``AMAZON_SES_CHARSET`` – charset announced for subject and bodies
* ``AMAZON_SES_REGION`` – SES region, ``us-east-1`` by default
* ``AMAZON_SES_MIME_BOUNDARY`` – boundary token for raw MIME messages
* ``AMAZON_SES_TIMEOUT`` – request timeout in seconds
* ``HTTPS`` – set by the hosting environment when TLS is terminated upstream
"""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Union

DEFAULT_REGION = "us-east-1"
DEFAULT_TIMEOUT = 10.0


class ConfigurationError(ValueError):
    """Raised when the mailer cannot be set up from its configuration."""


def _to_bool(value: str, *, default: bool = False) -> bool:
    lowered = value.strip().lower()
    if not lowered:
        return default
    return lowered in {"on", "1", "true", "yes"}


def _new_boundary() -> str:
    return f"ses-mailer-{uuid.uuid4().hex}"


@dataclass(frozen=True)
class SESConfig:
    """Read-only settings consumed by :class:`~ses_mailer.mailer.ses_sender.SESMailer`."""

    access_key: str = ""
    secret_key: str = ""
    sender: str = ""
    sender_name: Optional[str] = None
    reply_to: Optional[str] = None
    cert_path: str = ""
    charset: Optional[str] = None
    region: str = DEFAULT_REGION
    mime_boundary: str = field(default_factory=_new_boundary)
    timeout: float = DEFAULT_TIMEOUT
    upstream_tls: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SESConfig":
        """Build a configuration from ``environ`` (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        raw_timeout = env.get("AMAZON_SES_TIMEOUT") or str(DEFAULT_TIMEOUT)
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"AMAZON_SES_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from exc
        return cls(
            access_key=env.get("AMAZON_SES_ACCESS_KEY", ""),
            secret_key=env.get("AMAZON_SES_SECRET_KEY", ""),
            sender=env.get("AMAZON_SES_FROM", ""),
            sender_name=env.get("AMAZON_SES_FROM_NAME") or None,
            reply_to=env.get("AMAZON_SES_REPLY_TO") or None,
            cert_path=env.get("AMAZON_SES_CERT_PATH", ""),
            charset=env.get("AMAZON_SES_CHARSET") or None,
            region=env.get("AMAZON_SES_REGION") or DEFAULT_REGION,
            mime_boundary=env.get("AMAZON_SES_MIME_BOUNDARY") or _new_boundary(),
            timeout=timeout,
            upstream_tls=_to_bool(env.get("HTTPS", "")),
        )

    @property
    def verify(self) -> Union[str, bool]:
        """Value handed to the transport for TLS certificate verification."""
        if self.upstream_tls:
            return True
        return self.cert_path

    def validate(self) -> None:
        """Check the settings that make the mailer unusable when wrong.

        Raises:
            ConfigurationError: If no CA bundle is available while the
                endpoint certificate has to be verified locally.
        """
        if self.upstream_tls:
            return
        if not self.cert_path or not Path(self.cert_path).is_file():
            raise ConfigurationError(
                "CA root certificates not found at "
                f"{self.cert_path or '<unset>'!s}; download a bundle of public "
                "root certificates (e.g. https://curl.se/ca/cacert.pem) and "
                "point AMAZON_SES_CERT_PATH at it"
            )


__all__ = ["SESConfig", "ConfigurationError", "DEFAULT_REGION", "DEFAULT_TIMEOUT"]
