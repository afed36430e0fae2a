"""HTTP transport used to reach the SES endpoint.

The mailer only depends on the small :class:`HTTPTransport` interface so
tests (or hosting applications) can supply their own implementation.  The
default :class:`RequestsTransport` posts form data with ``requests``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Mapping, Union

import requests


class TransportError(RuntimeError):
    """Raised when a request could not be completed."""


@dataclass(frozen=True)
class TransportResponse:
    """Status line, headers and body of a completed request."""

    status_code: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def __str__(self) -> str:
        head = [f"HTTP {self.status_code}"]
        head += [f"{name}: {value}" for name, value in self.headers.items()]
        return "\n".join(head) + "\n\n" + self.body


class HTTPTransport(ABC):
    """Abstract interface for posting form-encoded requests."""

    @abstractmethod
    def post(
        self,
        url: str,
        data: Mapping[str, str],
        headers: Mapping[str, str],
        *,
        verify: Union[str, bool] = True,
        fail_on_error: bool = True,
        timeout: float = 10.0,
    ) -> TransportResponse:
        """POST ``data`` form-encoded to ``url``.

        Args:
            url: Target URL.
            data: Form parameters.
            headers: Extra request headers.
            verify: CA bundle path, or True for the default trust store.
            fail_on_error: Treat non-2xx responses as failures.
            timeout: Seconds to wait for the server.

        Raises:
            TransportError: On network or TLS failures, and on HTTP error
                statuses when ``fail_on_error`` is set.
        """
        raise NotImplementedError


class RequestsTransport(HTTPTransport):
    """``requests`` implementation of the ``HTTPTransport`` interface."""

    def post(
        self,
        url: str,
        data: Mapping[str, str],
        headers: Mapping[str, str],
        *,
        verify: Union[str, bool] = True,
        fail_on_error: bool = True,
        timeout: float = 10.0,
    ) -> TransportResponse:
        try:
            response = requests.post(
                url,
                data=dict(data),
                headers=dict(headers),
                verify=verify,
                timeout=timeout,
            )
            if fail_on_error:
                response.raise_for_status()
        except requests.RequestException as exc:
            raise TransportError(f"POST {url} failed: {exc}") from exc

        return TransportResponse(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )


__all__ = ["HTTPTransport", "RequestsTransport", "TransportResponse", "TransportError"]
