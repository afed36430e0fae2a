import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ses_mailer.config import SESConfig
from ses_mailer.mailer.ses_sender import SESMailer
from ses_mailer.transport import HTTPTransport, TransportError, TransportResponse


class FakeTransport(HTTPTransport):
    """Records every request and replays a canned response."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.response = TransportResponse(
            status_code=200,
            body="<SendEmailResponse><MessageId>m1</MessageId></SendEmailResponse>",
            headers={"x-amzn-RequestId": "r1"},
        )
        self.error: Optional[TransportError] = None

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
        self.calls.append(
            {
                "url": url,
                "data": dict(data),
                "headers": dict(headers),
                "verify": verify,
                "fail_on_error": fail_on_error,
                "timeout": timeout,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def cert_file(tmp_path: Path) -> Path:
    path = tmp_path / "cacert.pem"
    path.write_text("-----BEGIN CERTIFICATE-----\n", encoding="ascii")
    return path


@pytest.fixture
def config(cert_file: Path) -> SESConfig:
    return SESConfig(
        access_key="AKIDEXAMPLE",
        secret_key="secret",
        sender="sender@example.com",
        cert_path=str(cert_file),
        mime_boundary="test-boundary",
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def mailer(config: SESConfig, transport: FakeTransport) -> SESMailer:
    return SESMailer(config, transport)
