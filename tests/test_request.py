import base64
import email
import email.header
import email.utils
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ses_mailer.message import Attachment, OutgoingMessage
from ses_mailer.request import (
    build_raw_message,
    compose,
    compose_send_email,
    compose_send_raw_email,
    list_verified_email_addresses,
    verify_email_address,
)

BOUNDARY = "test-boundary"


def _message(**overrides: object) -> OutgoingMessage:
    message = OutgoingMessage(sender="a@x.com", subject="Hi", html_body="<p>hi</p>")
    message.recipients["to"].append("b@y.com")
    for key, value in overrides.items():
        setattr(message, key, value)
    return message


def _attachment(tmp_path: Path, name: str = "report.pdf", data: bytes = b"%PDF-1.4") -> Attachment:
    path = tmp_path / name
    path.write_bytes(data)
    return Attachment.from_path(path)


def test_simple_request_strips_tags_for_text_body() -> None:
    params = compose_send_email(_message())
    assert params["Action"] == "SendEmail"
    assert params["Source"] == "a@x.com"
    assert params["Message.Subject.Data"] == "Hi"
    assert params["Message.Body.Html.Data"] == "<p>hi</p>"
    assert params["Message.Body.Text.Data"] == "hi"
    assert params["Destination.ToAddresses.member.1"] == "b@y.com"


def test_simple_request_uses_explicit_text_body_and_display_name() -> None:
    params = compose_send_email(_message(text_body="plain hi", sender_name="Alice"))
    assert params["Message.Body.Text.Data"] == "plain hi"
    assert params["Source"] == "Alice <a@x.com>"


def test_simple_request_indexes_every_recipient_class() -> None:
    message = _message()
    message.recipients["to"].append("c@y.com")
    message.recipients["cc"] += ["d@y.com", "e@y.com"]
    message.recipients["bcc"].append("f@y.com")
    params = compose_send_email(message)
    assert params["Destination.ToAddresses.member.2"] == "c@y.com"
    assert params["Destination.CcAddresses.member.1"] == "d@y.com"
    assert params["Destination.CcAddresses.member.2"] == "e@y.com"
    assert params["Destination.BccAddresses.member.1"] == "f@y.com"


def test_reply_to_defaults_to_sender() -> None:
    assert compose_send_email(_message())["ReplyToAddresses.member.1"] == "a@x.com"
    params = compose_send_email(_message(reply_to="r@x.com"))
    assert params["ReplyToAddresses.member.1"] == "r@x.com"


def test_charset_parameters_only_when_configured() -> None:
    assert not [key for key in compose_send_email(_message()) if key.endswith(".Charset")]
    params = compose_send_email(_message(charset="ISO-8859-1"))
    assert params["Message.Subject.Charset"] == "ISO-8859-1"
    assert params["Message.Body.Html.Charset"] == "ISO-8859-1"
    assert params["Message.Body.Text.Charset"] == "ISO-8859-1"


def test_raw_request_only_lists_to_recipients_as_destinations(tmp_path: Path) -> None:
    message = _message(attachments=[_attachment(tmp_path)])
    message.recipients["cc"].append("c@y.com")
    message.recipients["bcc"].append("d@y.com")
    params = compose_send_raw_email(message, BOUNDARY)

    assert params["Action"] == "SendRawEmail"
    assert params["Source"] == "a@x.com"
    assert params["Destinations.member.1"] == "b@y.com"
    assert "Destinations.member.2" not in params

    raw = base64.b64decode(params["RawMessage.Data"]).decode("utf-8")
    assert "\r\nCc: c@y.com\r\n" in raw
    assert "\r\nBcc: d@y.com\r\n" in raw
    assert "\r\nReply-To: a@x.com\r\n" in raw


def test_raw_message_structure(tmp_path: Path) -> None:
    data = b"%PDF-1.4 binary \x00\xff payload"
    message = _message(
        html_body="<p>a=b</p>",
        attachments=[_attachment(tmp_path, "report.PDF", data)],
    )
    raw = build_raw_message(message, BOUNDARY)

    assert raw.count(f"--{BOUNDARY}\r\n") == 2
    assert raw.endswith(f"--{BOUNDARY}--\r\n")
    assert 'Content-Type: multipart/mixed; boundary="test-boundary"' in raw
    assert "MIME-Version: 1.0" in raw
    assert f'filename="report.pdf"; size={len(data)};' in raw

    parsed = email.message_from_string(raw)
    assert parsed.is_multipart()
    assert parsed["To"] == "b@y.com"
    assert parsed["Subject"] == "Hi"
    assert parsed["Cc"] is None

    html_part, file_part = parsed.get_payload()
    assert html_part.get_content_type() == "text/html"
    assert html_part["Content-Transfer-Encoding"] == "quoted-printable"
    assert html_part.get_payload(decode=True).decode("utf-8").strip() == "<p>a=b</p>"

    assert file_part.get_content_type() == "application/pdf"
    assert file_part.get_filename() == "report.pdf"
    assert file_part.get_payload(decode=True) == data


def test_raw_message_encodes_non_ascii_subject(tmp_path: Path) -> None:
    message = _message(subject="Grüße", attachments=[_attachment(tmp_path)])
    raw = build_raw_message(message, BOUNDARY)
    assert raw.isascii()
    subject = email.message_from_string(raw)["Subject"]
    decoded = email.header.make_header(email.header.decode_header(subject))
    assert str(decoded) == "Grüße"


def test_raw_message_from_header_uses_display_name(tmp_path: Path) -> None:
    message = _message(sender_name="Alice", attachments=[_attachment(tmp_path)])
    raw = build_raw_message(message, BOUNDARY)
    assert raw.startswith("From: Alice <a@x.com>\r\nTo: b@y.com\r\n")


def test_unreadable_attachment_raises(tmp_path: Path) -> None:
    attachment = _attachment(tmp_path)
    attachment.file_path.unlink()
    with pytest.raises(OSError):
        build_raw_message(_message(attachments=[attachment]), BOUNDARY)


def test_compose_selects_raw_path_with_attachments(tmp_path: Path) -> None:
    assert compose(_message(), BOUNDARY)["Action"] == "SendEmail"
    with_file = _message(attachments=[_attachment(tmp_path)])
    assert compose(with_file, BOUNDARY)["Action"] == "SendRawEmail"


def test_verification_parameters() -> None:
    assert verify_email_address("a@x.com") == {
        "Action": "VerifyEmailAddress",
        "EmailAddress": "a@x.com",
    }
    assert list_verified_email_addresses() == {"Action": "ListVerifiedEmailAddresses"}


def test_raw_message_subject_cannot_add_headers(tmp_path: Path) -> None:
    message = _message(
        subject="Hi\r\nBcc: evil@attacker.com",
        sender_name="Alice\nX-Injected: 1",
        attachments=[_attachment(tmp_path)],
    )
    raw = build_raw_message(message, BOUNDARY)
    assert "\r\nBcc:" not in raw
    assert "\nX-Injected:" not in raw

    parsed = email.message_from_string(raw)
    assert parsed["Bcc"] is None
    assert parsed["X-Injected"] is None
    assert parsed["Subject"] == "Hi Bcc: evil@attacker.com"


def test_non_ascii_attachment_name_uses_rfc2231(tmp_path: Path) -> None:
    message = _message(attachments=[_attachment(tmp_path, "résumé.pdf")])
    raw = build_raw_message(message, BOUNDARY)
    assert raw.isascii()
    assert "name*=utf-8''r%C3%A9sum%C3%A9.pdf" in raw
    assert "filename*=utf-8''r%C3%A9sum%C3%A9.pdf" in raw
    assert "=?utf-8?" not in raw.split("Content-Disposition:")[1].split("\r\n")[0]

    _, file_part = email.message_from_string(raw).get_payload()
    assert file_part.get_filename() == "résumé.pdf"
    assert email.utils.collapse_rfc2231_value(file_part.get_param("name")) == "résumé.pdf"
