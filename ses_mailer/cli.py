"""Command-line interface for ses_mailer.

Configuration is taken from the ``AMAZON_SES_*`` environment variables
described in :mod:`ses_mailer.config`.

Usage:
    ses-mailer verify sender@example.com
    ses-mailer is-verified sender@example.com
    ses-mailer send --to a@example.com --subject "Hi" --html "<p>hi</p>"
    ses-mailer --debug send --to a@example.com --subject "Report" \\
        --html report.html --attach report.pdf
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Tuple

import click

from ses_mailer.config import ConfigurationError, SESConfig
from ses_mailer.mailer.ses_sender import SESMailer


def _build_mailer(debug: bool) -> SESMailer:
    try:
        mailer = SESMailer(SESConfig.from_env())
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)
    return mailer.debug(debug)


def _read_html(value: str) -> str:
    """Return the contents of ``value`` when it names a file, else ``value``."""
    path = Path(value)
    if len(value) < 256 and path.is_file():
        return path.read_text(encoding="utf-8")
    return value


def _report(outcome: object, success: str, failure: str) -> None:
    if outcome is True:
        click.echo(success)
        return
    if outcome is False:
        click.echo(failure, err=True)
        sys.exit(1)
    # Debug mode: dump the raw response.
    click.echo(str(outcome))


@click.group()
@click.version_option(package_name="ses-mailer")
@click.option("--debug", is_flag=True, help="Print the raw SES response.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, debug: bool, verbose: bool) -> None:
    """Send email and manage verified senders through Amazon SES."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@main.command("verify")
@click.argument("email")
@click.pass_context
def verify(ctx: click.Context, email: str) -> None:
    """Ask SES to send a verification message to EMAIL."""
    mailer = _build_mailer(ctx.obj["debug"])
    _report(
        mailer.verify_address(email),
        f"Verification requested for {email}",
        "Verification request failed",
    )


@main.command("is-verified")
@click.argument("email")
@click.pass_context
def is_verified(ctx: click.Context, email: str) -> None:
    """Exit with status 0 when EMAIL is a verified sender."""
    mailer = _build_mailer(ctx.obj["debug"])
    _report(
        mailer.address_is_verified(email),
        f"{email} is verified",
        f"{email} is not verified",
    )


@main.command("send")
@click.option("--to", "to", multiple=True, required=True, help="Recipient (repeatable).")
@click.option("--cc", "cc", multiple=True, help="Carbon copy recipient (repeatable).")
@click.option("--bcc", "bcc", multiple=True, help="Blind carbon copy recipient (repeatable).")
@click.option("--from", "sender", default=None, help="Sender address.")
@click.option("--from-name", default=None, help="Sender display name.")
@click.option("--reply-to", default=None, help="Reply-to address.")
@click.option("--subject", required=True, help="Subject line.")
@click.option("--html", required=True, help="HTML body or path to an HTML file.")
@click.option("--text", default=None, help="Plain-text alternative.")
@click.option("--attach", "attachments", multiple=True, type=click.Path(), help="File to attach.")
@click.pass_context
def send(
    ctx: click.Context,
    to: Tuple[str, ...],
    cc: Tuple[str, ...],
    bcc: Tuple[str, ...],
    sender: str | None,
    from_name: str | None,
    reply_to: str | None,
    subject: str,
    html: str,
    text: str | None,
    attachments: Tuple[str, ...],
) -> None:
    """Compose and send a single message."""
    mailer = _build_mailer(ctx.obj["debug"])
    if sender:
        mailer.sender(sender, from_name)
    if reply_to:
        mailer.reply_to(reply_to)
    mailer.to(list(to)).cc(list(cc)).bcc(list(bcc))
    mailer.subject(subject).message(_read_html(html))
    if text:
        mailer.message_alt(text)
    for path in attachments:
        if not mailer.attach(path):
            click.echo(f"Error: attachment {path} not found", err=True)
            sys.exit(2)
    _report(mailer.send(), "Message sent", "Message could not be sent")


if __name__ == "__main__":
    main()
