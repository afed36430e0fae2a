"""Send a one-off test message through SES.

Handy after rotating credentials or the CA bundle.  Configuration comes from
the usual ``AMAZON_SES_*`` environment variables::

    python scripts/send_test_email.py someone@example.com
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from ses_mailer.mailer.ses_sender import SESMailer


def main() -> None:
    if len(sys.argv) != 2:
        print("usage: send_test_email.py RECIPIENT")
        sys.exit(2)

    logging.basicConfig(level=logging.DEBUG)
    mailer = SESMailer()
    ok = mailer.send_email(
        sys.argv[1],
        "<p>This is a test message sent by <b>ses_mailer</b>.</p>",
        subject="ses_mailer test message",
    )
    print("sent" if ok else "failed")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
