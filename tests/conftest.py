"""
Shared fixtures for the mailforge test suite.
"""

from datetime import datetime, timezone

import pytest

from mailforge import config
from mailforge.builder import EmailPopulatingBuilder
from mailforge.models import (
    AttachmentResource,
    CalendarMethod,
    ContentTransferEncoding,
    DkimConfig,
    OriginalSmimeDetails,
    Pkcs12Config,
    Recipient,
    X509Certificate,
)

RAW_MESSAGE = b"""From: Alice Sender <alice@example.com>
To: Bob <bob@example.com>, carol@example.com
Cc: Dave <dave@example.com>
Subject: Quarterly numbers
Message-ID: <msg-1@example.com>
Date: Tue, 01 Oct 2024 10:00:00 +0000
X-Priority: 1
MIME-Version: 1.0
Content-Type: multipart/alternative; boundary="BOUNDARY"

--BOUNDARY
Content-Type: text/plain; charset="utf-8"
Content-Transfer-Encoding: 7bit

hello
world
--BOUNDARY
Content-Type: text/html; charset="utf-8"
Content-Transfer-Encoding: 7bit

<p>hello world</p>
--BOUNDARY--
"""

SIGNED_MESSAGE = b"""From: alice@example.com
To: bob@example.com
Subject: Signed
MIME-Version: 1.0
Content-Type: multipart/signed; protocol="application/pkcs7-signature"; micalg=sha-256; boundary="SIG"

--SIG
Content-Type: text/plain; charset="us-ascii"

signed body
--SIG
Content-Type: application/pkcs7-signature; name="smime.p7s"
Content-Transfer-Encoding: base64
Content-Disposition: attachment; filename="smime.p7s"

AAAA
--SIG--
"""


@pytest.fixture(autouse=True)
def _reset_properties():
    config.reset_properties()
    yield
    config.reset_properties()


@pytest.fixture
def raw_message() -> bytes:
    return RAW_MESSAGE


@pytest.fixture
def signed_message() -> bytes:
    return SIGNED_MESSAGE


@pytest.fixture
def full_email():
    """An InternalEmail with every field populated."""
    return (
        EmailPopulatingBuilder()
        .fixing_message_id("<full-1@example.com>")
        .fixing_sent_date(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        .from_("Alice Sender <alice@example.com>")
        .with_reply_to(["replies@example.com"])
        .with_bounce_to("bounces@example.com")
        .to("Bob <bob@example.com>")
        .cc("carol@example.com")
        .bcc("audit@example.com")
        .with_subject("Full house")
        .with_plain_text("plain body")
        .with_html_text("<p>html body</p>")
        .with_content_transfer_encoding(ContentTransferEncoding.QUOTED_PRINTABLE)
        .with_header("X-Custom", "one")
        .with_header("X-Custom", "two")
        .with_embedded_image("logo", b"\x89PNG-data", "image/png")
        .with_attachment("report.pdf", b"%PDF-1.4", "application/pdf")
        .with_decrypted_attachments([AttachmentResource(name="secret.txt", data=b"s3cret", mime_type="text/plain")])
        .sign_with_smime(Pkcs12Config(keystore=b"p12", store_password="sp", key_alias="alias", key_password="kp"))
        .encrypt_with_smime(X509Certificate(data=b"cert"))
        .sign_with_domain_key(DkimConfig(private_key=b"key", signing_domain="example.com", selector="mail"))
        .with_disposition_notification_to(Recipient(address="notify@example.com"))
        .with_return_receipt_to(Recipient(address="receipt@example.com"))
        .with_calendar_text(CalendarMethod.REQUEST, "BEGIN:VCALENDAR\nEND:VCALENDAR")
        .with_original_smime_details(OriginalSmimeDetails())
        .build_email()
    )
