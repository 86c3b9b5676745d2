"""Tests for raw message parsing and Email conversion."""

from datetime import datetime, timezone
from email.message import EmailMessage

import pytest

from mailforge.builder import EmailPopulatingBuilder
from mailforge.errors import ParseError
from mailforge.mime import (
    email_to_mime,
    mime_to_email,
    parse_message,
    parse_subject,
    to_mime_message,
    try_mime_to_email,
)
from mailforge.models import InternalEmail, Recipient, RecipientType, SmimeMode
from mailforge.result import Err, Ok


class TestMimeToEmail:
    def test_fields(self, raw_message):
        email = mime_to_email(raw_message)
        assert isinstance(email, InternalEmail)
        assert email.subject == "Quarterly numbers"
        assert email.id == "<msg-1@example.com>"
        assert email.sent_date == datetime(2024, 10, 1, 10, 0, tzinfo=timezone.utc)
        assert email.from_recipient == Recipient(name="Alice Sender", address="alice@example.com")
        assert email.plain_text == "hello\nworld"
        assert email.html_text == "<p>hello world</p>"

    def test_recipients_keep_order_and_type(self, raw_message):
        email = mime_to_email(raw_message)
        assert email.recipients == [
            Recipient(name="Bob", address="bob@example.com", type=RecipientType.TO),
            Recipient(address="carol@example.com", type=RecipientType.TO),
            Recipient(name="Dave", address="dave@example.com", type=RecipientType.CC),
        ]
        assert [r.address for r in email.to_recipients] == ["bob@example.com", "carol@example.com"]

    def test_unmapped_headers_are_kept(self, raw_message):
        email = mime_to_email(raw_message)
        assert email.headers == {"X-Priority": ["1"]}

    def test_plain_message_is_not_merged(self, raw_message):
        email = mime_to_email(raw_message)
        assert email.was_merged_with_smime_signed_message is False
        assert email.smime_signed_email is None
        assert email.original_smime_details.smime_mode == SmimeMode.PLAIN

    def test_signed_message(self, signed_message):
        email = mime_to_email(signed_message)
        assert email.plain_text == "signed body"
        assert email.attachments == []
        assert email.original_smime_details.smime_mode == SmimeMode.SIGNED
        assert email.original_smime_details.smime_micalg == "sha-256"
        assert isinstance(email.smime_signed_email, EmailMessage)
        assert email.was_merged_with_smime_signed_message is True

    def test_accepts_email_message(self, raw_message):
        msg = parse_message(raw_message).unwrap()
        assert mime_to_email(msg).subject == "Quarterly numbers"

    def test_accepts_str(self, raw_message):
        assert mime_to_email(raw_message.decode()).subject == "Quarterly numbers"


class TestParseErrors:
    def test_empty_input(self):
        result = try_mime_to_email(b"")
        assert isinstance(result, Err)
        assert isinstance(result.error, ParseError)
        with pytest.raises(ParseError):
            mime_to_email(b"")

    def test_unsupported_type(self):
        with pytest.raises(ParseError):
            mime_to_email(12345)

    def test_multipart_without_boundary(self):
        raw = b"From: a@example.com\nContent-Type: multipart/mixed\n\nbody\n"
        assert isinstance(parse_message(raw), Err)

    def test_ok_result(self, raw_message):
        result = try_mime_to_email(raw_message)
        assert isinstance(result, Ok)
        assert result.ok


class TestRoundTrip:
    def test_email_to_mime_and_back(self):
        email = (
            EmailPopulatingBuilder()
            .from_("Alice <alice@example.com>")
            .to("bob@example.com")
            .cc("Carol <carol@example.com>")
            .with_reply_to(["replies@example.com"])
            .with_subject("Round trip")
            .fixing_message_id("<rt-1@example.com>")
            .with_plain_text("hello")
            .with_html_text("<img src='cid:logo'>")
            .with_header("X-Tracking", "abc")
            .with_embedded_image("logo", b"\x89PNG-bytes", "image/png")
            .with_attachment("report.pdf", b"%PDF-1.4 data", "application/pdf")
            .build_email()
        )
        back = mime_to_email(email_to_mime(email))

        assert back.subject == "Round trip"
        assert back.id == "<rt-1@example.com>"
        assert back.from_recipient == email.from_recipient
        assert back.recipients == email.recipients
        assert back.reply_to_recipients == email.reply_to_recipients
        assert back.headers == {"X-Tracking": ["abc"]}
        assert back.plain_text.rstrip("\n") == "hello"
        assert back.html_text.rstrip("\n") == "<img src='cid:logo'>"
        assert [(i.name, i.mime_type, i.data) for i in back.embedded_images] == [("logo", "image/png", b"\x89PNG-bytes")]
        assert [(a.name, a.mime_type, a.data) for a in back.attachments] == [
            ("report.pdf", "application/pdf", b"%PDF-1.4 data"),
        ]

    def test_calendar_round_trip(self, full_email):
        back = mime_to_email(email_to_mime(full_email))
        assert back.calendar_method == full_email.calendar_method
        assert back.calendar_text.rstrip("\n") == full_email.calendar_text
        assert back.bcc_recipients == full_email.bcc_recipients
        assert back.bounce_to_recipient.address == "bounces@example.com"
        assert back.disposition_notification_to == full_email.disposition_notification_to
        assert back.return_receipt_to == full_email.return_receipt_to

    def test_to_mime_message_keeps_email_message(self, raw_message):
        msg = parse_message(raw_message).unwrap()
        assert to_mime_message(msg) is msg


class TestParseSubject:
    def test_from_bytes(self, raw_message):
        assert parse_subject(raw_message) == "Quarterly numbers"

    def test_reads_headers_only(self):
        raw = b"Subject: Just headers\nContent-Type: multipart/mixed\n\nnot a valid multipart body"
        assert parse_subject(raw) == "Just headers"

    def test_encoded_subject(self):
        assert parse_subject(b"Subject: =?utf-8?q?Gr=C3=BC=C3=9Fe?=\n\n") == "Grüße"

    def test_missing_subject(self):
        assert parse_subject(b"From: a@example.com\n\nbody") is None
