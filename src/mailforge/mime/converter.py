"""
Conversion between raw messages (stdlib EmailMessage) and Email entities.

Mapped headers (addresses, subject, id, date, receipts) become Email fields;
every other header is kept verbatim in `Email.headers`.
"""

import logging
from datetime import datetime
from email import errors, policy
from email.message import EmailMessage, Message
from email.parser import BytesParser
from email.utils import format_datetime, parsedate_to_datetime
from typing import Iterator, Optional, Union

from mailforge.errors import ParseError
from mailforge.models.attachment import AttachmentResource
from mailforge.models.email import CalendarMethod, ContentTransferEncoding, Email, InternalEmail
from mailforge.models.recipient import Recipient, RecipientType
from mailforge.models.security import OriginalSmimeDetails, SmimeMode
from mailforge.mime.parser import RawMessage, header_recipient, header_recipients, parse_message
from mailforge.result import Err, Ok, Result

logger = logging.getLogger(__name__)

MAPPED_HEADERS = frozenset(h.lower() for h in (
    "From", "To", "Cc", "Bcc", "Reply-To", "Subject", "Message-ID", "Date", "Return-Path",
    "Disposition-Notification-To", "Return-Receipt-To",
    "MIME-Version", "Content-Type", "Content-Transfer-Encoding", "Content-Disposition", "Content-ID",
))

SIGNATURE_TYPES = {"application/pkcs7-signature", "application/x-pkcs7-signature"}
ENVELOPED_TYPES = {"application/pkcs7-mime", "application/x-pkcs7-mime"}
FORWARDED_MESSAGE_NAME = "forwarded-message.eml"


def _parse_date(msg: Message) -> Optional[datetime]:
    header = msg.get("Date")
    if header is None:
        return None
    parsed = getattr(header, "datetime", None)
    if parsed is not None:
        return parsed
    try:
        return parsedate_to_datetime(str(header))
    except (TypeError, ValueError):
        return None


def _text_of(part: Message) -> str:
    try:
        return part.get_content()
    except (LookupError, UnicodeDecodeError):
        payload = part.get_payload(decode=True) or b""
        return payload.decode("utf-8", errors="replace")


def _leaf_parts(part: Message) -> Iterator[Message]:
    """Walk MIME leaves without descending into attached messages."""
    if part.get_content_type() == "message/rfc822" or not part.is_multipart():
        yield part
        return
    for sub in part.get_payload():
        yield from _leaf_parts(sub)


def _encoding_of(part: Message) -> Optional[ContentTransferEncoding]:
    value = (part.get("Content-Transfer-Encoding") or "").strip().lower()
    try:
        return ContentTransferEncoding(value) if value else None
    except ValueError:
        return None


def _calendar_method_of(part: Message) -> Optional[CalendarMethod]:
    method = part.get_param("method")
    if not method:
        return None
    try:
        return CalendarMethod(str(method).upper())
    except ValueError:
        return None


def _resource(part: Message, name: str) -> AttachmentResource:
    if part.get_content_type() == "message/rfc822":
        data = part.get_payload(0).as_bytes()
    else:
        data = part.get_payload(decode=True) or b""
    description = part.get("Content-Description")
    return AttachmentResource(
        name=name,
        mime_type=part.get_content_type(),
        data=data,
        description=str(description) if description is not None else None,
    )


def _smime_details(msg: Message) -> OriginalSmimeDetails:
    ctype = msg.get_content_type()
    if ctype == "multipart/signed" and msg.get_param("protocol") in SIGNATURE_TYPES:
        return OriginalSmimeDetails(
            smime_mode=SmimeMode.SIGNED,
            smime_mime=ctype,
            smime_micalg=msg.get_param("micalg"),
        )
    if ctype in ENVELOPED_TYPES:
        smime_type = msg.get_param("smime-type")
        return OriginalSmimeDetails(
            smime_mode=SmimeMode.SIGNED if smime_type == "signed-data" else SmimeMode.ENCRYPTED,
            smime_mime=ctype,
            smime_type=smime_type,
            smime_name=msg.get_param("name"),
        )
    return OriginalSmimeDetails()


def _convert(msg: EmailMessage) -> InternalEmail:
    plain_text: Optional[str] = None
    html_text: Optional[str] = None
    encoding: Optional[ContentTransferEncoding] = None
    calendar_method: Optional[CalendarMethod] = None
    calendar_text: Optional[str] = None
    embedded_images: list[AttachmentResource] = []
    attachments: list[AttachmentResource] = []

    for part in _leaf_parts(msg):
        ctype = part.get_content_type()
        disposition = part.get_content_disposition()
        is_body = disposition != "attachment" and not part.get_filename()
        content_id = (part.get("Content-ID") or "").strip().strip("<>")

        if ctype in SIGNATURE_TYPES:
            continue
        if is_body and ctype == "text/plain" and plain_text is None:
            plain_text = _text_of(part)
            encoding = encoding or _encoding_of(part)
        elif is_body and ctype == "text/html" and html_text is None:
            html_text = _text_of(part)
            encoding = encoding or _encoding_of(part)
        elif is_body and ctype == "text/calendar" and calendar_text is None:
            calendar_text = _text_of(part)
            calendar_method = _calendar_method_of(part)
        elif content_id and disposition != "attachment":
            embedded_images.append(_resource(part, content_id))
        elif ctype == "message/rfc822":
            attachments.append(_resource(part, part.get_filename() or FORWARDED_MESSAGE_NAME))
        else:
            attachments.append(_resource(part, part.get_filename() or "attachment.bin"))

    headers: dict[str, list[str]] = {}
    for name, value in msg.items():
        if name.lower() in MAPPED_HEADERS:
            continue
        headers.setdefault(name, []).append(str(value))

    recipients = (
        header_recipients(msg, "To", RecipientType.TO)
        + header_recipients(msg, "Cc", RecipientType.CC)
        + header_recipients(msg, "Bcc", RecipientType.BCC)
    )
    smime_details = _smime_details(msg)
    signed = smime_details.smime_mode == SmimeMode.SIGNED and smime_details.smime_mime == "multipart/signed"
    message_id = msg.get("Message-ID")
    subject = msg.get("Subject")

    return InternalEmail(
        id=str(message_id).strip() if message_id is not None else None,
        sent_date=_parse_date(msg),
        subject=str(subject) if subject is not None else None,
        from_recipient=header_recipient(msg, "From"),
        reply_to_recipients=header_recipients(msg, "Reply-To"),
        bounce_to_recipient=header_recipient(msg, "Return-Path"),
        recipients=recipients,
        plain_text=plain_text,
        html_text=html_text,
        content_transfer_encoding=encoding,
        headers=headers,
        embedded_images=embedded_images,
        attachments=attachments,
        decrypted_attachments=[],
        disposition_notification_to=header_recipient(msg, "Disposition-Notification-To"),
        return_receipt_to=header_recipient(msg, "Return-Receipt-To"),
        calendar_method=calendar_method,
        calendar_text=calendar_text,
        pkcs12_config_for_smime_signing=None,
        x509_certificate_for_smime_encryption=None,
        dkim_config=None,
        email_to_forward=None,
        smime_signed_email=msg if signed else None,
        original_smime_details=smime_details,
        # a signed message's content is read straight out of the signed part
        was_merged_with_smime_signed_message=signed,
    )


def try_mime_to_email(raw: RawMessage) -> Result[InternalEmail]:
    parsed = parse_message(raw)
    if isinstance(parsed, Err):
        return parsed
    try:
        email = _convert(parsed.value)
    except (errors.MessageError, LookupError, ValueError) as e:
        return Err(ParseError(f"Failed to convert message to Email: {e}"))
    logger.debug(f"Converted message {email.id!r} with {len(email.recipients)} recipient(s)")
    return Ok(email)


def mime_to_email(raw: RawMessage) -> InternalEmail:
    """Convert a raw message to an Email, raising ParseError on failure."""
    return try_mime_to_email(raw).unwrap()


def _text_encoding(encoding: Optional[ContentTransferEncoding]) -> Optional[str]:
    # 7bit/binary are left to the stdlib, which picks a safe encoding for the text
    if encoding in (ContentTransferEncoding.QUOTED_PRINTABLE, ContentTransferEncoding.BASE_64, ContentTransferEncoding.BIT8):
        return encoding.value
    return None


def _build(email: Email) -> EmailMessage:
    msg = EmailMessage()
    msg["MIME-Version"] = "1.0"
    if email.id:
        msg["Message-ID"] = email.id
    if email.sent_date is not None:
        msg["Date"] = format_datetime(email.sent_date)
    if email.subject is not None:
        msg["Subject"] = email.subject
    if email.from_recipient is not None:
        msg["From"] = email.from_recipient.formatted()
    if email.reply_to_recipients:
        msg["Reply-To"] = ", ".join(r.formatted() for r in email.reply_to_recipients)

    for type in RecipientType:
        matching = [r for r in email.recipients if (r.type or RecipientType.TO) == type]
        if matching:
            msg[type.value] = ", ".join(r.formatted() for r in matching)

    if email.bounce_to_recipient is not None:
        msg["Return-Path"] = f"<{email.bounce_to_recipient.address}>"
    if email.disposition_notification_to is not None:
        msg["Disposition-Notification-To"] = email.disposition_notification_to.formatted()
    if email.return_receipt_to is not None:
        msg["Return-Receipt-To"] = email.return_receipt_to.formatted()
    for name, values in email.headers.items():
        if name.lower() in MAPPED_HEADERS:
            continue
        for value in values:
            msg[name] = value

    bodies: list[tuple[str, str, dict[str, str]]] = []
    if email.plain_text is not None:
        bodies.append((email.plain_text, "plain", {}))
    if email.html_text is not None:
        bodies.append((email.html_text, "html", {}))
    if email.calendar_method is not None and email.calendar_text is not None:
        bodies.append((email.calendar_text, "calendar", {"method": email.calendar_method.value}))

    cte = _text_encoding(email.content_transfer_encoding)
    for index, (text, subtype, params) in enumerate(bodies):
        if index == 0:
            msg.set_content(text, subtype=subtype, cte=cte, params=params)
        else:
            msg.add_alternative(text, subtype=subtype, cte=cte, params=params)

    if email.embedded_images:
        html_part = msg.get_body(preferencelist=("html",)) if email.html_text is not None else None
        target = html_part if html_part is not None else msg
        for image in email.embedded_images:
            target.add_related(image.data, image.maintype, image.subtype, cid=f"<{image.name}>")

    for attachment in email.attachments:
        if attachment.mime_type == "message/rfc822":
            attached = BytesParser(policy=policy.default).parsebytes(attachment.data)
            msg.add_attachment(attached, filename=attachment.name)
        else:
            msg.add_attachment(attachment.data, attachment.maintype, attachment.subtype, filename=attachment.name)

    if email.email_to_forward is not None:
        msg.add_attachment(email.email_to_forward, filename=FORWARDED_MESSAGE_NAME)
    return msg


def try_email_to_mime(email: Email) -> Result[EmailMessage]:
    try:
        return Ok(_build(email))
    except (errors.MessageError, LookupError, TypeError, ValueError) as e:
        return Err(ParseError(f"Failed to convert Email to a MIME message: {e}"))


def email_to_mime(email: Email) -> EmailMessage:
    """Convert an Email to a raw message, raising ParseError on failure."""
    return try_email_to_mime(email).unwrap()


def to_mime_message(message: Union[Email, RawMessage]) -> EmailMessage:
    """Normalize an Email or any raw form to an EmailMessage."""
    if isinstance(message, Email):
        return email_to_mime(message)
    return parse_message(message).unwrap()
