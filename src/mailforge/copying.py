"""
Copy constructor — a field-complete duplicate of an existing Email.

Fields are copied through COPY_TABLE: each entry names a field, when it is
copied, and how it is handed to the new builder.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from mailforge.builder import EmailPopulatingBuilder
from mailforge.config import BuilderConfig
from mailforge.errors import ContractViolation
from mailforge.mime.converter import mime_to_email
from mailforge.mime.parser import RawMessage
from mailforge.models.email import Email, InternalEmail


class CopyPolicy(str, Enum):
    ALWAYS = "always"
    IF_PRESENT = "if_present"
    COLLECTION = "collection"


@dataclass(frozen=True)
class FieldCopy:
    field: str
    policy: CopyPolicy
    apply: Callable[[EmailPopulatingBuilder, Any, Email], Any]


COPY_TABLE: tuple[FieldCopy, ...] = (
    FieldCopy("id", CopyPolicy.IF_PRESENT, lambda b, v, e: b.fixing_message_id(v)),
    FieldCopy("from_recipient", CopyPolicy.IF_PRESENT, lambda b, v, e: b.from_(v)),
    FieldCopy("reply_to_recipients", CopyPolicy.COLLECTION, lambda b, v, e: b.with_reply_to(v)),
    FieldCopy("bounce_to_recipient", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_bounce_to(v)),
    FieldCopy("plain_text", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_plain_text(v)),
    FieldCopy("html_text", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_html_text(v)),
    FieldCopy("subject", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_subject(v)),
    FieldCopy("recipients", CopyPolicy.COLLECTION, lambda b, v, e: b.with_recipients(v)),
    FieldCopy("embedded_images", CopyPolicy.COLLECTION, lambda b, v, e: b.with_embedded_images(v)),
    FieldCopy("attachments", CopyPolicy.COLLECTION, lambda b, v, e: b.with_attachments(v)),
    FieldCopy("content_transfer_encoding", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_content_transfer_encoding(v)),
    FieldCopy("headers", CopyPolicy.COLLECTION, lambda b, v, e: b.with_headers(v, ignore_smart_headers=True)),
    FieldCopy("sent_date", CopyPolicy.IF_PRESENT, lambda b, v, e: b.fixing_sent_date(v)),
    FieldCopy("pkcs12_config_for_smime_signing", CopyPolicy.IF_PRESENT, lambda b, v, e: b.sign_with_smime(v)),
    FieldCopy("x509_certificate_for_smime_encryption", CopyPolicy.IF_PRESENT, lambda b, v, e: b.encrypt_with_smime(v)),
    FieldCopy("dkim_config", CopyPolicy.IF_PRESENT, lambda b, v, e: b.sign_with_domain_key(v)),
    FieldCopy("disposition_notification_to", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_disposition_notification_to(v)),
    FieldCopy("return_receipt_to", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_return_receipt_to(v)),
    # calendar text is required once a method is set
    FieldCopy("calendar_method", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_calendar_text(v, e.calendar_text)),
    FieldCopy("email_to_forward", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_forward(v)),
    FieldCopy("decrypted_attachments", CopyPolicy.COLLECTION, lambda b, v, e: b.with_decrypted_attachments(v)),
    FieldCopy("smime_signed_email", CopyPolicy.IF_PRESENT, lambda b, v, e: b.with_smime_signed_email(v)),
    FieldCopy("original_smime_details", CopyPolicy.ALWAYS, lambda b, v, e: b.with_original_smime_details(v)),
)


def copy_fields(email: Email, builder: EmailPopulatingBuilder) -> EmailPopulatingBuilder:
    for entry in COPY_TABLE:
        value = getattr(email, entry.field)
        if entry.policy == CopyPolicy.IF_PRESENT and value is None:
            continue
        if entry.policy == CopyPolicy.COLLECTION and value is None:
            value = {} if entry.field == "headers" else []
        entry.apply(builder, value, email)
    return builder


def copying(
    message: Union[InternalEmail, EmailPopulatingBuilder, RawMessage],
    config: Optional[BuilderConfig] = None,
) -> EmailPopulatingBuilder:
    """Start a builder holding every field of `message`.

    Builders are built first and raw messages converted first. S/MIME, DKIM and
    calendar configuration are shared with the source, not cloned.
    """
    if isinstance(message, EmailPopulatingBuilder):
        email = message.build_email()
    elif isinstance(message, Email):
        email = message
    else:
        email = mime_to_email(message)

    builder = copy_fields(email, EmailPopulatingBuilder(config))

    if not isinstance(email, InternalEmail):
        raise ContractViolation(f"Email is not of type InternalEmail but {type(email).__name__}, this should not be possible")
    if not email.was_merged_with_smime_signed_message:
        builder.not_merging_single_smime_signed_attachment()
    return builder
