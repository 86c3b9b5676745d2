"""
EmailPopulatingBuilder — mutable accumulator of Email fields.

Setters return the builder so calls can be chained. `build_email()` applies
process-wide defaults/overrides (unless the builder's BuilderConfig ignores
them) and produces an InternalEmail.
"""

from __future__ import annotations

import logging
from datetime import datetime
from email.message import EmailMessage
from typing import Any, Iterable, Mapping, Optional, Union

from mailforge import config as properties
from mailforge.config import BuilderConfig
from mailforge.errors import MissingRequiredFieldError
from mailforge.mime.converter import mime_to_email
from mailforge.models.attachment import AttachmentResource
from mailforge.models.email import CalendarMethod, ContentTransferEncoding, InternalEmail
from mailforge.models.recipient import Recipient, RecipientType
from mailforge.models.security import DkimConfig, OriginalSmimeDetails, Pkcs12Config, X509Certificate

logger = logging.getLogger(__name__)

RecipientLike = Union[Recipient, str]

# Headers that set an Email field instead of being stored verbatim
SMART_HEADERS = {
    "disposition-notification-to": "disposition_notification_to",
    "return-receipt-to": "return_receipt_to",
}


def _recipient(value: RecipientLike, type: Optional[RecipientType] = None) -> Recipient:
    if isinstance(value, Recipient):
        return value.with_type(type) if type is not None else value
    return Recipient.parse(value, type)


class EmailPopulatingBuilder:
    def __init__(self, config: Optional[BuilderConfig] = None):
        self.config = config or BuilderConfig()
        self._merge_single_smime_signed_attachment = True

        self.id: Optional[str] = None
        self.sent_date: Optional[datetime] = None
        self.subject: Optional[str] = None
        self.from_recipient: Optional[Recipient] = None
        self.reply_to_recipients: list[Recipient] = []
        self.bounce_to_recipient: Optional[Recipient] = None
        self.recipients: list[Recipient] = []
        self.plain_text: Optional[str] = None
        self.html_text: Optional[str] = None
        self.content_transfer_encoding: Optional[ContentTransferEncoding] = None
        self.headers: dict[str, list[str]] = {}
        self.embedded_images: list[AttachmentResource] = []
        self.attachments: list[AttachmentResource] = []
        self.decrypted_attachments: list[AttachmentResource] = []
        self.disposition_notification_to: Optional[Recipient] = None
        self.return_receipt_to: Optional[Recipient] = None
        self.calendar_method: Optional[CalendarMethod] = None
        self.calendar_text: Optional[str] = None
        self.pkcs12_config_for_smime_signing: Optional[Pkcs12Config] = None
        self.x509_certificate_for_smime_encryption: Optional[X509Certificate] = None
        self.dkim_config: Optional[DkimConfig] = None
        self.email_to_forward: Optional[EmailMessage] = None
        self.smime_signed_email: Optional[EmailMessage] = None
        self.original_smime_details = OriginalSmimeDetails()

    def __repr__(self) -> str:
        return f"EmailPopulatingBuilder(subject={self.subject!r}, recipients={len(self.recipients)})"

    # --- configuration ---

    def ignoring_defaults(self, ignore_defaults: bool = True) -> EmailPopulatingBuilder:
        self.config = self.config.model_copy(update={"ignore_defaults": ignore_defaults})
        return self

    def ignoring_overrides(self, ignore_overrides: bool = True) -> EmailPopulatingBuilder:
        self.config = self.config.model_copy(update={"ignore_overrides": ignore_overrides})
        return self

    def not_merging_single_smime_signed_attachment(self) -> EmailPopulatingBuilder:
        """Keep a signed message's content out of the built Email."""
        self._merge_single_smime_signed_attachment = False
        return self

    @property
    def merges_single_smime_signed_attachment(self) -> bool:
        return self._merge_single_smime_signed_attachment

    # --- identity ---

    def fixing_message_id(self, id: Optional[str]) -> EmailPopulatingBuilder:
        self.id = id
        return self

    def fixing_sent_date(self, sent_date: Optional[datetime]) -> EmailPopulatingBuilder:
        self.sent_date = sent_date
        return self

    def with_subject(self, subject: Optional[str]) -> EmailPopulatingBuilder:
        self.subject = subject
        return self

    # --- addresses ---

    def from_(self, recipient: RecipientLike) -> EmailPopulatingBuilder:
        self.from_recipient = _recipient(recipient)
        return self

    def with_reply_to(self, recipients: Iterable[RecipientLike]) -> EmailPopulatingBuilder:
        self.reply_to_recipients.extend(_recipient(r) for r in recipients)
        return self

    def with_bounce_to(self, recipient: Optional[RecipientLike]) -> EmailPopulatingBuilder:
        self.bounce_to_recipient = _recipient(recipient) if recipient is not None else None
        return self

    def with_recipients(
        self,
        recipients: Iterable[RecipientLike],
        fixed_type: Optional[RecipientType] = None,
    ) -> EmailPopulatingBuilder:
        """Add recipients, keeping each one's own type unless `fixed_type` is given."""
        self.recipients.extend(_recipient(r, fixed_type) for r in recipients)
        return self

    def to(self, *recipients: RecipientLike) -> EmailPopulatingBuilder:
        return self.with_recipients(recipients, RecipientType.TO)

    def cc(self, *recipients: RecipientLike) -> EmailPopulatingBuilder:
        return self.with_recipients(recipients, RecipientType.CC)

    def bcc(self, *recipients: RecipientLike) -> EmailPopulatingBuilder:
        return self.with_recipients(recipients, RecipientType.BCC)

    def with_disposition_notification_to(self, recipient: RecipientLike) -> EmailPopulatingBuilder:
        self.disposition_notification_to = _recipient(recipient)
        return self

    def with_return_receipt_to(self, recipient: RecipientLike) -> EmailPopulatingBuilder:
        self.return_receipt_to = _recipient(recipient)
        return self

    # --- content ---

    def with_plain_text(self, text: Optional[str]) -> EmailPopulatingBuilder:
        self.plain_text = text
        return self

    def with_html_text(self, text: Optional[str]) -> EmailPopulatingBuilder:
        self.html_text = text
        return self

    def with_content_transfer_encoding(self, encoding: ContentTransferEncoding) -> EmailPopulatingBuilder:
        self.content_transfer_encoding = encoding
        return self

    def with_calendar_text(self, method: CalendarMethod, text: Optional[str]) -> EmailPopulatingBuilder:
        if text is None:
            raise MissingRequiredFieldError("calendar_text", f"calendar_text is required with calendar method {method.value}")
        self.calendar_method = method
        self.calendar_text = text
        return self

    def with_header(self, name: str, value: Any, ignore_smart_headers: bool = False) -> EmailPopulatingBuilder:
        field = SMART_HEADERS.get(name.lower())
        if field is not None and not ignore_smart_headers:
            setattr(self, field, _recipient(str(value)))
        else:
            self.headers.setdefault(name, []).append(str(value))
        return self

    def with_headers(
        self,
        headers: Mapping[str, Iterable[Any]],
        ignore_smart_headers: bool = False,
    ) -> EmailPopulatingBuilder:
        for name, values in headers.items():
            for value in values:
                self.with_header(name, value, ignore_smart_headers)
        return self

    def with_embedded_image(self, name: str, data: bytes, mime_type: str) -> EmailPopulatingBuilder:
        self.embedded_images.append(AttachmentResource(name=name, data=data, mime_type=mime_type))
        return self

    def with_embedded_images(self, images: Iterable[AttachmentResource]) -> EmailPopulatingBuilder:
        self.embedded_images.extend(images)
        return self

    def with_attachment(self, name: str, data: bytes, mime_type: str = "application/octet-stream") -> EmailPopulatingBuilder:
        self.attachments.append(AttachmentResource(name=name, data=data, mime_type=mime_type))
        return self

    def with_attachments(self, attachments: Iterable[AttachmentResource]) -> EmailPopulatingBuilder:
        self.attachments.extend(attachments)
        return self

    def with_decrypted_attachments(self, attachments: Iterable[AttachmentResource]) -> EmailPopulatingBuilder:
        self.decrypted_attachments.extend(attachments)
        return self

    # --- security ---

    def sign_with_smime(self, pkcs12_config: Pkcs12Config) -> EmailPopulatingBuilder:
        self.pkcs12_config_for_smime_signing = pkcs12_config
        return self

    def encrypt_with_smime(self, certificate: X509Certificate) -> EmailPopulatingBuilder:
        self.x509_certificate_for_smime_encryption = certificate
        return self

    def sign_with_domain_key(self, dkim_config: DkimConfig) -> EmailPopulatingBuilder:
        self.dkim_config = dkim_config
        return self

    def with_smime_signed_email(self, message: EmailMessage) -> EmailPopulatingBuilder:
        self.smime_signed_email = message
        return self

    def with_original_smime_details(self, details: OriginalSmimeDetails) -> EmailPopulatingBuilder:
        self.original_smime_details = details
        return self

    def with_forward(self, message: EmailMessage) -> EmailPopulatingBuilder:
        """Forward `message` as-is; the reference is kept, not copied."""
        self.email_to_forward = message
        return self

    # --- finalize ---

    def _values(self) -> dict[str, Any]:
        values = {name: getattr(self, name) for name in InternalEmail.model_fields if hasattr(self, name)}
        for name, value in values.items():
            if isinstance(value, list):
                values[name] = list(value)
            elif isinstance(value, dict):
                values[name] = {k: list(v) for k, v in value.items()}
        return values

    @staticmethod
    def _apply_defaults(values: dict[str, Any]) -> None:
        for name, value in properties.get_defaults().present().items():
            if values.get(name) in (None, []):
                logger.debug(f"Applying default {name}")
                values[name] = list(value) if isinstance(value, list) else value

    @staticmethod
    def _apply_overrides(values: dict[str, Any]) -> None:
        for name, value in properties.get_overrides().present().items():
            logger.debug(f"Applying override {name}")
            values[name] = list(value) if isinstance(value, list) else value

    @staticmethod
    def _merge_smime_signed_email(values: dict[str, Any]) -> None:
        signed = mime_to_email(values["smime_signed_email"])
        logger.debug("Merging S/MIME signed message content")
        for name in ("plain_text", "html_text", "calendar_text", "calendar_method"):
            if values[name] is None:
                values[name] = getattr(signed, name)
        for name in ("attachments", "embedded_images"):
            if not values[name]:
                values[name] = list(getattr(signed, name))

    def build_email(self) -> InternalEmail:
        values = self._values()
        if not self.config.ignore_defaults:
            self._apply_defaults(values)
        if not self.config.ignore_overrides:
            self._apply_overrides(values)

        merged = self._merge_single_smime_signed_attachment and values["smime_signed_email"] is not None
        if merged:
            self._merge_smime_signed_email(values)

        if values["calendar_method"] is not None and values["calendar_text"] is None:
            raise MissingRequiredFieldError("calendar_text")
        return InternalEmail(**values, was_merged_with_smime_signed_message=merged)
