"""
Email — the canonical in-memory representation of a message.

`Email` is the public contract. `InternalEmail` is what this package actually
produces; it additionally records whether an S/MIME signed message was merged
into it while it was built.
"""

from datetime import datetime
from email.message import EmailMessage
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from mailforge.models.attachment import AttachmentResource
from mailforge.models.recipient import Recipient, RecipientType
from mailforge.models.security import DkimConfig, OriginalSmimeDetails, Pkcs12Config, X509Certificate


class ContentTransferEncoding(str, Enum):
    QUOTED_PRINTABLE = "quoted-printable"
    BASE_64 = "base64"
    BIT7 = "7bit"
    BIT8 = "8bit"
    BINARY = "binary"


class CalendarMethod(str, Enum):
    PUBLISH = "PUBLISH"
    REQUEST = "REQUEST"
    REPLY = "REPLY"
    ADD = "ADD"
    CANCEL = "CANCEL"
    REFRESH = "REFRESH"
    COUNTER = "COUNTER"
    DECLINECOUNTER = "DECLINECOUNTER"


class Email(BaseModel):
    id: Optional[str] = None
    sent_date: Optional[datetime] = None
    subject: Optional[str] = None
    from_recipient: Optional[Recipient] = None
    reply_to_recipients: list[Recipient] = Field(default_factory=list)
    bounce_to_recipient: Optional[Recipient] = None
    recipients: list[Recipient] = Field(default_factory=list)

    plain_text: Optional[str] = None
    html_text: Optional[str] = None
    content_transfer_encoding: Optional[ContentTransferEncoding] = None
    headers: dict[str, list[str]] = Field(default_factory=dict)

    embedded_images: list[AttachmentResource] = Field(default_factory=list)
    attachments: list[AttachmentResource] = Field(default_factory=list)
    decrypted_attachments: list[AttachmentResource] = Field(default_factory=list)

    disposition_notification_to: Optional[Recipient] = None
    return_receipt_to: Optional[Recipient] = None

    calendar_method: Optional[CalendarMethod] = None
    calendar_text: Optional[str] = None

    pkcs12_config_for_smime_signing: Optional[Pkcs12Config] = None
    x509_certificate_for_smime_encryption: Optional[X509Certificate] = None
    dkim_config: Optional[DkimConfig] = None

    email_to_forward: Optional[EmailMessage] = None
    smime_signed_email: Optional[EmailMessage] = None
    original_smime_details: OriginalSmimeDetails = Field(default_factory=OriginalSmimeDetails)

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    def recipients_of_type(self, type: RecipientType) -> list[Recipient]:
        return [r for r in self.recipients if r.type == type]

    @property
    def to_recipients(self) -> list[Recipient]:
        return self.recipients_of_type(RecipientType.TO)

    @property
    def cc_recipients(self) -> list[Recipient]:
        return self.recipients_of_type(RecipientType.CC)

    @property
    def bcc_recipients(self) -> list[Recipient]:
        return self.recipients_of_type(RecipientType.BCC)


class InternalEmail(Email):
    was_merged_with_smime_signed_message: bool = False
