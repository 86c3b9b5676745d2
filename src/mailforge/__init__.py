"""
mailforge — derive replies, forwards and copies from existing emails.

Builds new email builder states from a message: quoting its text for a reply,
attaching it for a forward, or duplicating it field by field.
"""

from mailforge.builder import EmailPopulatingBuilder
from mailforge.config import BuilderConfig, EmailProperties
from mailforge.errors import (
    ContractViolation,
    MailforgeError,
    MissingRequiredFieldError,
    ParseError,
    ProtocolError,
    ReplyConstructionError,
    TemplateError,
)
from mailforge.models import AttachmentResource, CalendarMethod, ContentTransferEncoding, Email, InternalEmail, Recipient, RecipientType
from mailforge.quoting import DEFAULT_QUOTING_MARKUP, quote_html_text, quote_plain_text
from mailforge.starting import EmailBuilder, EmailStartingBuilder

__version__ = "0.1.0"
__all__ = [
    "EmailBuilder",
    "EmailStartingBuilder",
    "EmailPopulatingBuilder",
    "BuilderConfig",
    "EmailProperties",
    "Email",
    "InternalEmail",
    "Recipient",
    "RecipientType",
    "AttachmentResource",
    "CalendarMethod",
    "ContentTransferEncoding",
    "DEFAULT_QUOTING_MARKUP",
    "quote_plain_text",
    "quote_html_text",
    "MailforgeError",
    "ParseError",
    "ProtocolError",
    "ReplyConstructionError",
    "TemplateError",
    "MissingRequiredFieldError",
    "ContractViolation",
]
