"""
Raw RFC 5322 message collaborators: parsing, entity conversion, reply synthesis.
"""

from mailforge.mime.converter import email_to_mime, mime_to_email, to_mime_message, try_email_to_mime, try_mime_to_email
from mailforge.mime.parser import RawMessage, parse_message, parse_subject
from mailforge.mime.reply import synthesize_reply

__all__ = [
    "RawMessage",
    "email_to_mime",
    "mime_to_email",
    "parse_message",
    "parse_subject",
    "synthesize_reply",
    "to_mime_message",
    "try_email_to_mime",
    "try_mime_to_email",
]
