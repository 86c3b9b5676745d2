"""
mailforge error types.
"""

from typing import Any, Optional


class MailforgeError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ParseError(MailforgeError):
    """Raw message could not be converted to or from an Email."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("parse_error", message, details)


class ProtocolError(MailforgeError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("protocol_error", message, details)


class ReplyConstructionError(MailforgeError):
    def __init__(self, message: str):
        super().__init__("reply_construction_error", message)


class TemplateError(MailforgeError):
    def __init__(self, message: str, template: Optional[str] = None):
        super().__init__("template_error", message, {"template": template} if template is not None else None)


class MissingRequiredFieldError(MailforgeError):
    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__("missing_required_field", message or f"{field} is required", {"field": field})
        self.field = field


class ContractViolation(AssertionError):
    """An entity implementation broke the internal contract. Not meant to be caught."""
