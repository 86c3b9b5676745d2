"""
Builder configuration and process-wide default/override properties.

Defaults fill fields a builder left unset; overrides replace whatever the
builder set. Both are applied when an Email is built, unless the builder's
BuilderConfig says to ignore them.

Properties can be loaded from a JSON file of the form
`{"defaults": {...}, "overrides": {...}}`.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError

from mailforge.models.email import ContentTransferEncoding
from mailforge.models.recipient import Recipient

logger = logging.getLogger(__name__)

CONFIG_FILE = Path.home() / ".mailforge" / "config.json"


class BuilderConfig(BaseModel):
    """Flags handed from a starting builder to every builder it creates."""
    ignore_defaults: bool = False
    ignore_overrides: bool = False

    model_config = {"frozen": True}


class EmailProperties(BaseModel):
    from_recipient: Optional[Recipient] = None
    reply_to_recipients: Optional[list[Recipient]] = None
    bounce_to_recipient: Optional[Recipient] = None
    subject: Optional[str] = None
    recipients: Optional[list[Recipient]] = None
    content_transfer_encoding: Optional[ContentTransferEncoding] = None
    disposition_notification_to: Optional[Recipient] = None
    return_receipt_to: Optional[Recipient] = None

    model_config = {"frozen": True}

    def present(self) -> dict[str, Any]:
        """Only the properties that are actually set."""
        return {name: getattr(self, name) for name in type(self).model_fields if getattr(self, name) is not None}


_defaults = EmailProperties()
_overrides = EmailProperties()


def get_defaults() -> EmailProperties:
    return _defaults


def get_overrides() -> EmailProperties:
    return _overrides


def set_defaults(properties: EmailProperties) -> None:
    global _defaults
    _defaults = properties


def set_overrides(properties: EmailProperties) -> None:
    global _overrides
    _overrides = properties


def reset_properties() -> None:
    set_defaults(EmailProperties())
    set_overrides(EmailProperties())


def load_properties(path: Union[str, Path, None] = None) -> bool:
    """Load defaults and overrides from a JSON file. Returns False if nothing was loaded."""
    path = Path(path) if path is not None else CONFIG_FILE
    try:
        raw = json.loads(path.read_text())
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.debug(f"No email properties loaded from {path}: {e}")
        return False
    if not isinstance(raw, dict):
        logger.warning(f"Ignoring email properties in {path}: expected a JSON object")
        return False
    try:
        defaults = EmailProperties.model_validate(raw.get("defaults") or {})
        overrides = EmailProperties.model_validate(raw.get("overrides") or {})
    except ValidationError as e:
        logger.warning(f"Ignoring invalid email properties in {path}: {e}")
        return False
    set_defaults(defaults)
    set_overrides(overrides)
    logger.debug(f"Loaded email properties from {path}")
    return True
