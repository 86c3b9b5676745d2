"""
Forward constructor.
"""

from typing import Optional, Union

from mailforge.builder import EmailPopulatingBuilder
from mailforge.config import BuilderConfig
from mailforge.mime.converter import to_mime_message
from mailforge.mime.parser import RawMessage, parse_subject
from mailforge.models.email import Email

FORWARD_PREFIX = "Fwd: "


def forwarding(message: Union[Email, RawMessage], config: Optional[BuilderConfig] = None) -> EmailPopulatingBuilder:
    """Start a forward of `message`, which is attached by reference."""
    source = to_mime_message(message)
    return (
        EmailPopulatingBuilder(config)
        .with_forward(source)
        .with_subject(FORWARD_PREFIX + (parse_subject(source) or ""))
    )
