"""
Reply constructor — derives a reply (or reply-all) builder from a message.
"""

import logging
from email.message import EmailMessage
from typing import Optional, Union

from mailforge.builder import EmailPopulatingBuilder
from mailforge.config import BuilderConfig
from mailforge.errors import ReplyConstructionError
from mailforge.mime.converter import mime_to_email, to_mime_message
from mailforge.mime.parser import RawMessage
from mailforge.mime.reply import synthesize_reply
from mailforge.models.email import Email
from mailforge.quoting import DEFAULT_QUOTING_MARKUP, quote_html_text, quote_plain_text, validate_template
from mailforge.result import Err

logger = logging.getLogger(__name__)

# The skeleton must look like a sendable message to convert; both values are discarded
PLACEHOLDER_TEXT = "ignore"
PLACEHOLDER_SENDER = "ignore@ignore.ignore"


def _skeleton(source: EmailMessage, reply_to_all: bool) -> EmailMessage:
    result = synthesize_reply(source, reply_to_all)
    if isinstance(result, Err):
        logger.error(f"Unable to synthesize reply: {result.error}")
        raise ReplyConstructionError("was unable to parse message to produce a reply for") from result.error
    skeleton = result.value
    skeleton.set_content(PLACEHOLDER_TEXT)
    skeleton["From"] = PLACEHOLDER_SENDER
    return skeleton


def replying(
    message: Union[Email, RawMessage],
    reply_to_all: bool = False,
    html_template: str = DEFAULT_QUOTING_MARKUP,
    config: Optional[BuilderConfig] = None,
) -> EmailPopulatingBuilder:
    """Start a reply to `message`.

    Subject, recipients and threading headers come from the synthesized reply;
    the original's plain text is quoted line by line and its HTML wrapped in
    `html_template`. Embedded images are carried over so the quoted HTML still
    renders.
    """
    validate_template(html_template)
    source = to_mime_message(message)
    replied_to = message if isinstance(message, Email) else mime_to_email(source)
    generated = mime_to_email(_skeleton(source, reply_to_all))

    return (
        EmailPopulatingBuilder(config)
        .with_subject(generated.subject)
        .with_recipients(generated.recipients)
        .with_plain_text(quote_plain_text(replied_to.plain_text))
        .with_html_text(quote_html_text(html_template, replied_to.html_text))
        .with_headers(generated.headers)
        .with_embedded_images(replied_to.embedded_images)
    )
