"""
Reply skeleton synthesis — standard reply-chain recipient and threading rules.

The skeleton carries subject, recipients and threading headers only; callers
fill in the body and sender.
"""

import logging
from email import errors
from email.message import EmailMessage, Message

from mailforge.errors import ProtocolError
from mailforge.models.recipient import Recipient, RecipientType
from mailforge.mime.parser import header_recipients
from mailforge.result import Err, Ok, Result

logger = logging.getLogger(__name__)

REPLY_PREFIX = "Re: "


def reply_subject(subject: str) -> str:
    if subject[:len(REPLY_PREFIX)].lower() == REPLY_PREFIX.lower():
        return subject
    return REPLY_PREFIX + subject


def _reply_recipients(source: Message, reply_to_all: bool) -> list[Recipient]:
    to = header_recipients(source, "Reply-To", RecipientType.TO, strict=True)
    if not to:
        to = header_recipients(source, "From", RecipientType.TO, strict=True)
    if not to:
        raise errors.HeaderParseError("Message has neither a Reply-To nor a From address")
    if not reply_to_all:
        return to

    seen = {r.address.lower() for r in to}
    cc: list[Recipient] = []
    # groups contribute their members, which may be none
    for recipient in (
        header_recipients(source, "To", RecipientType.CC)
        + header_recipients(source, "Cc", RecipientType.CC)
    ):
        if recipient.address.lower() in seen:
            continue
        seen.add(recipient.address.lower())
        cc.append(recipient)
    return to + cc


def synthesize_reply(source: Message, reply_to_all: bool) -> Result[EmailMessage]:
    """Build the reply skeleton for `source`.

    To is the Reply-To (or From) of the source. With `reply_to_all` the source's
    To and Cc recipients are added as Cc, without repeating an address.
    """
    try:
        recipients = _reply_recipients(source, reply_to_all)
    except errors.HeaderParseError as e:
        logger.debug(f"Reply synthesis failed: {e}")
        return Err(ProtocolError(str(e), {"reply_to_all": reply_to_all}))

    reply = EmailMessage()
    subject = source.get("Subject")
    if subject is not None:
        reply["Subject"] = reply_subject(str(subject))

    to = [r for r in recipients if r.type == RecipientType.TO]
    cc = [r for r in recipients if r.type == RecipientType.CC]
    reply["To"] = ", ".join(r.formatted() for r in to)
    if cc:
        reply["Cc"] = ", ".join(r.formatted() for r in cc)

    message_id = source.get("Message-ID")
    message_id = str(message_id).strip() if message_id is not None else None
    if message_id:
        reply["In-Reply-To"] = message_id
    references = source.get("References") or source.get("In-Reply-To")
    chain = " ".join(str(part).strip() for part in (references, message_id) if part)
    if chain:
        reply["References"] = chain
    return Ok(reply)
