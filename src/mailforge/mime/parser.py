"""
Parsing raw messages and reading single headers out of them.
"""

from email import errors, policy
from email.message import EmailMessage, Message
from email.parser import BytesHeaderParser, BytesParser, HeaderParser, Parser
from email.utils import getaddresses
from typing import Optional, Union

from mailforge.errors import ParseError
from mailforge.models.recipient import Recipient, RecipientType
from mailforge.result import Err, Ok, Result

RawMessage = Union[EmailMessage, bytes, str]

# Defects that mean the MIME structure itself could not be recovered
STRUCTURAL_DEFECTS = (
    errors.NoBoundaryInMultipartDefect,
    errors.StartBoundaryNotFoundDefect,
    errors.FirstHeaderLineIsContinuationDefect,
    errors.MisplacedEnvelopeHeaderDefect,
    errors.MultipartInvariantViolationDefect,
)


def parse_message(raw: RawMessage) -> Result[EmailMessage]:
    """Parse bytes/str into an EmailMessage. EmailMessage input is returned as-is."""
    if isinstance(raw, EmailMessage):
        return Ok(raw)
    try:
        if isinstance(raw, (bytes, bytearray)):
            msg = BytesParser(policy=policy.default).parsebytes(bytes(raw))
        elif isinstance(raw, str):
            msg = Parser(policy=policy.default).parsestr(raw)
        else:
            return Err(ParseError(f"Cannot parse a message from {type(raw).__name__}"))
    except errors.MessageError as e:
        return Err(ParseError(f"Failed to parse message: {e}"))

    if not msg.keys():
        return Err(ParseError("Message has no headers"))
    for part in msg.walk():
        fatal = [d for d in part.defects if isinstance(d, STRUCTURAL_DEFECTS)]
        if fatal:
            return Err(ParseError(
                f"Malformed MIME structure: {fatal[0].__class__.__name__}",
                {"defects": [d.__class__.__name__ for d in fatal]},
            ))
    return Ok(msg)


def parse_subject(raw: Union[RawMessage, Message]) -> Optional[str]:
    """Read only the Subject header; the body is never parsed."""
    if isinstance(raw, (bytes, bytearray)):
        headers = BytesHeaderParser(policy=policy.default).parsebytes(bytes(raw))
    elif isinstance(raw, str):
        headers = HeaderParser(policy=policy.default).parsestr(raw)
    else:
        headers = raw
    subject = headers.get("Subject")
    return str(subject) if subject is not None else None


def header_recipients(
    msg: Message,
    name: str,
    type: Optional[RecipientType] = None,
    strict: bool = False,
) -> list[Recipient]:
    """All addresses in every `name` header, in order. Groups give their members.

    With `strict`, a non-empty header yielding no usable address raises
    HeaderParseError instead of being skipped.
    """
    recipients: list[Recipient] = []
    for header in msg.get_all(name, []):
        addresses = getattr(header, "addresses", None)
        if addresses is None:
            pairs = getaddresses([str(header)])
        else:
            pairs = [(a.display_name, a.addr_spec) for a in addresses]
        found = [
            Recipient(name=display or None, address=address, type=type)
            for display, address in pairs
            if address and address != "<>"
        ]
        if strict and not found and str(header).strip():
            raise errors.HeaderParseError(f"No valid address in {name} header: {str(header)!r}")
        recipients.extend(found)
    return recipients


def header_recipient(msg: Message, name: str) -> Optional[Recipient]:
    found = header_recipients(msg, name)
    return found[0] if found else None
