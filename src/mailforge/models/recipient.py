"""
Recipient model — an address plus role plus optional display name.
"""

from email.utils import formataddr, parseaddr
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from mailforge.errors import ParseError


class RecipientType(str, Enum):
    TO = "To"
    CC = "Cc"
    BCC = "Bcc"


class Recipient(BaseModel):
    name: Optional[str] = None
    address: str
    type: Optional[RecipientType] = None

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, value: str, type: Optional[RecipientType] = None) -> "Recipient":
        """Parse `"Name <addr@host>"` or a bare address."""
        name, address = parseaddr(value)
        if not address:
            raise ParseError(f"Not an email address: {value!r}", {"value": value})
        return cls(name=name or None, address=address, type=type)

    def with_type(self, type: Optional[RecipientType]) -> "Recipient":
        if type == self.type:
            return self
        return self.model_copy(update={"type": type})

    def formatted(self) -> str:
        return formataddr((self.name or "", self.address))
