"""
Attachment and embedded image resources.
"""

from typing import Optional

from pydantic import BaseModel


class AttachmentResource(BaseModel):
    """A named binary resource. Embedded images use `name` as their Content-ID."""
    name: str
    mime_type: str = "application/octet-stream"
    data: bytes
    description: Optional[str] = None
    content_transfer_encoding: Optional[str] = None

    model_config = {"frozen": True, "ser_json_bytes": "base64"}

    @property
    def maintype(self) -> str:
        return self.mime_type.split("/", 1)[0]

    @property
    def subtype(self) -> str:
        parts = self.mime_type.split("/", 1)
        return parts[1] if len(parts) == 2 else "octet-stream"
