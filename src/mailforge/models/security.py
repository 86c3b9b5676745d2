"""
S/MIME and DKIM configuration values.

These are carried around as opaque, immutable configuration; signing and
encryption happen elsewhere.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Pkcs12Config(BaseModel):
    keystore: bytes
    store_password: str
    key_alias: str
    key_password: str

    model_config = {"frozen": True, "ser_json_bytes": "base64"}


class X509Certificate(BaseModel):
    """A certificate in PEM or DER form."""
    data: bytes
    key_encapsulation_algorithm: Optional[str] = None
    cipher_algorithm: Optional[str] = None

    model_config = {"frozen": True, "ser_json_bytes": "base64"}


class DkimConfig(BaseModel):
    private_key: bytes
    signing_domain: str
    selector: str
    use_length_param: Optional[bool] = None
    excluded_headers: Optional[list[str]] = None

    model_config = {"frozen": True, "ser_json_bytes": "base64"}


class SmimeMode(str, Enum):
    PLAIN = "plain"
    SIGNED = "signed"
    ENCRYPTED = "encrypted"
    SIGNED_ENCRYPTED = "signed_encrypted"


class OriginalSmimeDetails(BaseModel):
    """What the source message looked like before S/MIME processing."""
    smime_mode: SmimeMode = SmimeMode.PLAIN
    smime_mime: Optional[str] = None
    smime_type: Optional[str] = None
    smime_name: Optional[str] = None
    smime_micalg: Optional[str] = None
    smime_signed_by: Optional[str] = None
    smime_signature_valid: Optional[bool] = None

    model_config = {"frozen": True}
