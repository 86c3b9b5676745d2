from mailforge.models.attachment import AttachmentResource
from mailforge.models.email import CalendarMethod, ContentTransferEncoding, Email, InternalEmail
from mailforge.models.recipient import Recipient, RecipientType
from mailforge.models.security import DkimConfig, OriginalSmimeDetails, Pkcs12Config, SmimeMode, X509Certificate

__all__ = [
    "AttachmentResource",
    "CalendarMethod",
    "ContentTransferEncoding",
    "DkimConfig",
    "Email",
    "InternalEmail",
    "OriginalSmimeDetails",
    "Pkcs12Config",
    "Recipient",
    "RecipientType",
    "SmimeMode",
    "X509Certificate",
]
