"""Supporting document metadata.

The file itself lives on the external media host; only its URL and
descriptive fields are stored here.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from .clock import utcnow


class DocumentType(str, Enum):
    ID_CARD = "ID_CARD"
    PASSPORT = "PASSPORT"
    BANK_STATEMENT = "BANK_STATEMENT"
    PAY_SLIP = "PAY_SLIP"
    UTILITY_BILL = "UTILITY_BILL"
    BUSINESS_REGISTRATION = "BUSINESS_REGISTRATION"
    PROOF_OF_FUNDS = "PROOF_OF_FUNDS"


class IdCardType(str, Enum):
    NATIONAL_ID = "NATIONAL_ID"
    DRIVERS_LICENSE = "DRIVERS_LICENSE"
    VOTERS_CARD = "VOTERS_CARD"
    INTERNATIONAL_PASSPORT = "INTERNATIONAL_PASSPORT"


class DocumentStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass
class Document:
    application_id: UUID
    type: DocumentType
    file_name: str
    file_url: str
    file_size: int
    mime_type: str
    uploaded_by_id: UUID
    id_card_type: Optional[IdCardType] = None
    status: DocumentStatus = DocumentStatus.PENDING
    notes: Optional[str] = None
    reviewed_by_id: Optional[UUID] = None
    reviewed_at: Optional[datetime] = None
    id: UUID = field(default_factory=uuid4)
    uploaded_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "document_id": str(self.id),
            "application_id": str(self.application_id),
            "type": self.type.value,
            "file_name": self.file_name,
            "status": self.status.value,
            "notes": self.notes,
        }
