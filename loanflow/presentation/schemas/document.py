"""Document schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from loanflow.domain.entities import Document


class RegisterDocumentSchema(BaseModel):
    """Metadata of a file already stored on the media host."""

    document_type: str = Field(..., examples=["BANK_STATEMENT"])
    file_name: str = Field(..., max_length=255, examples=["statement-june.pdf"])
    file_url: str = Field(..., examples=["https://media.example.com/docs/statement-june.pdf"])
    file_size: int = Field(..., description="Bytes", examples=[245760])
    mime_type: str = Field(..., examples=["application/pdf"])
    id_card_type: Optional[str] = Field(None, description="Required for ID_CARD")


class DocumentReviewSchema(BaseModel):
    status: str = Field(..., examples=["APPROVED"])
    notes: Optional[str] = None


class DocumentSchema(BaseModel):
    id: str
    application_id: str
    document_type: str
    id_card_type: Optional[str] = None
    file_name: str
    file_url: str
    file_size: int
    mime_type: str
    status: str
    notes: Optional[str] = None
    uploaded_by_id: str
    reviewed_by_id: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    uploaded_at: datetime

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentSchema":
        return cls(
            id=str(document.id),
            application_id=str(document.application_id),
            document_type=document.type.value,
            id_card_type=document.id_card_type.value if document.id_card_type else None,
            file_name=document.file_name,
            file_url=document.file_url,
            file_size=document.file_size,
            mime_type=document.mime_type,
            status=document.status.value,
            notes=document.notes,
            uploaded_by_id=str(document.uploaded_by_id),
            reviewed_by_id=str(document.reviewed_by_id) if document.reviewed_by_id else None,
            reviewed_at=document.reviewed_at,
            uploaded_at=document.uploaded_at,
        )
