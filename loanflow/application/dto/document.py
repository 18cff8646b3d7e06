"""Data transfer objects for document registration and review."""

from dataclasses import dataclass
from typing import List, Optional

from loanflow.domain.entities import DocumentStatus, DocumentType, IdCardType
from loanflow.service.workflow import workflow_settings


@dataclass(frozen=True)
class RegisterDocumentRequest:
    """Metadata for a file the client already stored on the media host."""

    document_type: str
    file_name: str
    file_url: str
    file_size: int
    mime_type: str
    id_card_type: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.document_type not in DocumentType.__members__:
            errors.append(f"invalid document_type: {self.document_type}")

        if not self.file_name or not self.file_name.strip():
            errors.append("file_name is required")

        if not self.file_url or not self.file_url.startswith(("http://", "https://")):
            errors.append("file_url must be an http(s) URL")

        if self.file_size <= 0:
            errors.append("file_size must be positive")
        elif self.file_size > workflow_settings.max_document_bytes:
            limit_mb = workflow_settings.max_document_bytes // (1024 * 1024)
            errors.append(f"file_size exceeds the {limit_mb}MB limit")

        if self.mime_type not in workflow_settings.allowed_mime_types:
            errors.append(f"unsupported mime_type: {self.mime_type}")

        if self.document_type == DocumentType.ID_CARD.value:
            if self.id_card_type not in IdCardType.__members__:
                errors.append("id_card_type is required for ID cards")
        elif self.id_card_type is not None:
            errors.append("id_card_type only applies to ID cards")

        return errors


@dataclass(frozen=True)
class DocumentReviewRequest:
    status: str
    notes: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.status not in DocumentStatus.__members__:
            errors.append(f"invalid status: {self.status}")

        return errors
