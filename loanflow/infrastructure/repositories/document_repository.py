"""PostgreSQL implementation of DocumentRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from loanflow.domain.entities import (
    Document,
    DocumentStatus,
    DocumentType,
    IdCardType,
)
from loanflow.domain.exceptions import DocumentNotFoundException
from loanflow.domain.interfaces import DocumentRepository
from loanflow.infrastructure.database.models import DocumentModel

from .mapping import as_utc, as_uuid, db_id


class PostgresDocumentRepository(DocumentRepository):
    """PostgreSQL-backed document metadata store."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, document: Document) -> Document:
        model = DocumentModel(
            id=str(document.id),
            application_id=str(document.application_id),
            type=document.type.value,
            id_card_type=document.id_card_type.value if document.id_card_type else None,
            file_name=document.file_name,
            file_url=document.file_url,
            file_size=document.file_size,
            mime_type=document.mime_type,
            status=document.status.value,
            notes=document.notes,
            uploaded_by_id=str(document.uploaded_by_id),
            uploaded_at=document.uploaded_at,
        )
        self._session.add(model)
        await self._session.flush()
        return document

    async def update(self, document: Document) -> Document:
        model = await self._session.get(DocumentModel, str(document.id))
        if model is None:
            raise DocumentNotFoundException(str(document.id))

        model.status = document.status.value
        model.notes = document.notes
        model.reviewed_by_id = db_id(document.reviewed_by_id)
        model.reviewed_at = document.reviewed_at
        await self._session.flush()
        return document

    async def delete(self, document_id: UUID) -> None:
        await self._session.execute(
            delete(DocumentModel).where(DocumentModel.id == str(document_id))
        )

    async def get_by_id(self, document_id: UUID) -> Optional[Document]:
        model = await self._session.get(DocumentModel, str(document_id))
        return self._to_entity(model) if model else None

    async def get_by_type(
        self,
        application_id: UUID,
        document_type: DocumentType,
    ) -> Optional[Document]:
        stmt = select(DocumentModel).where(
            DocumentModel.application_id == str(application_id),
            DocumentModel.type == document_type.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_application(self, application_id: UUID) -> List[Document]:
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.application_id == str(application_id))
            .order_by(DocumentModel.uploaded_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: DocumentModel) -> Document:
        return Document(
            id=as_uuid(model.id),
            application_id=as_uuid(model.application_id),
            type=DocumentType(model.type),
            id_card_type=IdCardType(model.id_card_type) if model.id_card_type else None,
            file_name=model.file_name,
            file_url=model.file_url,
            file_size=model.file_size,
            mime_type=model.mime_type,
            status=DocumentStatus(model.status),
            notes=model.notes,
            uploaded_by_id=as_uuid(model.uploaded_by_id),
            reviewed_by_id=as_uuid(model.reviewed_by_id),
            reviewed_at=as_utc(model.reviewed_at),
            uploaded_at=as_utc(model.uploaded_at),
        )
