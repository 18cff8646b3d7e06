"""Document service - registers and reviews supporting documents."""

from uuid import UUID

import structlog

from loanflow.application.dto import DocumentReviewRequest, RegisterDocumentRequest
from loanflow.domain.entities import (
    Actor,
    Document,
    DocumentStatus,
    DocumentType,
    IdCardType,
    LoanApplication,
    NotificationType,
    UserRole,
    utcnow,
)
from loanflow.domain.exceptions import (
    ApplicationNotFoundException,
    AuthorizationError,
    DocumentNotFoundException,
    DuplicateDocumentException,
)
from loanflow.domain.interfaces import (
    ActivityRecorder,
    ApplicationRepository,
    DocumentRepository,
)
from loanflow.service.workflow import can_view_application

from .common import ensure_valid, notify_unless_actor

logger = structlog.get_logger(__name__)

REVIEWER_ROLES = (UserRole.LOAN_OFFICER, UserRole.APPROVER, UserRole.SUPER_ADMIN)


class DocumentService:
    """
    Application service for document metadata.

    Files live on the external media host; only their URL, size and
    type are recorded here.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        document_repository: DocumentRepository,
        recorder: ActivityRecorder,
    ):
        self._application_repo = application_repository
        self._document_repo = document_repository
        self._recorder = recorder

    async def register(
        self,
        actor: Actor,
        application_id: UUID,
        request: RegisterDocumentRequest,
    ) -> Document:
        """
        Attach a document to an application.

        Raises:
            ApplicationNotFoundException: If the application does not exist
            AuthorizationError: If the actor is not the owner or a super admin
            ValidationError: If the metadata is invalid
            DuplicateDocumentException: If the type is already on file
        """
        application = await self._get_application(application_id)
        if not (actor.is_admin or actor.owns(application.applicant_id)):
            raise AuthorizationError("You can only upload documents to your own applications")

        ensure_valid(request)

        document_type = DocumentType(request.document_type)
        if await self._document_repo.get_by_type(application.id, document_type):
            raise DuplicateDocumentException(document_type.value)

        document = await self._document_repo.save(
            Document(
                application_id=application.id,
                type=document_type,
                file_name=request.file_name,
                file_url=request.file_url,
                file_size=request.file_size,
                mime_type=request.mime_type,
                uploaded_by_id=actor.user_id,
                id_card_type=IdCardType(request.id_card_type) if request.id_card_type else None,
            )
        )

        await self._recorder.record_audit(
            actor_id=actor.user_id,
            action="UPLOAD_DOCUMENT",
            entity_type="Document",
            entity_id=str(document.id),
            old_values=None,
            new_values=document.to_dict(),
            metadata=actor.metadata,
        )

        logger.info(
            "document_registered",
            document_id=str(document.id),
            application_id=str(application.id),
            document_type=document_type.value,
        )
        return document

    async def list_for_application(self, actor: Actor, application_id: UUID) -> list[Document]:
        application = await self._get_application(application_id)
        if not can_view_application(actor, application.applicant_id):
            raise AuthorizationError("You can only view documents on your own applications")
        return await self._document_repo.list_for_application(application.id)

    async def review(
        self,
        actor: Actor,
        document_id: UUID,
        request: DocumentReviewRequest,
    ) -> Document:
        if not actor.has_role(*REVIEWER_ROLES):
            raise AuthorizationError("Only staff can review documents")

        ensure_valid(request)

        document = await self._get_document(document_id)
        before = document.to_dict()

        document.status = DocumentStatus(request.status)
        document.notes = request.notes
        document.reviewed_by_id = actor.user_id
        document.reviewed_at = utcnow()
        document = await self._document_repo.update(document)

        await self._recorder.record_audit(
            actor_id=actor.user_id,
            action="DOCUMENT_STATUS_UPDATED",
            entity_type="Document",
            entity_id=str(document.id),
            old_values=before,
            new_values=document.to_dict(),
            metadata=actor.metadata,
        )

        application = await self._get_application(document.application_id)
        label = document.type.value.replace("_", " ").title()
        await notify_unless_actor(
            self._recorder,
            actor,
            application.applicant_id,
            NotificationType.DOCUMENT_REVIEWED,
            "Document Reviewed",
            f"Your {label} was marked {document.status.value.lower()}.",
            application_id=application.id,
        )

        logger.info(
            "document_reviewed",
            document_id=str(document.id),
            status=document.status.value,
        )
        return document

    async def delete(self, actor: Actor, document_id: UUID) -> None:
        """
        Remove a document.

        Super admins may delete any document; applicants only their own
        and only while it is still pending review.
        """
        document = await self._get_document(document_id)
        application = await self._get_application(document.application_id)

        if not actor.is_admin:
            if not actor.owns(application.applicant_id):
                raise AuthorizationError("You can only delete your own documents")
            if document.status is not DocumentStatus.PENDING:
                raise AuthorizationError("Reviewed documents cannot be deleted")

        await self._document_repo.delete(document.id)

        await self._recorder.record_audit(
            actor_id=actor.user_id,
            action="DOCUMENT_DELETED",
            entity_type="Document",
            entity_id=str(document.id),
            old_values=document.to_dict(),
            new_values=None,
            metadata=actor.metadata,
        )
        logger.info("document_deleted", document_id=str(document.id))

    async def _get_application(self, application_id: UUID) -> LoanApplication:
        application = await self._application_repo.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundException(str(application_id))
        return application

    async def _get_document(self, document_id: UUID) -> Document:
        document = await self._document_repo.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundException(str(document_id))
        return document
