"""Supporting document endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from loanflow.application.dto import DocumentReviewRequest, RegisterDocumentRequest
from loanflow.application.services import DocumentService
from loanflow.core.dependencies import CurrentActor, get_document_service
from loanflow.presentation.schemas import (
    DocumentReviewSchema,
    DocumentSchema,
    ErrorResponseSchema,
    RegisterDocumentSchema,
)

documents_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Not authenticated"},
        403: {"model": ErrorResponseSchema, "description": "Not allowed"},
        404: {"model": ErrorResponseSchema, "description": "Application or document not found"},
    },
)

DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]


@documents_router.post(
    "/applications/{application_id}/documents",
    response_model=DocumentSchema,
    status_code=201,
    summary="Register Document",
    description="""
    Attach an uploaded file to an application.

    The file itself lives on the media host; only its metadata is stored.
    One document per type per application.
    """,
)
async def register_document(
    application_id: UUID,
    request: RegisterDocumentSchema,
    actor: CurrentActor,
    service: DocumentServiceDep,
) -> DocumentSchema:
    dto = RegisterDocumentRequest(**request.model_dump())
    document = await service.register(actor, application_id, dto)
    return DocumentSchema.from_entity(document)


@documents_router.get(
    "/applications/{application_id}/documents",
    response_model=list[DocumentSchema],
    summary="List Documents",
)
async def list_documents(
    application_id: UUID,
    actor: CurrentActor,
    service: DocumentServiceDep,
) -> list[DocumentSchema]:
    documents = await service.list_for_application(actor, application_id)
    return [DocumentSchema.from_entity(d) for d in documents]


@documents_router.patch(
    "/documents/{document_id}",
    response_model=DocumentSchema,
    summary="Review Document",
    description="Mark a document APPROVED or REJECTED. Staff only.",
)
async def review_document(
    document_id: UUID,
    request: DocumentReviewSchema,
    actor: CurrentActor,
    service: DocumentServiceDep,
) -> DocumentSchema:
    dto = DocumentReviewRequest(status=request.status, notes=request.notes)
    document = await service.review(actor, document_id, dto)
    return DocumentSchema.from_entity(document)


@documents_router.delete(
    "/documents/{document_id}",
    status_code=204,
    summary="Delete Document",
    description="Applicants may delete their own documents while still pending review.",
)
async def delete_document(
    document_id: UUID,
    actor: CurrentActor,
    service: DocumentServiceDep,
) -> Response:
    await service.delete(actor, document_id)
    return Response(status_code=204)
