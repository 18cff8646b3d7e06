"""Review and disbursement endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from loanflow.application.dto import ReviewRequest
from loanflow.application.services import DisbursementService, ReviewService
from loanflow.core.dependencies import (
    CurrentActor,
    get_disbursement_service,
    get_review_service,
)
from loanflow.presentation.schemas import (
    ApplicationSchema,
    DisbursementResponseSchema,
    ErrorResponseSchema,
    LoanSchema,
    ReviewRequestSchema,
    ReviewResponseSchema,
    ReviewSchema,
)

workflow_router = APIRouter(
    prefix="/applications",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request or transition"},
        401: {"model": ErrorResponseSchema, "description": "Not authenticated"},
        403: {"model": ErrorResponseSchema, "description": "Role not allowed"},
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
    },
)


@workflow_router.post(
    "/{application_id}/review",
    response_model=ReviewResponseSchema,
    summary="Review Application",
    description="""
    Record an officer or approver decision on an application.

    Officers move PENDING applications to UNDER_REVIEW (approve), REJECTED
    or ADDITIONAL_INFO_REQUESTED. Approvers finalize UNDER_REVIEW
    applications. The update only applies if the status has not changed
    since it was read.
    """,
)
async def review_application(
    application_id: UUID,
    request: ReviewRequestSchema,
    actor: CurrentActor,
    review_service: Annotated[ReviewService, Depends(get_review_service)],
) -> ReviewResponseSchema:
    dto = ReviewRequest(
        decision=request.decision,
        comments=request.comments,
        review_type=request.review_type,
    )

    result = await review_service.review(application_id, actor, dto)

    return ReviewResponseSchema(
        application=ApplicationSchema.from_entity(result.application),
        review=ReviewSchema.from_entity(result.review),
    )


@workflow_router.post(
    "/{application_id}/disburse",
    response_model=DisbursementResponseSchema,
    summary="Disburse Loan",
    description="""
    Pay out an APPROVED application.

    Stamps the existing loan with the disbursement date, or books one from
    the application's terms when none was created.
    """,
)
async def disburse_application(
    application_id: UUID,
    actor: CurrentActor,
    disbursement_service: Annotated[DisbursementService, Depends(get_disbursement_service)],
) -> DisbursementResponseSchema:
    result = await disbursement_service.disburse(application_id, actor)

    return DisbursementResponseSchema(
        application=ApplicationSchema.from_entity(result.application),
        loan=LoanSchema.from_entity(result.loan),
    )
