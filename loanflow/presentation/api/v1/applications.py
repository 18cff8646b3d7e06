"""Loan application intake and self-service endpoints."""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from loanflow.application.dto import (
    AccountDetailsRequest,
    AdditionalInfoRequest,
    ApplicationListRequest,
    SubmitApplicationRequest,
)
from loanflow.application.services import ApplicationService, ReviewService
from loanflow.core.dependencies import (
    CurrentActor,
    get_application_service,
    get_review_service,
)
from loanflow.presentation.schemas import (
    AccountDetailsSchema,
    AdditionalInfoSchema,
    ApplicantSummarySchema,
    ApplicationDetailSchema,
    ApplicationListSchema,
    ApplicationSchema,
    ErrorResponseSchema,
    LoanSchema,
    ReviewSchema,
    SubmitApplicationSchema,
)

from .pagination import PageParams, pagination_of

applications_router = APIRouter(
    prefix="/applications",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Not authenticated"},
        403: {"model": ErrorResponseSchema, "description": "Not allowed"},
    },
)

ApplicationServiceDep = Annotated[ApplicationService, Depends(get_application_service)]


@applications_router.post(
    "",
    response_model=ApplicationSchema,
    status_code=201,
    summary="Submit Application",
    description="""
    Submit a new loan application for the calling applicant.

    The interest rate is fixed at intake from the active rate for the
    requested duration. Every active loan officer is notified.
    """,
)
async def submit_application(
    request: SubmitApplicationSchema,
    actor: CurrentActor,
    service: ApplicationServiceDep,
) -> ApplicationSchema:
    dto = SubmitApplicationRequest(**request.model_dump())
    application = await service.submit(actor, dto)
    return ApplicationSchema.from_entity(application)


@applications_router.get(
    "",
    response_model=ApplicationListSchema,
    summary="List Applications",
    description="""
    List the applications visible to the caller, newest first.

    Applicants see their own; officers and approvers see their queues plus
    anything they reviewed; super admins see everything.
    """,
)
async def list_applications(
    actor: CurrentActor,
    service: ApplicationServiceDep,
    page: PageParams,
    status: Annotated[Optional[str], Query(description="Filter by status")] = None,
) -> ApplicationListSchema:
    dto = ApplicationListRequest(page=page.page, limit=page.limit, status=status)
    result = await service.list_applications(actor, dto)
    return ApplicationListSchema(
        items=[ApplicationSchema.from_entity(a) for a in result.items],
        pagination=pagination_of(result),
    )


@applications_router.get(
    "/{application_id}",
    response_model=ApplicationDetailSchema,
    summary="Get Application",
    description="Fetch one application with its reviews (newest first), loan and applicant.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
    },
)
async def get_application(
    application_id: UUID,
    actor: CurrentActor,
    service: ApplicationServiceDep,
) -> ApplicationDetailSchema:
    detail = await service.get_detail(actor, application_id)
    base = ApplicationSchema.from_entity(detail.application)
    return ApplicationDetailSchema(
        **base.model_dump(),
        reviews=[ReviewSchema.from_entity(r) for r in detail.reviews],
        loan=LoanSchema.from_entity(detail.loan) if detail.loan else None,
        applicant=(
            ApplicantSummarySchema.from_entity(detail.applicant) if detail.applicant else None
        ),
    )


@applications_router.put(
    "/{application_id}/account",
    response_model=ApplicationSchema,
    summary="Update Account Details",
    description="Set the bank account the loan will be paid into.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
    },
)
async def update_account_details(
    application_id: UUID,
    request: AccountDetailsSchema,
    actor: CurrentActor,
    service: ApplicationServiceDep,
) -> ApplicationSchema:
    dto = AccountDetailsRequest(
        account_number=request.account_number,
        bank_name=request.bank_name,
    )
    application = await service.update_account_details(actor, application_id, dto)
    return ApplicationSchema.from_entity(application)


@applications_router.post(
    "/{application_id}/additional-info",
    response_model=ApplicationSchema,
    summary="Provide Additional Information",
    description="""
    Answer a reviewer's request for information.

    The application returns to the review stage that asked for it.
    """,
    responses={
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
    },
)
async def provide_additional_info(
    application_id: UUID,
    request: AdditionalInfoSchema,
    actor: CurrentActor,
    review_service: Annotated[ReviewService, Depends(get_review_service)],
) -> ApplicationSchema:
    application = await review_service.provide_additional_info(
        application_id,
        actor,
        AdditionalInfoRequest(info=request.info),
    )
    return ApplicationSchema.from_entity(application)
