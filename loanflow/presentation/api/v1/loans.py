"""Loan booking endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from loanflow.application.dto import CreateLoanRequest
from loanflow.application.services import LoanService
from loanflow.core.dependencies import CurrentActor, get_loan_service
from loanflow.presentation.schemas import (
    CreateLoanSchema,
    ErrorResponseSchema,
    LoanListSchema,
    LoanResponseSchema,
    LoanSchema,
)

from .pagination import PageParams, pagination_of

loans_router = APIRouter(
    prefix="/loans",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Not authenticated"},
        403: {"model": ErrorResponseSchema, "description": "Role not allowed"},
    },
)

LoanServiceDep = Annotated[LoanService, Depends(get_loan_service)]


@loans_router.post(
    "",
    response_model=LoanResponseSchema,
    status_code=201,
    summary="Create Loan",
    description="""
    Book the loan terms for an APPROVED application.

    The application status does not change; disbursement is a separate step.
    At most one loan exists per application.
    """,
    responses={
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
    },
)
async def create_loan(
    request: CreateLoanSchema,
    actor: CurrentActor,
    loan_service: LoanServiceDep,
) -> LoanResponseSchema:
    dto = CreateLoanRequest(**request.model_dump())
    loan = await loan_service.create_loan(actor, dto)
    return LoanResponseSchema(loan=LoanSchema.from_entity(loan))


@loans_router.get(
    "",
    response_model=LoanListSchema,
    summary="List Loans",
    description="List loans visible to the caller, newest first.",
)
async def list_loans(
    actor: CurrentActor,
    loan_service: LoanServiceDep,
    page: PageParams,
) -> LoanListSchema:
    result = await loan_service.list_loans(actor, page)
    return LoanListSchema(
        items=[LoanSchema.from_entity(loan) for loan in result.items],
        pagination=pagination_of(result),
    )
