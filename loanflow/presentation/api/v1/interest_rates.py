"""Interest rate table endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from loanflow.application.dto import InterestRateRequest
from loanflow.application.services import InterestRateService
from loanflow.core.dependencies import CurrentActor, get_interest_rate_service
from loanflow.presentation.schemas import (
    AvailableRateSchema,
    ErrorResponseSchema,
    InterestRateListSchema,
    InterestRateRequestSchema,
    InterestRateSchema,
)

from .pagination import PageParams, pagination_of

interest_rates_router = APIRouter(
    prefix="/interest-rates",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)

RateServiceDep = Annotated[InterestRateService, Depends(get_interest_rate_service)]


@interest_rates_router.get(
    "/available",
    response_model=list[AvailableRateSchema],
    summary="Available Rates",
    description="Active rates by duration, ordered by months. Public.",
)
async def available_rates(service: RateServiceDep) -> list[AvailableRateSchema]:
    rates = await service.available()
    return [AvailableRateSchema(months=r.months, rate=r.rate) for r in rates]


@interest_rates_router.get(
    "",
    response_model=InterestRateListSchema,
    summary="List Interest Rates",
    responses={
        403: {"model": ErrorResponseSchema, "description": "Super admin only"},
    },
)
async def list_rates(
    actor: CurrentActor,
    service: RateServiceDep,
    page: PageParams,
) -> InterestRateListSchema:
    result = await service.list_rates(actor, page)
    return InterestRateListSchema(
        items=[InterestRateSchema.from_entity(r) for r in result.items],
        pagination=pagination_of(result),
    )


@interest_rates_router.post(
    "",
    response_model=InterestRateSchema,
    summary="Set Interest Rate",
    description="Create or replace the rate for a duration. Super admin only.",
    responses={
        403: {"model": ErrorResponseSchema, "description": "Super admin only"},
    },
)
async def set_rate(
    request: InterestRateRequestSchema,
    actor: CurrentActor,
    service: RateServiceDep,
) -> InterestRateSchema:
    rate = await service.upsert(actor, InterestRateRequest(months=request.months, rate=request.rate))
    return InterestRateSchema.from_entity(rate)


@interest_rates_router.delete(
    "/{rate_id}",
    status_code=204,
    summary="Delete Interest Rate",
    responses={
        403: {"model": ErrorResponseSchema, "description": "Super admin only"},
        404: {"model": ErrorResponseSchema, "description": "Rate not found"},
    },
)
async def delete_rate(
    rate_id: UUID,
    actor: CurrentActor,
    service: RateServiceDep,
) -> Response:
    await service.delete(actor, rate_id)
    return Response(status_code=204)
