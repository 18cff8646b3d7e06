"""Officer and approver dashboards, plus the caller's notifications."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from loanflow.application.services import DashboardService, NotificationService
from loanflow.core.dependencies import (
    CurrentActor,
    get_dashboard_service,
    get_notification_service,
)
from loanflow.presentation.schemas import (
    ApproverStatsSchema,
    ErrorResponseSchema,
    NotificationSchema,
    OfficerStatsSchema,
    PendingQueueItemSchema,
)

dashboards_router = APIRouter(
    responses={
        401: {"model": ErrorResponseSchema, "description": "Not authenticated"},
        403: {"model": ErrorResponseSchema, "description": "Role not allowed"},
    },
)

DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]


@dashboards_router.get("/officer/stats", response_model=OfficerStatsSchema, summary="Officer Dashboard")
async def officer_stats(actor: CurrentActor, dashboard: DashboardServiceDep) -> OfficerStatsSchema:
    stats = await dashboard.officer_stats(actor)
    return OfficerStatsSchema(**asdict(stats))


@dashboards_router.get("/approver/stats", response_model=ApproverStatsSchema, summary="Approver Dashboard")
async def approver_stats(actor: CurrentActor, dashboard: DashboardServiceDep) -> ApproverStatsSchema:
    stats = await dashboard.approver_stats(actor)
    return ApproverStatsSchema(**asdict(stats))


@dashboards_router.get(
    "/approver/pending",
    response_model=list[PendingQueueItemSchema],
    summary="Approver Queue",
    description="Newest UNDER_REVIEW applications with the officer's recommendation.",
)
async def approver_pending(
    actor: CurrentActor,
    dashboard: DashboardServiceDep,
    limit: Annotated[int, Query(ge=1, le=50)] = 5,
) -> list[PendingQueueItemSchema]:
    items = await dashboard.approver_pending(actor, limit=limit)
    return [PendingQueueItemSchema(**asdict(item)) for item in items]


@dashboards_router.get(
    "/notifications",
    response_model=list[NotificationSchema],
    summary="My Notifications",
    description="The caller's most recent notifications, newest first.",
)
async def list_notifications(
    actor: CurrentActor,
    notifications: Annotated[NotificationService, Depends(get_notification_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> list[NotificationSchema]:
    items = await notifications.list_for(actor, limit=limit)
    return [NotificationSchema.from_entity(n) for n in items]
