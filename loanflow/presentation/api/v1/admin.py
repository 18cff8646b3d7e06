"""Super admin endpoints for accounts and staff."""

from dataclasses import asdict
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from loanflow.application.dto import CreateUserRequest, UserListRequest
from loanflow.application.services import DashboardService, UserService
from loanflow.core.dependencies import CurrentActor, get_dashboard_service, get_user_service
from loanflow.presentation.schemas import (
    AdminStatsSchema,
    CreatedUserSchema,
    CreateUserSchema,
    ErrorResponseSchema,
    StaffStatusSchema,
    UserListSchema,
    UserSchema,
)

from .pagination import PageParams, pagination_of

admin_router = APIRouter(
    prefix="/admin",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Not authenticated"},
        403: {"model": ErrorResponseSchema, "description": "Super admin only"},
    },
)

UserServiceDep = Annotated[UserService, Depends(get_user_service)]
RoleFilter = Annotated[Optional[str], Query(description="Filter by role")]
StatusFilter = Annotated[Optional[str], Query(description="'active' or 'inactive'")]


@admin_router.get("/users", response_model=UserListSchema, summary="List Users")
async def list_users(
    actor: CurrentActor,
    service: UserServiceDep,
    page: PageParams,
    role: RoleFilter = None,
    status: StatusFilter = None,
) -> UserListSchema:
    dto = UserListRequest(page=page.page, limit=page.limit, role=role, status=status)
    result = await service.list_users(actor, dto)
    return UserListSchema(
        items=[UserSchema.from_entity(u) for u in result.items],
        pagination=pagination_of(result),
    )


@admin_router.post(
    "/users",
    response_model=CreatedUserSchema,
    status_code=201,
    summary="Create User",
    description="Create an account with a generated temporary password.",
)
async def create_user(
    request: CreateUserSchema,
    actor: CurrentActor,
    service: UserServiceDep,
) -> CreatedUserSchema:
    created = await service.create_user(actor, CreateUserRequest(**request.model_dump()))
    return CreatedUserSchema(
        user=UserSchema.from_entity(created.user),
        temporary_password=created.temporary_password,
    )


@admin_router.get("/staff", response_model=UserListSchema, summary="List Staff")
async def list_staff(
    actor: CurrentActor,
    service: UserServiceDep,
    page: PageParams,
    role: RoleFilter = None,
    status: StatusFilter = None,
) -> UserListSchema:
    dto = UserListRequest(page=page.page, limit=page.limit, role=role, status=status)
    result = await service.list_staff(actor, dto)
    return UserListSchema(
        items=[UserSchema.from_entity(u) for u in result.items],
        pagination=pagination_of(result),
    )


@admin_router.patch(
    "/staff/{user_id}",
    response_model=UserSchema,
    summary="Update Staff Status",
    description="Activate or deactivate a staff account. Deactivated staff cannot sign in.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "User not found"},
    },
)
async def update_staff_status(
    user_id: UUID,
    request: StaffStatusSchema,
    actor: CurrentActor,
    service: UserServiceDep,
) -> UserSchema:
    user = await service.update_staff_status(actor, user_id, request.is_active)
    return UserSchema.from_entity(user)


@admin_router.get("/stats", response_model=AdminStatsSchema, summary="Admin Dashboard")
async def admin_stats(
    actor: CurrentActor,
    dashboard: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> AdminStatsSchema:
    stats = await dashboard.admin_stats(actor)
    return AdminStatsSchema(**asdict(stats))
