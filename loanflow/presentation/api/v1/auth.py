"""Self-service registration endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from loanflow.application.dto import RegisterUserRequest
from loanflow.application.services import UserService
from loanflow.core.dependencies import get_metadata, get_user_service
from loanflow.domain.entities import RequestMetadata
from loanflow.presentation.schemas import ErrorResponseSchema, RegisterUserSchema, UserSchema

auth_router = APIRouter(
    prefix="/auth",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request or email taken"},
    },
)


@auth_router.post(
    "/register",
    response_model=UserSchema,
    status_code=201,
    summary="Register Applicant",
    description="Create an APPLICANT account. Sessions are issued by the identity provider.",
)
async def register(
    request: RegisterUserSchema,
    metadata: Annotated[RequestMetadata, Depends(get_metadata)],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserSchema:
    user = await user_service.register(RegisterUserRequest(**request.model_dump()), metadata)
    return UserSchema.from_entity(user)
