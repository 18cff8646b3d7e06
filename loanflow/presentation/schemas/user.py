"""User, registration and staff schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from loanflow.domain.entities import User

from .common import PaginationSchema


class RegisterUserSchema(BaseModel):
    """Schema for POST /v1/auth/register request body."""

    name: str = Field(..., examples=["Ada Obi"])
    email: str = Field(..., examples=["ada@example.com"])
    password: str = Field(..., examples=["s3cret!"])
    phone_number: str = Field(..., examples=["08012345678"])
    address: str = Field(..., examples=["12 Marina Road, Lagos"])


class CreateUserSchema(BaseModel):
    name: str
    email: str
    role: str = Field(..., examples=["LOAN_OFFICER"])
    phone_number: Optional[str] = None
    address: Optional[str] = None


class StaffStatusSchema(BaseModel):
    is_active: bool


class UserSchema(BaseModel):
    """Public view of an account; never carries the password hash."""

    id: str
    email: str
    name: str
    role: str
    phone_number: Optional[str] = None
    address: Optional[str] = None
    is_active: bool
    email_verified: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserSchema":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=user.role.value,
            phone_number=user.phone_number,
            address=user.address,
            is_active=user.is_active,
            email_verified=user.email_verified,
            created_at=user.created_at,
        )


class UserListSchema(BaseModel):
    items: list[UserSchema]
    pagination: PaginationSchema


class CreatedUserSchema(BaseModel):
    user: UserSchema
    temporary_password: str = Field(..., description="Shown once; share it securely")
