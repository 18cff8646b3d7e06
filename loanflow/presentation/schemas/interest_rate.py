"""Interest rate schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from loanflow.domain.entities import InterestRate

from .common import PaginationSchema


class InterestRateRequestSchema(BaseModel):
    months: int = Field(..., examples=[12])
    rate: float = Field(..., description="Annual percent", examples=[15.5])


class InterestRateSchema(BaseModel):
    id: str
    months: int
    rate: float
    is_active: bool
    admin_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, rate: InterestRate) -> "InterestRateSchema":
        return cls(
            id=str(rate.id),
            months=rate.months,
            rate=rate.rate,
            is_active=rate.is_active,
            admin_id=str(rate.admin_id),
            created_at=rate.created_at,
            updated_at=rate.updated_at,
        )


class InterestRateListSchema(BaseModel):
    items: list[InterestRateSchema]
    pagination: PaginationSchema


class AvailableRateSchema(BaseModel):
    months: int
    rate: float
