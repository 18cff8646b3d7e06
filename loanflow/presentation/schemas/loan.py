"""Loan schemas."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from loanflow.domain.entities import Loan

from .common import PaginationSchema


class CreateLoanSchema(BaseModel):
    """Schema for POST /v1/loans request body."""

    application_id: UUID
    approved_amount: float = Field(..., examples=[300000])
    disbursement_amount: Optional[float] = Field(
        None,
        description="Defaults to approved_amount",
    )
    interest_rate: float = Field(..., description="Percent for the whole term", examples=[15.5])
    duration: int = Field(..., description="Term in months", examples=[12])
    monthly_payment: float = Field(..., examples=[28875])
    bank_account: Optional[str] = Field(None, max_length=50)
    bank_name: Optional[str] = Field(None, max_length=255)


class LoanSchema(BaseModel):
    id: str
    application_id: str
    approved_amount: float
    disbursement_amount: float
    interest_rate: float
    duration: int
    monthly_payment: float
    total_repayment: float
    bank_account: Optional[str] = None
    bank_name: Optional[str] = None
    disbursement_date: Optional[datetime] = None
    next_payment_due: Optional[date] = None
    created_by: str
    created_at: datetime

    @classmethod
    def from_entity(cls, loan: Loan) -> "LoanSchema":
        return cls(
            id=str(loan.id),
            application_id=str(loan.application_id),
            approved_amount=loan.approved_amount,
            disbursement_amount=loan.disbursement_amount,
            interest_rate=loan.interest_rate,
            duration=loan.duration,
            monthly_payment=loan.monthly_payment,
            total_repayment=loan.total_repayment,
            bank_account=loan.bank_account,
            bank_name=loan.bank_name,
            disbursement_date=loan.disbursement_date,
            next_payment_due=loan.next_payment_due,
            created_by=str(loan.created_by),
            created_at=loan.created_at,
        )


class LoanResponseSchema(BaseModel):
    loan: LoanSchema


class LoanListSchema(BaseModel):
    items: list[LoanSchema]
    pagination: PaginationSchema
