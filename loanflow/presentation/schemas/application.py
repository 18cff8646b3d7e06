"""Loan application and review schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from loanflow.domain.entities import LoanApplication, LoanReview, User

from .common import PaginationSchema
from .loan import LoanSchema


class SubmitApplicationSchema(BaseModel):
    """Schema for POST /v1/applications request body."""

    amount: float = Field(..., description="Requested principal", examples=[300000])
    purpose: str = Field(..., max_length=2000, examples=["Working capital for my shop"])
    duration: int = Field(..., description="Term in months", examples=[12])
    monthly_income: float = Field(..., examples=[150000])
    employment_status: str = Field(..., examples=["EMPLOYED"])
    employer_name: Optional[str] = Field(None, max_length=255, examples=["Acme Ltd"])
    work_experience: Optional[int] = Field(None, description="Years", examples=[4])
    account_number: Optional[str] = Field(None, max_length=50)
    bank_name: Optional[str] = Field(None, max_length=255)


class AccountDetailsSchema(BaseModel):
    account_number: Optional[str] = Field(None, max_length=50, examples=["0123456789"])
    bank_name: Optional[str] = Field(None, max_length=255, examples=["First Bank"])


class AdditionalInfoSchema(BaseModel):
    info: str = Field(..., description="Answer to the reviewer's request")


class ReviewRequestSchema(BaseModel):
    """Schema for POST /v1/applications/{id}/review request body."""

    decision: str = Field(
        ...,
        description="APPROVED, REJECTED or REQUEST_INFO",
        examples=["APPROVED"],
    )
    comments: Optional[str] = Field(
        None,
        description="Required for REQUEST_INFO; becomes the requested information",
        examples=["Please upload your last three payslips"],
    )
    review_type: Optional[str] = Field(
        None,
        description="OFFICER_REVIEW or APPROVER_REVIEW; inferred from the role when omitted",
    )


class ApplicationSchema(BaseModel):
    id: str
    applicant_id: str
    amount: float
    purpose: str
    duration: int
    interest_rate: float
    monthly_income: float
    employment_status: str
    employer_name: Optional[str] = None
    work_experience: Optional[int] = None
    status: str = Field(..., examples=["UNDER_REVIEW"])
    account_number: Optional[str] = None
    bank_name: Optional[str] = None
    additional_info_requested: Optional[str] = None
    additional_info_provided: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    disbursed_at: Optional[datetime] = None
    submitted_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, application: LoanApplication) -> "ApplicationSchema":
        return cls(
            id=str(application.id),
            applicant_id=str(application.applicant_id),
            amount=application.amount,
            purpose=application.purpose,
            duration=application.duration,
            interest_rate=application.interest_rate,
            monthly_income=application.monthly_income,
            employment_status=application.employment_status.value,
            employer_name=application.employer_name,
            work_experience=application.work_experience,
            status=application.status.value,
            account_number=application.account_number,
            bank_name=application.bank_name,
            additional_info_requested=application.additional_info_requested,
            additional_info_provided=application.additional_info_provided,
            approved_at=application.approved_at,
            rejected_at=application.rejected_at,
            disbursed_at=application.disbursed_at,
            submitted_at=application.submitted_at,
            updated_at=application.updated_at,
        )


class ReviewSchema(BaseModel):
    id: str
    application_id: str
    reviewer_id: str
    review_type: str
    decision: str
    comments: str
    reviewed_at: datetime

    @classmethod
    def from_entity(cls, review: LoanReview) -> "ReviewSchema":
        return cls(
            id=str(review.id),
            application_id=str(review.application_id),
            reviewer_id=str(review.reviewer_id),
            review_type=review.review_type.value,
            decision=review.decision.value,
            comments=review.comments,
            reviewed_at=review.reviewed_at,
        )


class ApplicantSummarySchema(BaseModel):
    id: str
    name: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "ApplicantSummarySchema":
        return cls(id=str(user.id), name=user.name, email=user.email)


class ApplicationDetailSchema(ApplicationSchema):
    reviews: list[ReviewSchema] = Field(default_factory=list, description="Newest first")
    loan: Optional[LoanSchema] = None
    applicant: Optional[ApplicantSummarySchema] = None


class ApplicationListSchema(BaseModel):
    items: list[ApplicationSchema]
    pagination: PaginationSchema


class ReviewResponseSchema(BaseModel):
    application: ApplicationSchema
    review: ReviewSchema


class DisbursementResponseSchema(BaseModel):
    application: ApplicationSchema
    loan: LoanSchema
