"""SQLAlchemy ORM models for the loan back office."""

from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import (
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from loanflow.domain.entities import utcnow


class Base(DeclarativeBase):
    pass


def _uuid_pk() -> Mapped[str]:
    return mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )


class UserModel(Base):
    """Applicants and staff accounts."""

    __tablename__ = "users"

    id: Mapped[str] = _uuid_pk()
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class LoanApplicationModel(Base):
    """Persisted loan application."""

    __tablename__ = "loan_applications"

    id: Mapped[str] = _uuid_pk()
    applicant_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    amount_kobo: Mapped[int] = mapped_column(BigInteger, nullable=False)
    purpose: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    interest_rate: Mapped[float] = mapped_column(Float, nullable=False)
    monthly_income_kobo: Mapped[int] = mapped_column(BigInteger, nullable=False)
    employment_status: Mapped[str] = mapped_column(String(50), nullable=False)
    employer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    work_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="PENDING",
        index=True,
    )
    account_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    bank_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    additional_info_requested: Mapped[str | None] = mapped_column(Text, nullable=True)
    additional_info_provided: Mapped[str | None] = mapped_column(Text, nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    disbursed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    applicant: Mapped["UserModel"] = relationship("UserModel")
    reviews: Mapped[list["LoanReviewModel"]] = relationship(
        "LoanReviewModel",
        back_populates="application",
        order_by="LoanReviewModel.reviewed_at.desc()",
    )
    loan: Mapped["LoanModel | None"] = relationship(
        "LoanModel",
        back_populates="application",
        uselist=False,
    )


class LoanReviewModel(Base):
    """Append-only reviewer decision."""

    __tablename__ = "loan_reviews"

    id: Mapped[str] = _uuid_pk()
    application_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("loan_applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reviewer_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    review_type: Mapped[str] = mapped_column(String(50), nullable=False)
    decision: Mapped[str] = mapped_column(String(50), nullable=False)
    comments: Mapped[str] = mapped_column(Text, nullable=False, default="")
    reviewed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    application: Mapped["LoanApplicationModel"] = relationship(
        "LoanApplicationModel",
        back_populates="reviews",
    )


class LoanModel(Base):
    """Loan created from an approved application, at most one per application."""

    __tablename__ = "loans"
    __table_args__ = (UniqueConstraint("application_id", name="uq_loans_application_id"),)

    id: Mapped[str] = _uuid_pk()
    application_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("loan_applications.id", ondelete="CASCADE"),
        nullable=False,
    )
    approved_amount_kobo: Mapped[int] = mapped_column(BigInteger, nullable=False)
    disbursement_amount_kobo: Mapped[int] = mapped_column(BigInteger, nullable=False)
    interest_rate: Mapped[float] = mapped_column(Float, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    monthly_payment_kobo: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_repayment_kobo: Mapped[int] = mapped_column(BigInteger, nullable=False)
    bank_account: Mapped[str | None] = mapped_column(String(50), nullable=True)
    bank_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    disbursement_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    next_payment_due: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_by: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    application: Mapped["LoanApplicationModel"] = relationship(
        "LoanApplicationModel",
        back_populates="loan",
    )


class NotificationModel(Base):
    """In-app notification for a single recipient."""

    __tablename__ = "notifications"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    loan_application_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class AuditLogModel(Base):
    """Append-only record of a mutating action."""

    __tablename__ = "audit_logs"

    id: Mapped[str] = _uuid_pk()
    user_id: Mapped[str | None] = mapped_column(Uuid(as_uuid=False), nullable=True, index=True)
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column(String(100), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    old_values: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    new_values: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    ip_address: Mapped[str] = mapped_column(String(100), nullable=False, default="unknown")
    user_agent: Mapped[str] = mapped_column(Text, nullable=False, default="unknown")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class InterestRateModel(Base):
    """Configured annual rate for a loan duration."""

    __tablename__ = "interest_rates"

    id: Mapped[str] = _uuid_pk()
    months: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    rate: Mapped[float] = mapped_column(Float, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    admin_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


class DocumentModel(Base):
    """Metadata for a file stored on the external media host."""

    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("application_id", "type", name="uq_documents_application_type"),
    )

    id: Mapped[str] = _uuid_pk()
    application_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("loan_applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    id_card_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_url: Mapped[str] = mapped_column(Text, nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="PENDING")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    uploaded_by_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
    )
    reviewed_by_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id"),
        nullable=True,
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
