"""PostgreSQL implementation of LoanRepository."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from loanflow.domain.entities import Loan
from loanflow.domain.exceptions import LoanAlreadyExistsException, LoanNotFoundException
from loanflow.domain.interfaces import LoanRepository
from loanflow.infrastructure.database.models import (
    LoanApplicationModel,
    LoanModel,
    LoanReviewModel,
)

from .mapping import as_utc, as_uuid, from_kobo, to_kobo


class PostgresLoanRepository(LoanRepository):
    """
    PostgreSQL-backed loan repository.

    The unique constraint on `loans.application_id` is the last line
    against a second loan for the same application.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, loan: Loan) -> Loan:
        model = LoanModel(
            id=str(loan.id),
            application_id=str(loan.application_id),
            approved_amount_kobo=to_kobo(loan.approved_amount),
            disbursement_amount_kobo=to_kobo(loan.disbursement_amount),
            interest_rate=loan.interest_rate,
            duration=loan.duration,
            monthly_payment_kobo=to_kobo(loan.monthly_payment),
            total_repayment_kobo=to_kobo(loan.total_repayment),
            bank_account=loan.bank_account,
            bank_name=loan.bank_name,
            disbursement_date=loan.disbursement_date,
            next_payment_due=loan.next_payment_due,
            created_by=str(loan.created_by),
            created_at=loan.created_at,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except IntegrityError:
            raise LoanAlreadyExistsException(str(loan.application_id))
        return loan

    async def update(self, loan: Loan) -> Loan:
        model = await self._session.get(LoanModel, str(loan.id))
        if model is None:
            raise LoanNotFoundException(str(loan.id))

        model.disbursement_amount_kobo = to_kobo(loan.disbursement_amount)
        model.monthly_payment_kobo = to_kobo(loan.monthly_payment)
        model.total_repayment_kobo = to_kobo(loan.total_repayment)
        model.bank_account = loan.bank_account
        model.bank_name = loan.bank_name
        model.disbursement_date = loan.disbursement_date
        model.next_payment_due = loan.next_payment_due
        await self._session.flush()
        return loan

    async def get_by_application_id(self, application_id: UUID) -> Optional[Loan]:
        stmt = select(LoanModel).where(LoanModel.application_id == str(application_id))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list(
        self,
        applicant_id: Optional[UUID] = None,
        created_or_reviewed_by: Optional[UUID] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Loan], int]:
        stmt = select(LoanModel)

        if applicant_id is not None:
            owned = select(LoanApplicationModel.id).where(
                LoanApplicationModel.applicant_id == str(applicant_id)
            )
            stmt = stmt.where(LoanModel.application_id.in_(owned))

        if created_or_reviewed_by is not None:
            staff_id = str(created_or_reviewed_by)
            reviewed = select(LoanReviewModel.application_id).where(
                LoanReviewModel.reviewer_id == staff_id
            )
            stmt = stmt.where(
                or_(
                    LoanModel.created_by == staff_id,
                    LoanModel.application_id.in_(reviewed),
                )
            )

        total = await self._session.scalar(
            select(func.count()).select_from(stmt.subquery())
        )
        result = await self._session.execute(
            stmt.order_by(LoanModel.created_at.desc()).limit(limit).offset(offset)
        )
        return [self._to_entity(m) for m in result.scalars().all()], total or 0

    async def count(self) -> int:
        return await self._session.scalar(select(func.count(LoanModel.id))) or 0

    async def sum_approved_amount(self) -> float:
        total = await self._session.scalar(select(func.sum(LoanModel.approved_amount_kobo)))
        return from_kobo(total or 0)

    async def sum_disbursed_amount(self) -> float:
        stmt = select(func.sum(LoanModel.disbursement_amount_kobo)).where(
            LoanModel.disbursement_date.is_not(None)
        )
        total = await self._session.scalar(stmt)
        return from_kobo(total or 0)

    def _to_entity(self, model: LoanModel) -> Loan:
        return Loan(
            id=as_uuid(model.id),
            application_id=as_uuid(model.application_id),
            approved_amount=from_kobo(model.approved_amount_kobo),
            disbursement_amount=from_kobo(model.disbursement_amount_kobo),
            interest_rate=model.interest_rate,
            duration=model.duration,
            monthly_payment=from_kobo(model.monthly_payment_kobo),
            total_repayment=from_kobo(model.total_repayment_kobo),
            created_by=as_uuid(model.created_by),
            bank_account=model.bank_account,
            bank_name=model.bank_name,
            disbursement_date=as_utc(model.disbursement_date),
            next_payment_due=model.next_payment_due,
            created_at=as_utc(model.created_at),
        )
