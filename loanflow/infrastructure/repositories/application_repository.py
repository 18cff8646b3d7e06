"""PostgreSQL implementation of ApplicationRepository."""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple
from uuid import UUID

import structlog
from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from loanflow.domain.entities import (
    ApplicationStatus,
    EmploymentStatus,
    LoanApplication,
    utcnow,
)
from loanflow.domain.exceptions import ApplicationNotFoundException
from loanflow.domain.interfaces import ApplicationRepository
from loanflow.infrastructure.database.models import (
    LoanApplicationModel,
    LoanReviewModel,
)

from .mapping import as_utc, as_uuid, from_kobo, to_kobo

logger = structlog.get_logger(__name__)

_DECISION_COLUMNS = {
    ApplicationStatus.APPROVED: LoanApplicationModel.approved_at,
    ApplicationStatus.REJECTED: LoanApplicationModel.rejected_at,
}


class PostgresApplicationRepository(ApplicationRepository):
    """
    PostgreSQL implementation of the LoanApplication repository.

    Status writes are compare-and-set: the UPDATE carries the status the
    caller validated against, so a concurrent change makes it a no-op.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, application: LoanApplication) -> LoanApplication:
        model = LoanApplicationModel(
            id=str(application.id),
            applicant_id=str(application.applicant_id),
            amount_kobo=to_kobo(application.amount),
            purpose=application.purpose,
            duration=application.duration,
            interest_rate=application.interest_rate,
            monthly_income_kobo=to_kobo(application.monthly_income),
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
        self._session.add(model)
        await self._session.flush()
        return application

    async def get_by_id(self, application_id: UUID) -> Optional[LoanApplication]:
        stmt = (
            select(LoanApplicationModel)
            .where(LoanApplicationModel.id == str(application_id))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list(
        self,
        applicant_id: Optional[UUID] = None,
        visible_statuses: Optional[Sequence[ApplicationStatus]] = None,
        reviewed_by: Optional[UUID] = None,
        status: Optional[ApplicationStatus] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[LoanApplication], int]:
        stmt = select(LoanApplicationModel)

        if applicant_id is not None:
            stmt = stmt.where(LoanApplicationModel.applicant_id == str(applicant_id))
        if status is not None:
            stmt = stmt.where(LoanApplicationModel.status == status.value)

        visibility = []
        if visible_statuses:
            visibility.append(
                LoanApplicationModel.status.in_([s.value for s in visible_statuses])
            )
        if reviewed_by is not None:
            reviewed = select(LoanReviewModel.application_id).where(
                LoanReviewModel.reviewer_id == str(reviewed_by)
            )
            visibility.append(LoanApplicationModel.id.in_(reviewed))
        if visibility:
            stmt = stmt.where(or_(*visibility))

        total = await self._session.scalar(
            select(func.count()).select_from(stmt.subquery())
        )
        result = await self._session.execute(
            stmt.order_by(LoanApplicationModel.submitted_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._to_entity(m) for m in result.scalars().all()], total or 0

    async def transition(
        self,
        application_id: UUID,
        expected_status: ApplicationStatus,
        new_status: ApplicationStatus,
        **changes: Any,
    ) -> Optional[LoanApplication]:
        values = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in changes.items()
        }
        stmt = (
            update(LoanApplicationModel)
            .where(
                LoanApplicationModel.id == str(application_id),
                LoanApplicationModel.status == expected_status.value,
            )
            .values(status=new_status.value, updated_at=utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            logger.warning(
                "conditional_update_missed",
                application_id=str(application_id),
                expected_status=expected_status.value,
                new_status=new_status.value,
            )
            return None

        return await self.get_by_id(application_id)

    async def update_account_details(
        self,
        application_id: UUID,
        account_number: Optional[str],
        bank_name: Optional[str],
    ) -> LoanApplication:
        model = await self._session.get(LoanApplicationModel, str(application_id))
        if model is None:
            raise ApplicationNotFoundException(str(application_id))

        model.account_number = account_number
        model.bank_name = bank_name
        model.updated_at = utcnow()
        await self._session.flush()
        return self._to_entity(model)

    async def count(self, status: Optional[ApplicationStatus] = None) -> int:
        stmt = select(func.count(LoanApplicationModel.id))
        if status is not None:
            stmt = stmt.where(LoanApplicationModel.status == status.value)
        return await self._session.scalar(stmt) or 0

    async def count_decided_since(
        self,
        status: ApplicationStatus,
        since: datetime,
    ) -> int:
        column = _DECISION_COLUMNS.get(status)
        if column is None:
            raise ValueError(f"No decision timestamp for status {status.value}")
        stmt = select(func.count(LoanApplicationModel.id)).where(column >= since)
        return await self._session.scalar(stmt) or 0

    async def list_recent(
        self,
        status: ApplicationStatus,
        limit: int = 5,
    ) -> List[LoanApplication]:
        stmt = (
            select(LoanApplicationModel)
            .where(LoanApplicationModel.status == status.value)
            .order_by(LoanApplicationModel.submitted_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: LoanApplicationModel) -> LoanApplication:
        """Convert database model to domain entity."""
        return LoanApplication(
            id=as_uuid(model.id),
            applicant_id=as_uuid(model.applicant_id),
            amount=from_kobo(model.amount_kobo),
            purpose=model.purpose,
            duration=model.duration,
            interest_rate=model.interest_rate,
            monthly_income=from_kobo(model.monthly_income_kobo),
            employment_status=EmploymentStatus(model.employment_status),
            employer_name=model.employer_name,
            work_experience=model.work_experience,
            status=ApplicationStatus(model.status),
            account_number=model.account_number,
            bank_name=model.bank_name,
            additional_info_requested=model.additional_info_requested,
            additional_info_provided=model.additional_info_provided,
            approved_at=as_utc(model.approved_at),
            rejected_at=as_utc(model.rejected_at),
            disbursed_at=as_utc(model.disbursed_at),
            submitted_at=as_utc(model.submitted_at),
            updated_at=as_utc(model.updated_at),
        )
