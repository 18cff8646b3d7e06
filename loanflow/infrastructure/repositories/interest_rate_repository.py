"""PostgreSQL implementation of InterestRateRepository."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from loanflow.domain.entities import InterestRate, utcnow
from loanflow.domain.exceptions import InterestRateNotFoundException
from loanflow.domain.interfaces import InterestRateRepository
from loanflow.infrastructure.database.models import InterestRateModel

from .mapping import as_utc, as_uuid


class PostgresInterestRateRepository(InterestRateRepository):
    """PostgreSQL-backed interest rate table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, rate: InterestRate) -> InterestRate:
        model = InterestRateModel(
            id=str(rate.id),
            months=rate.months,
            rate=rate.rate,
            is_active=rate.is_active,
            admin_id=str(rate.admin_id),
            created_at=rate.created_at,
            updated_at=rate.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return rate

    async def update(self, rate: InterestRate) -> InterestRate:
        model = await self._session.get(InterestRateModel, str(rate.id))
        if model is None:
            raise InterestRateNotFoundException(str(rate.id))

        model.rate = rate.rate
        model.is_active = rate.is_active
        model.admin_id = str(rate.admin_id)
        model.updated_at = utcnow()
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, rate_id: UUID) -> None:
        await self._session.execute(
            delete(InterestRateModel).where(InterestRateModel.id == str(rate_id))
        )

    async def get_by_id(self, rate_id: UUID) -> Optional[InterestRate]:
        model = await self._session.get(InterestRateModel, str(rate_id))
        return self._to_entity(model) if model else None

    async def get_by_months(self, months: int) -> Optional[InterestRate]:
        stmt = select(InterestRateModel).where(InterestRateModel.months == months)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list(self, limit: int = 10, offset: int = 0) -> Tuple[List[InterestRate], int]:
        total = await self._session.scalar(select(func.count(InterestRateModel.id)))
        stmt = (
            select(InterestRateModel)
            .order_by(InterestRateModel.months.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()], total or 0

    async def list_active(self) -> List[InterestRate]:
        stmt = (
            select(InterestRateModel)
            .where(InterestRateModel.is_active.is_(True))
            .order_by(InterestRateModel.months.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: InterestRateModel) -> InterestRate:
        return InterestRate(
            id=as_uuid(model.id),
            months=model.months,
            rate=model.rate,
            is_active=model.is_active,
            admin_id=as_uuid(model.admin_id),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
