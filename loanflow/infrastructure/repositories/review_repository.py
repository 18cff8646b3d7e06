"""PostgreSQL implementation of ReviewRepository."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from loanflow.domain.entities import LoanReview, ReviewDecision, ReviewType
from loanflow.domain.interfaces import ReviewRepository
from loanflow.infrastructure.database.models import LoanReviewModel

from .mapping import as_utc, as_uuid


class PostgresReviewRepository(ReviewRepository):
    """Insert-only store of reviewer decisions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, review: LoanReview) -> LoanReview:
        model = LoanReviewModel(
            id=str(review.id),
            application_id=str(review.application_id),
            reviewer_id=str(review.reviewer_id),
            review_type=review.review_type.value,
            decision=review.decision.value,
            comments=review.comments,
            reviewed_at=review.reviewed_at,
        )
        self._session.add(model)
        await self._session.flush()
        return review

    async def list_for_application(self, application_id: UUID) -> List[LoanReview]:
        stmt = (
            select(LoanReviewModel)
            .where(LoanReviewModel.application_id == str(application_id))
            .order_by(LoanReviewModel.reviewed_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def latest_for_application(
        self,
        application_id: UUID,
        review_type: Optional[ReviewType] = None,
    ) -> Optional[LoanReview]:
        stmt = select(LoanReviewModel).where(
            LoanReviewModel.application_id == str(application_id)
        )
        if review_type is not None:
            stmt = stmt.where(LoanReviewModel.review_type == review_type.value)
        stmt = stmt.order_by(LoanReviewModel.reviewed_at.desc()).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def count_by_reviewer(
        self,
        reviewer_id: UUID,
        since: Optional[datetime] = None,
        decision: Optional[ReviewDecision] = None,
    ) -> int:
        stmt = select(func.count(LoanReviewModel.id)).where(
            LoanReviewModel.reviewer_id == str(reviewer_id)
        )
        if since is not None:
            stmt = stmt.where(LoanReviewModel.reviewed_at >= since)
        if decision is not None:
            stmt = stmt.where(LoanReviewModel.decision == decision.value)
        return await self._session.scalar(stmt) or 0

    def _to_entity(self, model: LoanReviewModel) -> LoanReview:
        return LoanReview(
            id=as_uuid(model.id),
            application_id=as_uuid(model.application_id),
            reviewer_id=as_uuid(model.reviewer_id),
            review_type=ReviewType(model.review_type),
            decision=ReviewDecision(model.decision),
            comments=model.comments,
            reviewed_at=as_utc(model.reviewed_at),
        )
