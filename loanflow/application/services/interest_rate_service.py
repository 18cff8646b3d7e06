"""Interest rate service - maintains the rate table by loan duration."""

from uuid import UUID

import structlog

from loanflow.application.dto import InterestRateRequest, Page, PageRequest
from loanflow.domain.entities import Actor, InterestRate
from loanflow.domain.exceptions import AuthorizationError, InterestRateNotFoundException
from loanflow.domain.interfaces import ActivityRecorder, InterestRateRepository

from .common import ensure_valid

logger = structlog.get_logger(__name__)


def _require_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise AuthorizationError("Only super admins can manage interest rates")


class InterestRateService:
    def __init__(
        self,
        interest_rate_repository: InterestRateRepository,
        recorder: ActivityRecorder,
    ):
        self._rate_repo = interest_rate_repository
        self._recorder = recorder

    async def list_rates(self, actor: Actor, request: PageRequest) -> Page[InterestRate]:
        _require_admin(actor)
        ensure_valid(request)

        rates, total = await self._rate_repo.list(limit=request.limit, offset=request.offset)
        return Page(items=rates, total=total, page=request.page, limit=request.limit)

    async def upsert(self, actor: Actor, request: InterestRateRequest) -> InterestRate:
        """
        Set the rate for a duration, re-activating an existing row.

        Raises:
            AuthorizationError: If the actor is not a super admin
            ValidationError: If months or rate are out of range
        """
        _require_admin(actor)
        ensure_valid(request)

        existing = await self._rate_repo.get_by_months(request.months)
        if existing is None:
            rate = await self._rate_repo.save(
                InterestRate(months=request.months, rate=request.rate, admin_id=actor.user_id)
            )
            action, before = "CREATE_INTEREST_RATE", None
        else:
            before = existing.to_dict()
            existing.rate = request.rate
            existing.is_active = True
            existing.admin_id = actor.user_id
            rate = await self._rate_repo.update(existing)
            action = "UPDATE_INTEREST_RATE"

        await self._recorder.record_audit(
            actor_id=actor.user_id,
            action=action,
            entity_type="InterestRate",
            entity_id=str(rate.id),
            old_values=before,
            new_values=rate.to_dict(),
            metadata=actor.metadata,
        )

        logger.info("interest_rate_saved", months=rate.months, rate=rate.rate, action=action)
        return rate

    async def delete(self, actor: Actor, rate_id: UUID) -> None:
        _require_admin(actor)

        rate = await self._rate_repo.get_by_id(rate_id)
        if rate is None:
            raise InterestRateNotFoundException(str(rate_id))

        await self._rate_repo.delete(rate.id)
        await self._recorder.record_audit(
            actor_id=actor.user_id,
            action="DELETE_INTEREST_RATE",
            entity_type="InterestRate",
            entity_id=str(rate.id),
            old_values=rate.to_dict(),
            new_values=None,
            metadata=actor.metadata,
        )
        logger.info("interest_rate_deleted", months=rate.months)

    async def available(self) -> list[InterestRate]:
        """Active rates, shortest term first. Public."""
        return await self._rate_repo.list_active()
