"""Dashboard service - role-specific summary figures."""

from datetime import datetime

from loanflow.application.dto import (
    AdminStats,
    ApproverStats,
    OfficerStats,
    PendingQueueItem,
)
from loanflow.domain.entities import (
    Actor,
    ApplicationStatus,
    ReviewDecision,
    ReviewType,
    UserRole,
    utcnow,
)
from loanflow.domain.exceptions import AuthorizationError
from loanflow.domain.interfaces import (
    ApplicationRepository,
    LoanRepository,
    ReviewRepository,
    UserRepository,
)
from loanflow.service.workflow import risk_band

_RECOMMENDATIONS = {
    ReviewDecision.APPROVED: "Approve",
    ReviewDecision.REJECTED: "Reject",
}


def _start_of_day() -> datetime:
    return utcnow().replace(hour=0, minute=0, second=0, microsecond=0)


def _require(actor: Actor, *roles: UserRole) -> None:
    if not actor.has_role(*roles, UserRole.SUPER_ADMIN):
        raise AuthorizationError("You do not have access to this dashboard")


class DashboardService:
    def __init__(
        self,
        application_repository: ApplicationRepository,
        review_repository: ReviewRepository,
        loan_repository: LoanRepository,
        user_repository: UserRepository,
    ):
        self._application_repo = application_repository
        self._review_repo = review_repository
        self._loan_repo = loan_repository
        self._user_repo = user_repository

    async def admin_stats(self, actor: Actor) -> AdminStats:
        _require(actor)
        return AdminStats(
            total_applications=await self._application_repo.count(),
            total_loans=await self._loan_repo.count(),
            total_users=await self._user_repo.count(),
            total_disbursed=await self._loan_repo.sum_disbursed_amount(),
        )

    async def officer_stats(self, actor: Actor) -> OfficerStats:
        """Queue sizes plus the officer's own review activity."""
        _require(actor, UserRole.LOAN_OFFICER)

        total_reviews = await self._review_repo.count_by_reviewer(actor.user_id)
        approvals = await self._review_repo.count_by_reviewer(
            actor.user_id,
            decision=ReviewDecision.APPROVED,
        )
        approval_rate = round(approvals / total_reviews * 100, 1) if total_reviews else 0.0

        return OfficerStats(
            pending_applications=await self._application_repo.count(ApplicationStatus.PENDING),
            reviewed_today=await self._review_repo.count_by_reviewer(
                actor.user_id,
                since=_start_of_day(),
            ),
            awaiting_additional_info=await self._application_repo.count(
                ApplicationStatus.ADDITIONAL_INFO_REQUESTED
            ),
            approval_rate=approval_rate,
        )

    async def approver_stats(self, actor: Actor) -> ApproverStats:
        _require(actor, UserRole.APPROVER)

        today = _start_of_day()
        return ApproverStats(
            pending_review=await self._application_repo.count(ApplicationStatus.UNDER_REVIEW),
            approved_today=await self._application_repo.count_decided_since(
                ApplicationStatus.APPROVED, today
            ),
            rejected_today=await self._application_repo.count_decided_since(
                ApplicationStatus.REJECTED, today
            ),
            total_approved_amount=await self._loan_repo.sum_approved_amount(),
        )

    async def approver_pending(self, actor: Actor, limit: int = 5) -> list[PendingQueueItem]:
        """Newest applications waiting for an approver, with a risk band."""
        _require(actor, UserRole.APPROVER)

        applications = await self._application_repo.list_recent(
            ApplicationStatus.UNDER_REVIEW,
            limit=limit,
        )

        items = []
        for application in applications:
            applicant = await self._user_repo.get_by_id(application.applicant_id)
            latest = await self._review_repo.latest_for_application(
                application.id, ReviewType.OFFICER_REVIEW
            )
            reviewer = await self._user_repo.get_by_id(latest.reviewer_id) if latest else None
            items.append(
                PendingQueueItem(
                    application_id=str(application.id),
                    applicant_name=applicant.name if applicant else "",
                    amount=application.amount,
                    purpose=application.purpose,
                    submitted_at=application.submitted_at.isoformat(),
                    reviewed_by=reviewer.name if reviewer else None,
                    recommendation=_RECOMMENDATIONS.get(latest.decision, "Pending") if latest else "Pending",
                    risk_level=risk_band(application.amount),
                )
            )
        return items
