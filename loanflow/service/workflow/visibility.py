"""Role-based scoping of application and loan listings."""

from dataclasses import dataclass
from typing import Optional, Tuple
from uuid import UUID

from loanflow.domain.entities import Actor, ApplicationStatus, UserRole

OFFICER_VISIBLE: Tuple[ApplicationStatus, ...] = (
    ApplicationStatus.PENDING,
    ApplicationStatus.UNDER_REVIEW,
)

APPROVER_VISIBLE: Tuple[ApplicationStatus, ...] = (
    ApplicationStatus.UNDER_REVIEW,
    ApplicationStatus.ADDITIONAL_INFO_REQUESTED,
    ApplicationStatus.APPROVED,
    ApplicationStatus.DISBURSED,
)


@dataclass(frozen=True)
class ApplicationScope:
    """Filter arguments for ApplicationRepository.list."""

    applicant_id: Optional[UUID] = None
    visible_statuses: Optional[Tuple[ApplicationStatus, ...]] = None
    reviewed_by: Optional[UUID] = None


def application_scope(actor: Actor) -> ApplicationScope:
    if actor.role is UserRole.APPLICANT:
        return ApplicationScope(applicant_id=actor.user_id)
    if actor.role is UserRole.LOAN_OFFICER:
        return ApplicationScope(visible_statuses=OFFICER_VISIBLE, reviewed_by=actor.user_id)
    if actor.role is UserRole.APPROVER:
        return ApplicationScope(visible_statuses=APPROVER_VISIBLE)
    return ApplicationScope()


def can_view_application(actor: Actor, applicant_id: UUID) -> bool:
    """Applicants may only see their own applications; staff see any."""
    if actor.role is UserRole.APPLICANT:
        return actor.owns(applicant_id)
    return True
