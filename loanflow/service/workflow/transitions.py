"""
Status model for loan applications.

The transition table below is the single source of truth for which
(stage, decision) pairs move an application and where they land.
Everything here is pure: callers pass roles and statuses in and get
stages and statuses back, or a domain exception.
"""

from typing import Dict, Optional, Tuple

from loanflow.domain.entities import (
    ApplicationStatus,
    ReviewDecision,
    ReviewType,
    UserRole,
)
from loanflow.domain.exceptions import (
    AuthorizationError,
    InvalidTransitionException,
    ValidationError,
)

# Status an application must be in for a review at each stage
STAGE_REQUIRED_STATUS: Dict[ReviewType, ApplicationStatus] = {
    ReviewType.OFFICER_REVIEW: ApplicationStatus.PENDING,
    ReviewType.APPROVER_REVIEW: ApplicationStatus.UNDER_REVIEW,
}

REVIEW_TRANSITIONS: Dict[Tuple[ReviewType, ReviewDecision], ApplicationStatus] = {
    (ReviewType.OFFICER_REVIEW, ReviewDecision.APPROVED): ApplicationStatus.UNDER_REVIEW,
    (ReviewType.OFFICER_REVIEW, ReviewDecision.REJECTED): ApplicationStatus.REJECTED,
    (ReviewType.OFFICER_REVIEW, ReviewDecision.REQUEST_INFO): ApplicationStatus.ADDITIONAL_INFO_REQUESTED,
    (ReviewType.APPROVER_REVIEW, ReviewDecision.APPROVED): ApplicationStatus.APPROVED,
    (ReviewType.APPROVER_REVIEW, ReviewDecision.REJECTED): ApplicationStatus.REJECTED,
    (ReviewType.APPROVER_REVIEW, ReviewDecision.REQUEST_INFO): ApplicationStatus.ADDITIONAL_INFO_REQUESTED,
}

# Where an application goes back to once the applicant answers a request
INFO_RETURN_STATUS: Dict[ReviewType, ApplicationStatus] = {
    ReviewType.OFFICER_REVIEW: ApplicationStatus.PENDING,
    ReviewType.APPROVER_REVIEW: ApplicationStatus.UNDER_REVIEW,
}

ROLE_STAGE: Dict[UserRole, ReviewType] = {
    UserRole.LOAN_OFFICER: ReviewType.OFFICER_REVIEW,
    UserRole.APPROVER: ReviewType.APPROVER_REVIEW,
}

DISBURSE_ROLES = (UserRole.APPROVER, UserRole.SUPER_ADMIN)
LOAN_CREATE_ROLES = (UserRole.LOAN_OFFICER, UserRole.SUPER_ADMIN)


def parse_decision(value: str) -> ReviewDecision:
    """
    Parse a raw decision string.

    Raises:
        ValidationError: If the value is not a known decision
    """
    try:
        return ReviewDecision(value)
    except ValueError:
        allowed = ", ".join(d.value for d in ReviewDecision)
        raise ValidationError(f"Invalid decision '{value}'. Expected one of: {allowed}")


def parse_review_type(value: Optional[str]) -> Optional[ReviewType]:
    if value is None:
        return None
    try:
        return ReviewType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in ReviewType)
        raise ValidationError(f"Invalid review type '{value}'. Expected one of: {allowed}")


def stage_for_role(
    role: UserRole,
    requested: Optional[ReviewType] = None,
) -> Optional[ReviewType]:
    """
    Work out which review stage a role acts at.

    Args:
        role: The reviewer's role
        requested: Review type sent with the request, if any

    Returns:
        The stage, or None when a super admin left it to be inferred
        from the application's status

    Raises:
        AuthorizationError: If the role cannot review, or asked for
            a stage it does not own
    """
    if role is UserRole.SUPER_ADMIN:
        return requested

    stage = ROLE_STAGE.get(role)
    if stage is None:
        raise AuthorizationError(f"Role {role.value} cannot review applications")

    if requested is not None and requested is not stage:
        raise AuthorizationError(
            f"Role {role.value} cannot perform {requested.value}"
        )

    return stage


def infer_stage(status: ApplicationStatus) -> ReviewType:
    """Pick the stage whose required status matches the current one."""
    for stage, required in STAGE_REQUIRED_STATUS.items():
        if required is status:
            return stage
    raise InvalidTransitionException(status.value, "ANY")


def next_review_status(
    current: ApplicationStatus,
    stage: ReviewType,
    decision: ReviewDecision,
) -> ApplicationStatus:
    """
    Compute the status a review moves an application to.

    Raises:
        InvalidTransitionException: If the application is not in the
            status this stage reviews
    """
    if STAGE_REQUIRED_STATUS[stage] is not current:
        raise InvalidTransitionException(current.value, stage.value)
    return REVIEW_TRANSITIONS[(stage, decision)]


def info_return_status(requested_by: Optional[ReviewType]) -> ApplicationStatus:
    # No review on record: back to the officer queue
    if requested_by is None:
        return ApplicationStatus.PENDING
    return INFO_RETURN_STATUS[requested_by]


def can_disburse(role: UserRole) -> bool:
    return role in DISBURSE_ROLES


def can_create_loan(role: UserRole) -> bool:
    return role in LOAN_CREATE_ROLES


def can_review(role: UserRole) -> bool:
    return role in ROLE_STAGE or role is UserRole.SUPER_ADMIN
