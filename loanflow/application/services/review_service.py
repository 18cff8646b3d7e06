"""Review service - records reviewer decisions and moves applications through review."""

from uuid import UUID

import structlog

from loanflow.application.dto import AdditionalInfoRequest, ReviewRequest, ReviewResult
from loanflow.core.metrics import (
    record_review_decision,
    record_status_transition,
    track_workflow_latency,
)
from loanflow.domain.entities import (
    Actor,
    ApplicationStatus,
    LoanApplication,
    LoanReview,
    NotificationType,
    ReviewDecision,
    UserRole,
    utcnow,
)
from loanflow.domain.exceptions import (
    ApplicationNotFoundException,
    AuthorizationError,
    InvalidTransitionException,
    StaleApplicationException,
)
from loanflow.domain.interfaces import (
    ActivityRecorder,
    ApplicationRepository,
    ReviewRepository,
)
from loanflow.service.workflow import (
    can_review,
    infer_stage,
    info_return_status,
    next_review_status,
    parse_decision,
    parse_review_type,
    stage_for_role,
)

from .common import ensure_valid, notify_unless_actor

logger = structlog.get_logger(__name__)

# Notification sent to the applicant for each status a review can produce
_OUTCOME_NOTICES = {
    ApplicationStatus.UNDER_REVIEW: (
        NotificationType.APPLICATION_UNDER_REVIEW,
        "Application Under Review",
        "Your loan application passed the officer review and is now with an approver.",
    ),
    ApplicationStatus.APPROVED: (
        NotificationType.APPLICATION_APPROVED,
        "Application Approved",
        "Your loan application has been approved.",
    ),
    ApplicationStatus.REJECTED: (
        NotificationType.APPLICATION_REJECTED,
        "Application Rejected",
        "Your loan application has been rejected.",
    ),
    ApplicationStatus.ADDITIONAL_INFO_REQUESTED: (
        NotificationType.ADDITIONAL_INFO_REQUESTED,
        "Additional Information Requested",
        "A reviewer needs more information about your loan application.",
    ),
}


class ReviewService:
    """
    Application service for the review step of the loan workflow.

    Every successful call writes, in the caller's transaction: one
    conditional status update, one review row (reviews only), one
    notification and one audit row.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        review_repository: ReviewRepository,
        recorder: ActivityRecorder,
    ):
        self._application_repo = application_repository
        self._review_repo = review_repository
        self._recorder = recorder

    async def review(
        self,
        application_id: UUID,
        actor: Actor,
        request: ReviewRequest,
    ) -> ReviewResult:
        """
        Record a review decision and advance the application.

        Args:
            application_id: The application under review
            actor: The reviewer
            request: Decision, comments and optional review type

        Returns:
            ReviewResult with the updated application and the new review

        Raises:
            AuthorizationError: If the actor's role cannot review at the stage
            ValidationError: If the decision or comments are invalid
            ApplicationNotFoundException: If the application does not exist
            InvalidTransitionException: If the status does not fit the stage
            StaleApplicationException: If the status changed concurrently
        """
        if not can_review(actor.role):
            raise AuthorizationError(f"Role {actor.role.value} cannot review applications")

        stage = stage_for_role(actor.role, parse_review_type(request.review_type))
        decision = parse_decision(request.decision)
        ensure_valid(request)

        log = logger.bind(
            application_id=str(application_id),
            reviewer_id=str(actor.user_id),
            decision=decision.value,
        )

        with track_workflow_latency("review"):
            application = await self._get_application(application_id)

            if stage is None:
                stage = infer_stage(application.status)

            new_status = next_review_status(application.status, stage, decision)
            comments = (request.comments or "").strip()

            updated = await self._application_repo.transition(
                application.id,
                application.status,
                new_status,
                **self._decision_changes(application, new_status, comments),
            )
            if updated is None:
                raise StaleApplicationException(str(application.id), application.status.value)

            review = await self._review_repo.add(
                LoanReview(
                    application_id=application.id,
                    reviewer_id=actor.user_id,
                    review_type=stage,
                    decision=decision,
                    comments=comments,
                )
            )

            notice_type, title, message = _OUTCOME_NOTICES[new_status]
            if comments and decision is not ReviewDecision.APPROVED:
                message = f"{message} Reviewer comments: {comments}"
            await notify_unless_actor(
                self._recorder,
                actor,
                application.applicant_id,
                notice_type,
                title,
                message,
                application_id=application.id,
            )

            await self._recorder.record_audit(
                actor_id=actor.user_id,
                action="REVIEW_APPLICATION",
                entity_type="LoanApplication",
                entity_id=str(application.id),
                old_values=application.snapshot(),
                new_values={
                    **updated.snapshot(),
                    "decision": decision.value,
                    "review_type": stage.value,
                    "review_id": str(review.id),
                },
                metadata=actor.metadata,
            )

        record_review_decision(stage.value, decision.value)
        record_status_transition(application.status.value, new_status.value)
        log.info(
            "review_recorded",
            review_type=stage.value,
            from_status=application.status.value,
            to_status=new_status.value,
        )

        return ReviewResult(application=updated, review=review)

    async def provide_additional_info(
        self,
        application_id: UUID,
        actor: Actor,
        request: AdditionalInfoRequest,
    ) -> LoanApplication:
        """
        Answer a reviewer's request and send the application back to them.

        The application returns to the stage whose reviewer asked: PENDING
        for an officer, UNDER_REVIEW for an approver.

        Raises:
            AuthorizationError: If the actor is not the owner or a super admin
            ValidationError: If the answer is empty
            ApplicationNotFoundException: If the application does not exist
            InvalidTransitionException: If no information was requested
            StaleApplicationException: If the status changed concurrently
        """
        if not actor.has_role(UserRole.APPLICANT, UserRole.SUPER_ADMIN):
            raise AuthorizationError("Only the applicant can provide additional information")

        ensure_valid(request)

        with track_workflow_latency("provide_info"):
            application = await self._get_application(application_id)

            if not actor.is_admin and not actor.owns(application.applicant_id):
                raise AuthorizationError("You can only update your own applications")

            if application.status is not ApplicationStatus.ADDITIONAL_INFO_REQUESTED:
                raise InvalidTransitionException(application.status.value, "PROVIDE_INFO")

            latest = await self._review_repo.latest_for_application(application.id)
            target = info_return_status(latest.review_type if latest else None)

            updated = await self._application_repo.transition(
                application.id,
                application.status,
                target,
                additional_info_provided=request.info.strip(),
            )
            if updated is None:
                raise StaleApplicationException(str(application.id), application.status.value)

            if latest is not None:
                await notify_unless_actor(
                    self._recorder,
                    actor,
                    latest.reviewer_id,
                    NotificationType.ADDITIONAL_INFO_PROVIDED,
                    "Additional Information Provided",
                    "The applicant has responded to your request for more information.",
                    application_id=application.id,
                )

            await self._recorder.record_audit(
                actor_id=actor.user_id,
                action="PROVIDE_ADDITIONAL_INFO",
                entity_type="LoanApplication",
                entity_id=str(application.id),
                old_values=application.snapshot(),
                new_values={
                    **updated.snapshot(),
                    "additional_info_provided": updated.additional_info_provided,
                },
                metadata=actor.metadata,
            )

        record_status_transition(application.status.value, target.value)
        logger.info(
            "additional_info_provided",
            application_id=str(application.id),
            to_status=target.value,
        )

        return updated

    async def _get_application(self, application_id: UUID) -> LoanApplication:
        application = await self._application_repo.get_by_id(application_id)
        if application is None:
            logger.warning("application_not_found", application_id=str(application_id))
            raise ApplicationNotFoundException(str(application_id))
        return application

    def _decision_changes(
        self,
        application: LoanApplication,
        new_status: ApplicationStatus,
        comments: str,
    ) -> dict:
        now = utcnow()
        if new_status is ApplicationStatus.APPROVED and application.approved_at is None:
            return {"approved_at": now}
        if new_status is ApplicationStatus.REJECTED and application.rejected_at is None:
            return {"rejected_at": now}
        if new_status is ApplicationStatus.ADDITIONAL_INFO_REQUESTED:
            return {"additional_info_requested": comments, "additional_info_provided": None}
        return {}
