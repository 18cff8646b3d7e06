"""Data transfer objects for the review and disbursement workflow."""

from dataclasses import dataclass
from typing import List, Optional

from loanflow.domain.entities import Loan, LoanApplication, LoanReview


@dataclass(frozen=True)
class ReviewRequest:
    """Input for recording a review decision."""

    decision: str
    comments: Optional[str] = None
    review_type: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.decision == "REQUEST_INFO" and not (self.comments or "").strip():
            errors.append("comments are required when requesting more information")

        return errors


@dataclass(frozen=True)
class AdditionalInfoRequest:
    """Applicant's answer to a reviewer's request for information."""

    info: str

    def validate(self) -> List[str]:
        errors = []

        if not self.info or not self.info.strip():
            errors.append("info is required")

        return errors


@dataclass(frozen=True)
class ReviewResult:
    application: LoanApplication
    review: LoanReview


@dataclass(frozen=True)
class DisbursementResult:
    application: LoanApplication
    loan: Loan
