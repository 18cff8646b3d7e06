"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple
from uuid import UUID

from loanflow.domain.entities import (
    ApplicationStatus,
    Document,
    DocumentType,
    InterestRate,
    Loan,
    LoanApplication,
    LoanReview,
    Notification,
    ReviewDecision,
    ReviewType,
    User,
    UserRole,
)


class UserRepository(ABC):
    """Abstract repository for User persistence."""

    @abstractmethod
    async def save(self, user: User) -> User:
        ...

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def list(
        self,
        roles: Optional[Sequence[UserRole]] = None,
        is_active: Optional[bool] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[User], int]:
        """
        List users matching the filters.

        Returns:
            The requested page, newest first, and the total match count
        """
        ...

    @abstractmethod
    async def list_active_by_role(self, role: UserRole) -> List[User]:
        ...

    @abstractmethod
    async def set_active(self, user_id: UUID, is_active: bool) -> Optional[User]:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...


class ApplicationRepository(ABC):
    """
    Abstract repository for LoanApplication persistence.

    Status changes go through `transition`, which must re-check the
    current status atomically with the write.
    """

    @abstractmethod
    async def save(self, application: LoanApplication) -> LoanApplication:
        ...

    @abstractmethod
    async def get_by_id(self, application_id: UUID) -> Optional[LoanApplication]:
        ...

    @abstractmethod
    async def list(
        self,
        applicant_id: Optional[UUID] = None,
        visible_statuses: Optional[Sequence[ApplicationStatus]] = None,
        reviewed_by: Optional[UUID] = None,
        status: Optional[ApplicationStatus] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[LoanApplication], int]:
        """
        List applications visible to a caller.

        `visible_statuses` and `reviewed_by` are alternatives (OR);
        `applicant_id` and `status` narrow the result (AND).

        Returns:
            The requested page, newest first, and the total match count
        """
        ...

    @abstractmethod
    async def transition(
        self,
        application_id: UUID,
        expected_status: ApplicationStatus,
        new_status: ApplicationStatus,
        **changes: Any,
    ) -> Optional[LoanApplication]:
        """
        Move an application to a new status if it is still in the expected one.

        Args:
            application_id: The application to update
            expected_status: Status the caller validated against
            new_status: Status to write
            **changes: Additional columns to set in the same statement

        Returns:
            The updated application, or None if the status had changed
        """
        ...

    @abstractmethod
    async def update_account_details(
        self,
        application_id: UUID,
        account_number: Optional[str],
        bank_name: Optional[str],
    ) -> LoanApplication:
        ...

    @abstractmethod
    async def count(self, status: Optional[ApplicationStatus] = None) -> int:
        ...

    @abstractmethod
    async def count_decided_since(
        self,
        status: ApplicationStatus,
        since: datetime,
    ) -> int:
        """Count applications approved or rejected at or after `since`."""
        ...

    @abstractmethod
    async def list_recent(
        self,
        status: ApplicationStatus,
        limit: int = 5,
    ) -> List[LoanApplication]:
        ...


class ReviewRepository(ABC):
    """Append-only store of LoanReview records."""

    @abstractmethod
    async def add(self, review: LoanReview) -> LoanReview:
        ...

    @abstractmethod
    async def list_for_application(self, application_id: UUID) -> List[LoanReview]:
        """Reviews for an application, newest first."""
        ...

    @abstractmethod
    async def latest_for_application(
        self,
        application_id: UUID,
        review_type: Optional[ReviewType] = None,
    ) -> Optional[LoanReview]:
        """Newest review, optionally limited to one stage."""
        ...

    @abstractmethod
    async def count_by_reviewer(
        self,
        reviewer_id: UUID,
        since: Optional[datetime] = None,
        decision: Optional[ReviewDecision] = None,
    ) -> int:
        ...


class LoanRepository(ABC):
    """Abstract repository for Loan persistence."""

    @abstractmethod
    async def save(self, loan: Loan) -> Loan:
        """
        Persist a new loan.

        Raises:
            LoanAlreadyExistsException: If the application already has a loan
        """
        ...

    @abstractmethod
    async def update(self, loan: Loan) -> Loan:
        ...

    @abstractmethod
    async def get_by_application_id(self, application_id: UUID) -> Optional[Loan]:
        ...

    @abstractmethod
    async def list(
        self,
        applicant_id: Optional[UUID] = None,
        created_or_reviewed_by: Optional[UUID] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Loan], int]:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def sum_approved_amount(self) -> float:
        ...

    @abstractmethod
    async def sum_disbursed_amount(self) -> float:
        ...


class NotificationRepository(ABC):
    """Read side of the notification inbox."""

    @abstractmethod
    async def list_for_user(self, user_id: UUID, limit: int = 20) -> List[Notification]:
        ...


class InterestRateRepository(ABC):
    """Abstract repository for InterestRate persistence."""

    @abstractmethod
    async def save(self, rate: InterestRate) -> InterestRate:
        ...

    @abstractmethod
    async def update(self, rate: InterestRate) -> InterestRate:
        ...

    @abstractmethod
    async def delete(self, rate_id: UUID) -> None:
        ...

    @abstractmethod
    async def get_by_id(self, rate_id: UUID) -> Optional[InterestRate]:
        ...

    @abstractmethod
    async def get_by_months(self, months: int) -> Optional[InterestRate]:
        ...

    @abstractmethod
    async def list(self, limit: int = 10, offset: int = 0) -> Tuple[List[InterestRate], int]:
        ...

    @abstractmethod
    async def list_active(self) -> List[InterestRate]:
        ...


class DocumentRepository(ABC):
    """Abstract repository for Document metadata."""

    @abstractmethod
    async def save(self, document: Document) -> Document:
        ...

    @abstractmethod
    async def update(self, document: Document) -> Document:
        ...

    @abstractmethod
    async def delete(self, document_id: UUID) -> None:
        ...

    @abstractmethod
    async def get_by_id(self, document_id: UUID) -> Optional[Document]:
        ...

    @abstractmethod
    async def get_by_type(
        self,
        application_id: UUID,
        document_type: DocumentType,
    ) -> Optional[Document]:
        ...

    @abstractmethod
    async def list_for_application(self, application_id: UUID) -> List[Document]:
        ...
