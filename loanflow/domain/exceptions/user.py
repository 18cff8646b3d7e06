"""User and document exceptions."""

from .base import ConflictError, NotFoundError


class UserNotFoundException(NotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class DuplicateEmailException(ConflictError):
    def __init__(self, email: str):
        super().__init__(
            message=f"User with email {email} already exists",
            code="DUPLICATE_EMAIL",
        )


class DocumentNotFoundException(NotFoundError):
    def __init__(self, document_id: str):
        super().__init__("Document", document_id)


class DuplicateDocumentException(ConflictError):
    def __init__(self, document_type: str):
        super().__init__(
            message=f"Document of type {document_type} already exists for this application",
            code="DUPLICATE_DOCUMENT",
        )
