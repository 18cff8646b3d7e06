"""Per-request authorization context."""

from dataclasses import dataclass, field
from uuid import UUID

from .user import UserRole

UNKNOWN = "unknown"


@dataclass(frozen=True)
class RequestMetadata:
    """Requester details captured on every audit row."""

    ip_address: str = UNKNOWN
    user_agent: str = UNKNOWN


@dataclass(frozen=True)
class Actor:
    """
    The authenticated caller of a use case.

    Services receive the actor explicitly instead of reading any
    ambient session state.
    """

    user_id: UUID
    role: UserRole
    name: str = ""
    metadata: RequestMetadata = field(default_factory=RequestMetadata)

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.SUPER_ADMIN

    def has_role(self, *roles: UserRole) -> bool:
        return self.role in roles

    def owns(self, owner_id: UUID) -> bool:
        return self.user_id == owner_id
