"""User service - applicant registration and staff administration."""

from uuid import UUID

import structlog

from loanflow.application.dto import (
    CreatedUser,
    CreateUserRequest,
    Page,
    RegisterUserRequest,
    UserListRequest,
)
from loanflow.core.security import generate_temporary_password, hash_password
from loanflow.domain.entities import (
    STAFF_ROLES,
    Actor,
    RequestMetadata,
    User,
    UserRole,
)
from loanflow.domain.exceptions import (
    AuthorizationError,
    DuplicateEmailException,
    UserNotFoundException,
    ValidationError,
)
from loanflow.domain.interfaces import ActivityRecorder, UserRepository

from .common import ensure_valid

logger = structlog.get_logger(__name__)


def _require_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise AuthorizationError("Only super admins can manage users")


def _user_snapshot(user: User) -> dict:
    return {
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        "is_active": user.is_active,
    }


class UserService:
    """Application service for user accounts."""

    def __init__(self, user_repository: UserRepository, recorder: ActivityRecorder):
        self._user_repo = user_repository
        self._recorder = recorder

    async def register(self, request: RegisterUserRequest, metadata: RequestMetadata) -> User:
        """
        Register a new applicant account.

        Raises:
            ValidationError: If any field fails its rule
            DuplicateEmailException: If the email is already registered
        """
        ensure_valid(request)

        email = request.email.strip().lower()
        await self._ensure_email_free(email)

        user = await self._user_repo.save(
            User(
                email=email,
                name=request.name.strip(),
                role=UserRole.APPLICANT,
                password_hash=hash_password(request.password),
                phone_number=request.phone_number.strip(),
                address=request.address.strip(),
            )
        )

        await self._recorder.record_audit(
            actor_id=user.id,
            action="REGISTER_USER",
            entity_type="User",
            entity_id=str(user.id),
            old_values=None,
            new_values=_user_snapshot(user),
            metadata=metadata,
        )

        logger.info("user_registered", user_id=str(user.id))
        return user

    async def create_user(self, actor: Actor, request: CreateUserRequest) -> CreatedUser:
        """Create an account with a one-time temporary password."""
        _require_admin(actor)
        ensure_valid(request)

        email = request.email.strip().lower()
        await self._ensure_email_free(email)

        temporary_password = generate_temporary_password()
        user = await self._user_repo.save(
            User(
                email=email,
                name=request.name.strip(),
                role=UserRole(request.role),
                password_hash=hash_password(temporary_password),
                phone_number=request.phone_number,
                address=request.address,
            )
        )

        await self._recorder.record_audit(
            actor_id=actor.user_id,
            action="CREATE_USER",
            entity_type="User",
            entity_id=str(user.id),
            old_values=None,
            new_values=_user_snapshot(user),
            metadata=actor.metadata,
        )

        logger.info("user_created", user_id=str(user.id), role=user.role.value)
        return CreatedUser(user=user, temporary_password=temporary_password)

    async def list_users(self, actor: Actor, request: UserListRequest) -> Page[User]:
        _require_admin(actor)
        ensure_valid(request)

        roles = [UserRole(request.role)] if request.role else None
        users, total = await self._user_repo.list(
            roles=roles,
            is_active=request.is_active,
            limit=request.limit,
            offset=request.offset,
        )
        return Page(items=users, total=total, page=request.page, limit=request.limit)

    async def list_staff(self, actor: Actor, request: UserListRequest) -> Page[User]:
        _require_admin(actor)
        ensure_valid(request)

        roles = list(STAFF_ROLES)
        if request.role:
            role = UserRole(request.role)
            if not role.is_staff:
                raise ValidationError(f"{role.value} is not a staff role")
            roles = [role]

        users, total = await self._user_repo.list(
            roles=roles,
            is_active=request.is_active,
            limit=request.limit,
            offset=request.offset,
        )
        return Page(items=users, total=total, page=request.page, limit=request.limit)

    async def update_staff_status(self, actor: Actor, user_id: UUID, is_active: bool) -> User:
        """
        Activate or deactivate a staff account.

        Raises:
            AuthorizationError: If the actor is not a super admin
            ValidationError: If the target is an applicant or the actor themself
            UserNotFoundException: If the user does not exist
        """
        _require_admin(actor)

        if actor.owns(user_id):
            raise ValidationError("You cannot change your own account status")

        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException(str(user_id))
        if not user.role.is_staff:
            raise ValidationError("Only staff accounts can be updated here")

        before = _user_snapshot(user)
        updated = await self._user_repo.set_active(user.id, is_active)

        await self._recorder.record_audit(
            actor_id=actor.user_id,
            action="UPDATE_STAFF_STATUS",
            entity_type="User",
            entity_id=str(user.id),
            old_values=before,
            new_values=_user_snapshot(updated),
            metadata=actor.metadata,
        )

        logger.info("staff_status_updated", user_id=str(user.id), is_active=is_active)
        return updated

    async def _ensure_email_free(self, email: str) -> None:
        if await self._user_repo.get_by_email(email) is not None:
            raise DuplicateEmailException(email)
