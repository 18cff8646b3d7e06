"""PostgreSQL implementation of UserRepository."""

from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from loanflow.domain.entities import User, UserRole
from loanflow.domain.interfaces import UserRepository
from loanflow.infrastructure.database.models import UserModel

from .mapping import as_utc, as_uuid


class PostgresUserRepository(UserRepository):
    """PostgreSQL-backed user repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, user: User) -> User:
        model = UserModel(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=user.role.value,
            password_hash=user.password_hash,
            phone_number=user.phone_number,
            address=user.address,
            is_active=user.is_active,
            email_verified=user.email_verified,
            created_at=user.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self._session.get(UserModel, str(user_id))
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list(
        self,
        roles: Optional[Sequence[UserRole]] = None,
        is_active: Optional[bool] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[User], int]:
        stmt = select(UserModel)
        if roles:
            stmt = stmt.where(UserModel.role.in_([r.value for r in roles]))
        if is_active is not None:
            stmt = stmt.where(UserModel.is_active.is_(is_active))

        total = await self._session.scalar(
            select(func.count()).select_from(stmt.subquery())
        )
        result = await self._session.execute(
            stmt.order_by(UserModel.created_at.desc()).limit(limit).offset(offset)
        )
        return [self._to_entity(m) for m in result.scalars().all()], total or 0

    async def list_active_by_role(self, role: UserRole) -> List[User]:
        stmt = select(UserModel).where(
            UserModel.role == role.value,
            UserModel.is_active.is_(True),
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def set_active(self, user_id: UUID, is_active: bool) -> Optional[User]:
        model = await self._session.get(UserModel, str(user_id))
        if model is None:
            return None
        model.is_active = is_active
        await self._session.flush()
        return self._to_entity(model)

    async def count(self) -> int:
        return await self._session.scalar(select(func.count(UserModel.id))) or 0

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=as_uuid(model.id),
            email=model.email,
            name=model.name,
            role=UserRole(model.role),
            password_hash=model.password_hash or "",
            phone_number=model.phone_number,
            address=model.address,
            is_active=model.is_active,
            email_verified=model.email_verified,
            created_at=as_utc(model.created_at),
        )
