"""
Fixtures for integration tests.

Provides:
- In-memory SQLite database with SAVEPOINT support
- Seeded applicant and staff accounts
- Fake session provider mapping bearer tokens to users
- Test client for the FastAPI app
"""

from typing import AsyncGenerator, Callable
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from loanflow.core.config import settings
from loanflow.core.dependencies import get_session_client
from loanflow.domain.entities import (
    ApplicationStatus,
    EmploymentStatus,
    LoanApplication,
    User,
    UserRole,
)
from loanflow.domain.exceptions import AuthenticationError
from loanflow.domain.interfaces import SessionClient
from loanflow.infrastructure.database import Base, get_db_session
from loanflow.infrastructure.repositories import (
    PostgresApplicationRepository,
    PostgresUserRepository,
)
from loanflow.main import app

settings.bcrypt_rounds = 4


# =============================================================================
# Fake Session Provider
# =============================================================================

class FakeSessionClient(SessionClient):
    """Resolves `token-<name>` to the seeded user of that name."""

    def __init__(self, tokens: dict[str, UUID]):
        self.tokens = tokens
        self.call_count = 0

    async def resolve(self, token: str) -> UUID:
        self.call_count += 1
        if token not in self.tokens:
            raise AuthenticationError("Session rejected")
        return self.tokens[token]


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; take it over
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def db_rows(test_session: AsyncSession) -> Callable:
    """Return an async helper that selects rows of a model by column values."""

    async def fetch(model, **filters):
        stmt = select(model).execution_options(populate_existing=True)
        for column, value in filters.items():
            stmt = stmt.where(getattr(model, column) == value)
        result = await test_session.execute(stmt)
        return list(result.scalars().all())

    return fetch


# =============================================================================
# Seeded Users
# =============================================================================

SEED_USERS = {
    "applicant": ("Ada Applicant", UserRole.APPLICANT, True),
    "other_applicant": ("Bola Borrower", UserRole.APPLICANT, True),
    "officer": ("Olu Officer", UserRole.LOAN_OFFICER, True),
    "approver": ("Amaka Approver", UserRole.APPROVER, True),
    "admin": ("Sade Admin", UserRole.SUPER_ADMIN, True),
    "inactive_officer": ("Ike Inactive", UserRole.LOAN_OFFICER, False),
}


@pytest_asyncio.fixture
async def users(test_session: AsyncSession) -> dict[str, User]:
    repo = PostgresUserRepository(test_session)
    seeded = {}
    for key, (name, role, is_active) in SEED_USERS.items():
        seeded[key] = await repo.save(
            User(
                email=f"{key}@loanflow.test",
                name=name,
                role=role,
                password_hash="seeded",
                phone_number="08000000000",
                is_active=is_active,
            )
        )
    await test_session.commit()
    return seeded


@pytest.fixture
def session_client(users: dict[str, User]) -> FakeSessionClient:
    return FakeSessionClient({f"token-{key}": user.id for key, user in users.items()})


@pytest.fixture
def auth() -> Callable[[str], dict]:
    """Build the Authorization header for a seeded user."""

    def headers(key: str) -> dict:
        return {"Authorization": f"Bearer token-{key}"}

    return headers


@pytest.fixture
def make_application(test_session: AsyncSession, users: dict[str, User]) -> Callable:
    """Return an async factory that persists an application in a given status."""

    async def create(
        status: ApplicationStatus = ApplicationStatus.PENDING,
        amount: float = 300000,
        owner: str = "applicant",
        **fields,
    ) -> LoanApplication:
        application = LoanApplication(
            applicant_id=users[owner].id,
            amount=amount,
            purpose="Stock for my provisions shop",
            duration=fields.pop("duration", 12),
            interest_rate=fields.pop("interest_rate", 15.5),
            monthly_income=150000,
            employment_status=EmploymentStatus.SELF_EMPLOYED,
            status=status,
            **fields,
        )
        await PostgresApplicationRepository(test_session).save(application)
        await test_session.commit()
        return application

    return create


@pytest.fixture
def applications(test_session: AsyncSession) -> PostgresApplicationRepository:
    return PostgresApplicationRepository(test_session)


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    session_client: FakeSessionClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with overridden dependencies.

    This client:
    - Shares one in-memory SQLite session across the request and the test
    - Commits on success and rolls back on error, like the real session scope
    - Authenticates bearer tokens against the seeded users
    """
    async def override_get_db_session():
        try:
            yield test_session
            await test_session.commit()
        except Exception:
            await test_session.rollback()
            raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_session_client] = lambda: session_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
