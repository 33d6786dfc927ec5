"""
Pytest fixtures - test DB, client, repositories, services and record factories.
Challenge: Isolated tests; fresh in-memory SQLite per test, foreign keys enforced.
"""

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from vehicle_reports.db.base import Base
from vehicle_reports.db.models import Report, User
from vehicle_reports.db.repositories import ReportRepository, UserRepository
from vehicle_reports.db.session import enable_sqlite_foreign_keys, get_db
from vehicle_reports.main import app
from vehicle_reports.services.report_service import ReportService
from vehicle_reports.services.user_service import UserService

# In-memory SQLite; StaticPool keeps the single connection (and schema) alive for the test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest_asyncio.fixture
async def report_repo(session: AsyncSession) -> ReportRepository:
    return ReportRepository(session)


@pytest_asyncio.fixture
async def user_service(user_repo: UserRepository) -> UserService:
    return UserService(user_repo)


@pytest_asyncio.fixture
async def report_service(report_repo: ReportRepository, user_repo: UserRepository) -> ReportService:
    return ReportService(report_repo, user_repo)


@pytest_asyncio.fixture
async def make_user(user_repo: UserRepository):
    """Factory: persist a user through the repository."""

    async def _make(email: str = "alice@x.com", **overrides) -> User:
        fields = {
            "email": email,
            "first_name": "Alice",
            "last_name": "Anders",
            "password": "password123",
        }
        fields.update(overrides)
        return await user_repo.create(fields)

    return _make


@pytest_asyncio.fixture
async def make_report(report_repo: ReportRepository):
    """Factory: persist a report for user_id through the repository."""

    async def _make(user_id: str, **overrides) -> Report:
        fields = {
            "make": "Toyota",
            "model": "Camry",
            "year": 2020,
            "mileage": 25000,
            "price": Decimal("22000.00"),
            "is_approved": True,
        }
        fields.update(overrides)
        return await report_repo.create(fields, user_id)

    return _make
