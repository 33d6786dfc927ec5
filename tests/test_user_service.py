"""
UserService unit tests - repository mocked, business rules only.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from vehicle_reports.core.exceptions import ConflictError, NotFoundError
from vehicle_reports.schemas.user import UserCreate, UserUpdate
from vehicle_reports.services.user_service import UserService


@pytest.fixture
def repo():
    return AsyncMock()


@pytest.fixture
def service(repo):
    return UserService(repo)


@pytest.fixture
def create_data():
    return UserCreate(
        email="test@example.com",
        first_name="John",
        last_name="Doe",
        password="password123",
    )


@pytest.mark.asyncio
async def test_create_user(service, repo, create_data):
    created = MagicMock(id="1", email="test@example.com")
    repo.find_by_email.return_value = None
    repo.create.return_value = created

    result = await service.create_user(create_data)

    repo.find_by_email.assert_awaited_once_with("test@example.com")
    repo.create.assert_awaited_once_with(create_data.model_dump())
    assert result is created


@pytest.mark.asyncio
async def test_create_user_conflict(service, repo, create_data):
    repo.find_by_email.return_value = MagicMock(id="1")

    with pytest.raises(ConflictError):
        await service.create_user(create_data)
    repo.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_find_one(service, repo):
    user = MagicMock(id="1")
    repo.find_one.return_value = user

    assert await service.find_one("1") is user
    repo.find_one.assert_awaited_once_with("1")


@pytest.mark.asyncio
async def test_find_one_not_found(service, repo):
    repo.find_one.return_value = None

    with pytest.raises(NotFoundError, match="User with ID 1 not found"):
        await service.find_one("1")


@pytest.mark.asyncio
async def test_find_by_email_not_found(service, repo):
    repo.find_by_email.return_value = None

    with pytest.raises(NotFoundError):
        await service.find_by_email("nobody@example.com")


@pytest.mark.asyncio
async def test_update_passes_only_sent_fields(service, repo):
    updated = MagicMock(first_name="Jane")
    repo.update.return_value = updated

    result = await service.update("1", UserUpdate(first_name="Jane", phone_number=None))

    repo.update.assert_awaited_once_with("1", {"first_name": "Jane", "phone_number": None})
    assert result is updated


@pytest.mark.asyncio
async def test_update_drops_null_for_required_fields(service, repo):
    await service.update("1", UserUpdate(last_name=None, is_email_verified=True))

    repo.update.assert_awaited_once_with("1", {"is_email_verified": True})


@pytest.mark.asyncio
async def test_update_not_found(service, repo):
    repo.update.return_value = None

    with pytest.raises(NotFoundError):
        await service.update("1", UserUpdate(first_name="Jane"))


@pytest.mark.asyncio
async def test_remove(service, repo):
    repo.soft_delete.return_value = True

    await service.remove("1")

    repo.soft_delete.assert_awaited_once_with("1")


@pytest.mark.asyncio
async def test_remove_not_found(service, repo):
    repo.soft_delete.return_value = False

    with pytest.raises(NotFoundError):
        await service.remove("1")


@pytest.mark.asyncio
async def test_aggregates_pass_through(service, repo):
    repo.find_users_with_reports_count.return_value = []
    repo.find_users_by_email_domain.return_value = []

    assert await service.get_users_with_reports_count() == []
    assert await service.get_users_by_email_domain("example.com") == []
    repo.find_users_by_email_domain.assert_awaited_once_with("example.com")
