"""
User service - business rules for users (SOLID: Single Responsibility).
Challenge: Email uniqueness among active users; turn absence into explicit NotFound.
Design: Service depends on the repository only; never builds queries itself.
"""

import logging

from vehicle_reports.core.exceptions import ConflictError, NotFoundError
from vehicle_reports.db.models.user import User
from vehicle_reports.db.repositories.user_repository import UserReportCount, UserRepository
from vehicle_reports.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Handles all user use cases: registration, lookup, partial update, soft delete, aggregates."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def create_user(self, data: UserCreate) -> User:
        """Create user unless an active user already owns the email.

        Check-then-insert without a lock: two concurrent requests can both pass the
        check, and the partial unique index rejects the second insert with IntegrityError.
        """
        existing = await self.user_repo.find_by_email(data.email)
        if existing:
            logger.warning("create_user: email already registered email=%s", data.email)
            raise ConflictError("User with this email already exists")
        user = await self.user_repo.create(data.model_dump())
        logger.info("User created id=%s email=%s", user.id, user.email)
        return user

    async def find_all(self) -> list[User]:
        return await self.user_repo.find_all()

    async def find_one(self, id: str) -> User:
        user = await self.user_repo.find_one(id)
        if not user:
            raise NotFoundError(f"User with ID {id} not found")
        return user

    async def find_by_email(self, email: str) -> User:
        user = await self.user_repo.find_by_email(email)
        if not user:
            raise NotFoundError(f"User with email {email} not found")
        return user

    async def update(self, id: str, data: UserUpdate) -> User:
        """Apply only the fields present in `data`."""
        user = await self.user_repo.update(id, data.to_patch())
        if not user:
            raise NotFoundError(f"User with ID {id} not found")
        return user

    async def remove(self, id: str) -> None:
        """Soft delete. The user's reports are left as they are."""
        deleted = await self.user_repo.soft_delete(id)
        if not deleted:
            logger.warning("remove: no active user id=%s", id)
            raise NotFoundError(f"User with ID {id} not found")
        logger.info("User soft-deleted id=%s", id)

    async def get_users_with_reports_count(self) -> list[UserReportCount]:
        return await self.user_repo.find_users_with_reports_count()

    async def get_users_by_email_domain(self, domain: str) -> list[User]:
        return await self.user_repo.find_users_by_email_domain(domain)
