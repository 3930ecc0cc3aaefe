"""In-memory stand-ins for repositories used across tests."""

from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from src.talentdesk.services.database.models import UserRole

VALID_TOKEN = "valid-token"
ADMIN_TOKEN = "admin-token"


class InMemoryRepository:
    """Dict-backed stand-in for DocumentRepository; records are SimpleNamespaces."""

    def __init__(self) -> None:
        self.records: dict[str, SimpleNamespace] = {}

    def add(self, **fields: Any) -> SimpleNamespace:
        now = datetime.now(timezone.utc)
        record = SimpleNamespace(**{"created_at": now, "updated_at": now, **fields})
        record.id = str(ObjectId())
        self.records[record.id] = record
        return record

    def _matches(self, record: SimpleNamespace, filters: dict[str, Any]) -> bool:
        return all(getattr(record, key, None) == value for key, value in filters.items())

    async def list_records(
        self,
        filters: dict[str, Any] | None = None,
        skip: int = 0,
        limit: int = 100,
        sort: str = "-created_at",
    ) -> list[SimpleNamespace]:
        key = sort.lstrip("-")
        matched = [r for r in self.records.values() if self._matches(r, filters or {})]
        matched.sort(key=lambda r: getattr(r, key), reverse=sort.startswith("-"))
        return matched[skip : skip + limit]

    async def get(self, record_id: str) -> SimpleNamespace | None:
        return self.records.get(record_id)

    async def find_one(self, filters: dict[str, Any]) -> SimpleNamespace | None:
        return next((r for r in self.records.values() if self._matches(r, filters)), None)

    async def create(self, data: dict[str, Any]) -> SimpleNamespace:
        return self.add(**data)

    async def update(self, record: SimpleNamespace, data: dict[str, Any]) -> SimpleNamespace:
        for field, value in data.items():
            setattr(record, field, value)
        record.updated_at = datetime.now(timezone.utc)
        return record

    async def delete(self, record: SimpleNamespace) -> None:
        self.records.pop(record.id, None)


class InMemoryUserRepository(InMemoryRepository):
    """Stand-in for UserRepository that enforces uid/email uniqueness."""

    async def find_by_uid(self, uid: str) -> SimpleNamespace | None:
        return await self.find_one({"uid": uid})

    async def find_by_email(self, email: str) -> SimpleNamespace | None:
        return await self.find_one({"email": email})

    async def find_by_uid_or_email(self, uid: str, email: str | None) -> SimpleNamespace | None:
        return await self.find_by_uid(uid) or (await self.find_by_email(email) if email else None)

    async def create_user(
        self, uid: str, email: str | None, name: str, role: UserRole = UserRole.USER
    ) -> SimpleNamespace:
        # Mirrors the unique indexes: uid always, email only when stored as a string
        taken_email = email is not None and await self.find_one({"email": email}) is not None
        if taken_email or await self.find_by_uid(uid):
            raise DuplicateKeyError("E11000 duplicate key error collection: test.users")
        return self.add(uid=uid, email=email, name=name, role=role)

    async def save(self, user: SimpleNamespace) -> SimpleNamespace:
        user.updated_at = datetime.now(timezone.utc)
        return user

