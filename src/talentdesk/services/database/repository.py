"""Generic repository helpers for Beanie documents."""

from typing import Any, Generic, TypeVar

from beanie import Document, PydanticObjectId
from bson import ObjectId

from src.talentdesk.services.database.models import (
    Job,
    Resume,
    User,
    UserRole,
    Vendor,
    utc_now,
)

DocumentT = TypeVar("DocumentT", bound=Document)


class DocumentRepository(Generic[DocumentT]):
    """Helper class for querying and mutating one document collection."""

    def __init__(self, model: type[DocumentT]) -> None:
        """
        Initialize repository.

        Args:
            model: Beanie document class backing the collection
        """
        self.model = model

    async def list_records(
        self,
        filters: dict[str, Any] | None = None,
        skip: int = 0,
        limit: int = 100,
        sort: str = "-created_at",
    ) -> list[DocumentT]:
        """
        List documents with optional filtering and pagination.

        Args:
            filters: Raw MongoDB filter
            skip: Number of documents to skip
            limit: Maximum number of documents to return
            sort: Sort key, prefix with "-" for descending order

        Returns:
            Matching documents

        Example:
            >>> repo = DocumentRepository(Job)
            >>> jobs = await repo.list_records({"status": "open"}, limit=20)
        """
        return await self.model.find(filters or {}).sort(sort).skip(skip).limit(limit).to_list()

    async def get(self, record_id: str) -> DocumentT | None:
        """
        Fetch a single document by its ObjectId string.

        Returns None for ids that are not valid ObjectIds.
        """
        if not ObjectId.is_valid(record_id):
            return None
        return await self.model.get(PydanticObjectId(record_id))

    async def find_one(self, filters: dict[str, Any]) -> DocumentT | None:
        """Fetch the first document matching a raw MongoDB filter."""
        return await self.model.find_one(filters)

    async def create(self, data: dict[str, Any]) -> DocumentT:
        """
        Insert a new document.

        Raises:
            pymongo.errors.DuplicateKeyError: If a unique index is violated
        """
        document = self.model(**data)
        await document.insert()
        return document

    async def update(self, document: DocumentT, data: dict[str, Any]) -> DocumentT:
        """Apply field changes, touch updated_at and persist."""
        for field, value in data.items():
            setattr(document, field, value)
        document.updated_at = utc_now()
        await document.save()
        return document

    async def delete(self, document: DocumentT) -> None:
        await document.delete()


class UserRepository(DocumentRepository[User]):
    """Queries on the local user collection."""

    def __init__(self) -> None:
        super().__init__(User)

    async def find_by_uid(self, uid: str) -> User | None:
        return await self.model.find_one({"uid": uid})

    async def find_by_email(self, email: str) -> User | None:
        return await self.model.find_one({"email": email})

    async def find_by_uid_or_email(self, uid: str, email: str | None) -> User | None:
        """Find a user matching either identifier (duplicate-key recovery)."""
        clauses: list[dict[str, Any]] = [{"uid": uid}]
        if email:
            clauses.append({"email": email})
        return await self.model.find_one({"$or": clauses})

    async def create_user(
        self, uid: str, email: str | None, name: str, role: UserRole = UserRole.USER
    ) -> User:
        now = utc_now()
        return await self.create(
            {
                "uid": uid,
                "email": email,
                "name": name,
                "role": role,
                "created_at": now,
                "updated_at": now,
            }
        )

    async def save(self, user: User) -> User:
        user.updated_at = utc_now()
        await user.save()
        return user


def get_user_repository() -> UserRepository:
    """Dependency returning the user repository."""
    return UserRepository()


def get_resume_repository() -> DocumentRepository[Resume]:
    return DocumentRepository(Resume)


def get_job_repository() -> DocumentRepository[Job]:
    return DocumentRepository(Job)


def get_vendor_repository() -> DocumentRepository[Vendor]:
    return DocumentRepository(Vendor)
