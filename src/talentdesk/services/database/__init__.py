"""Database connection, models and repositories."""

from src.talentdesk.services.database.connection import close_database, init_database
from src.talentdesk.services.database.repository import (
    DocumentRepository,
    UserRepository,
    get_job_repository,
    get_resume_repository,
    get_user_repository,
    get_vendor_repository,
)

__all__ = [
    "init_database",
    "close_database",
    "DocumentRepository",
    "UserRepository",
    "get_user_repository",
    "get_resume_repository",
    "get_job_repository",
    "get_vendor_repository",
]
