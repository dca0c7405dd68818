from textstore.db.repositories.user_repository import UserRepository
from textstore.db.repositories.entry_repository import EntryRepository

__all__ = [
    "UserRepository",
    "EntryRepository",
]
