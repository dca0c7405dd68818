from textstore.db.models.user import User
from textstore.db.models.entry import TextEntry

__all__ = [
    "User",
    "TextEntry",
]
