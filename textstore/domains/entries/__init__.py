from textstore.domains.entries.entities import Entry
from textstore.domains.entries.schemas import (
    EntryBase, EntryCreate, EntryUpdate, EntryResponse, EntryListResponse
)

__all__ = [
    "Entry",
    "EntryBase", "EntryCreate", "EntryUpdate", "EntryResponse", "EntryListResponse",
]
