from sqlalchemy import Column, String, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from textstore.db.base import BaseModel


class TextEntry(BaseModel):
    __tablename__ = "text_entries"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.uuid"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="entries")
