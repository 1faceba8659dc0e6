from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship

from database import Base
from .user import _new_id, _utcnow


class Favorite(Base):
    __tablename__ = 'favorites'

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)

    book = Column(String(100), nullable=False, index=True)  # E.g., "Genesis", "1 John"
    chapter = Column(Integer, nullable=False)
    verse_number = Column(Integer, nullable=False)
    # Copy of the scripture text at the time it was saved
    verse_text = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="favorites")

    def __repr__(self):
        return f'<Favorite {self.id} User: {self.user_id} - {self.book} {self.chapter}:{self.verse_number}>'
