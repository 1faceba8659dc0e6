from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship

from database import Base
from .user import _new_id, _utcnow


class Note(Base):
    __tablename__ = 'notes'

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)

    book = Column(String(100), nullable=False, index=True)
    chapter = Column(Integer, nullable=False)
    verse = Column(Integer, nullable=False)
    # Serialized rich-text document; stored and returned untouched
    content = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    user = relationship("User", back_populates="notes")

    def __repr__(self):
        return f'<Note {self.id} User: {self.user_id} - {self.book} {self.chapter}:{self.verse}>'
