from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid

from database import Base


def _new_id():
    return str(uuid.uuid4())


def _utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=_new_id)
    username = Column(String(100), nullable=True)
    # Provider accounts may not expose an email; unique only when present
    email = Column(String(255), unique=True, nullable=True, index=True)
    # bcrypt hash; absent for identity-provider accounts
    password = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    accounts = relationship("Account", back_populates="user")
    favorites = relationship("Favorite", back_populates="user")
    notes = relationship("Note", back_populates="user")

    @property
    def uses_credentials(self):
        return self.password is not None

    def __repr__(self):
        return f'<User {self.username or self.email} (ID: {self.id})>'


class Account(Base):
    """An identity-provider login linked to a user."""
    __tablename__ = 'accounts'
    __table_args__ = (
        UniqueConstraint('provider', 'provider_account_id', name='uq_accounts_provider_account'),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)
    provider = Column(String(50), nullable=False)
    provider_account_id = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    user = relationship("User", back_populates="accounts")

    def __repr__(self):
        return f'<Account {self.provider}:{self.provider_account_id} User: {self.user_id}>'
