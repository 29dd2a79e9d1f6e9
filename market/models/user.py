"""UserRow ORM: persisted form of core.entities.User.

Invariants:
    - username is unique
    - role is stored as the UserRole value
"""

from datetime import datetime

from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from market.core.domain_types import UserId, UserRole
from market.core.entities import User
from market.db.base import Base
from market.models.columns import UTCDateTime


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[str] = mapped_column(String(10), nullable=False)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    @classmethod
    def from_entity(cls, user: User) -> "UserRow":
        return cls(
            id=user.id, username=user.username, password_hash=user.password_hash,
            role=user.role.value, email=user.email, phone=user.phone,
            banned=user.banned, created_at=user.created_at,
        )

    def to_entity(self) -> User:
        return User(
            id=UserId(self.id), username=self.username,
            password_hash=self.password_hash, role=UserRole(self.role),
            email=self.email, phone=self.phone, banned=self.banned,
            created_at=self.created_at,
        )
