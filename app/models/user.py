"""User model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.types import TypeDecorator

from app.database import Base

ROLE_MANAGER = "manager"
ROLE_USER = "user"


class RoleSet(TypeDecorator):
    """Stores a set of role tags as a comma-joined string."""

    impl = String(30)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if not value:
            return None
        return ",".join(sorted(value))

    def process_result_value(self, value, dialect):
        if not value:
            return frozenset()
        return frozenset(role for role in value.split(",") if role)


class User(Base):
    """Application user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(100), nullable=False)
    name = Column(String(30), nullable=False)
    surname = Column(String(30), nullable=True)
    employee_role = Column(String(50), nullable=False)
    roles = Column(RoleSet, nullable=True)
    photo = Column(String(30), nullable=True)
    team_id = Column(Integer, ForeignKey("team.id"), nullable=True, index=True)
    status = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
