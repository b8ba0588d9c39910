"""Team model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from app.database import Base


class Team(Base):
    """Organizational group; the registering user becomes its manager."""

    __tablename__ = "team"

    id = Column(Integer, primary_key=True, autoincrement=True)
    manager_user_id = Column(Integer, nullable=False, index=True)
    company_name = Column(String(100), nullable=True)
    team_name = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
