"""Credential store: user and team persistence."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import DuplicateEmailError, StoreUnavailableError
from app.models.team import Team
from app.models.user import User

logger = logging.getLogger("teampulse.stores")


class CredentialStore:
    """User lookups and writes over a request-scoped session.

    Writes are flushed, never committed: the caller owns the transaction.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise StoreUnavailableError() from e

    def find_by_id(self, user_id: int) -> User | None:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise StoreUnavailableError() from e

    def create(self, user: User) -> User:
        """Insert a user. The unique email index rejects duplicates atomically."""
        try:
            self.db.add(user)
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Rejected duplicate email %s", user.email)
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailableError() from e
        return user

    def update(self, user: User) -> User:
        try:
            self.db.add(user)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailableError() from e
        return user

    def find_team(self, team_id: int) -> Team | None:
        try:
            return self.db.get(Team, team_id)
        except SQLAlchemyError as e:
            raise StoreUnavailableError() from e

    def create_team(self, team: Team) -> Team:
        try:
            self.db.add(team)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailableError() from e
        return team
