"""Recovery token store."""

from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import StoreUnavailableError
from app.models.recovery_token import RecoveryToken


class RecoveryTokenStore:
    """Persists one-time reset tokens. Token values are generated by the caller."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, user_id: int, token: str, created_at: datetime) -> RecoveryToken:
        row = RecoveryToken(user_id=user_id, token=token, created_at=created_at)
        try:
            self.db.add(row)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailableError() from e
        return row

    def find_by_token(self, token: str) -> RecoveryToken | None:
        try:
            return self.db.query(RecoveryToken).filter(RecoveryToken.token == token).first()
        except SQLAlchemyError as e:
            raise StoreUnavailableError() from e

    def delete_all_for_user(self, user_id: int) -> int:
        """Delete every token issued to ``user_id`` in one statement. Returns the row count."""
        try:
            result = self.db.execute(delete(RecoveryToken).where(RecoveryToken.user_id == user_id))
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailableError() from e
        return result.rowcount
