"""Password hashing with bcrypt."""

import bcrypt

from app.exceptions import InvalidPasswordError

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """One-way password hashing with a configurable bcrypt cost factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plaintext: str, rounds: int | None = None) -> str:
        """Hash a password. Raises InvalidPasswordError if it exceeds bcrypt's input limit."""
        encoded = plaintext.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise InvalidPasswordError()
        salt = bcrypt.gensalt(rounds=rounds or self.rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Verify a password against its hash. Malformed hashes never match."""
        encoded = plaintext.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError:
            return False
