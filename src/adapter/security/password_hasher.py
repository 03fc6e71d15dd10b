"""bcrypt implementation of PasswordHasher."""

import logging
import os
import secrets
from functools import lru_cache

import bcrypt

from domain.model.errors import ValidationError

logger = logging.getLogger(__name__)

# 2^10 iterations by default; raise via BCRYPT_ROUNDS as hardware gets faster
BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '10'))

# bcrypt only looks at the first 72 bytes of the input
MAX_PASSWORD_BYTES = 72


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> bytes:
    """Hash of a random secret, used to spend the same time when no hash exists."""
    return bcrypt.hashpw(secrets.token_bytes(16).hex().encode('utf-8'), bcrypt.gensalt(rounds=rounds))


class BcryptPasswordHasher:
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str, work_factor: int | None = None) -> str:
        """Hash password using bcrypt with a fresh random salt.

        Args:
            plaintext: Plain text password
            work_factor: bcrypt cost (log2 of iterations); defaults to self.rounds

        Returns:
            Bcrypt hashed password as string

        Raises:
            ValidationError: password longer than 72 bytes
        """
        encoded = plaintext.encode('utf-8')
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        salt = bcrypt.gensalt(rounds=self.rounds if work_factor is None else work_factor)
        return bcrypt.hashpw(encoded, salt).decode('utf-8')

    def verify(self, plaintext: str, stored_hash: str | None) -> bool:
        """Verify password against hash.

        bcrypt.checkpw compares in constant time. A missing hash still runs a
        full check against a dummy hash so the caller's timing does not reveal
        that nothing was stored. Malformed hashes are reported as a mismatch.
        """
        encoded = plaintext.encode('utf-8')
        if not stored_hash:
            bcrypt.checkpw(encoded[:MAX_PASSWORD_BYTES], _dummy_hash(self.rounds))
            return False

        try:
            return bcrypt.checkpw(encoded[:MAX_PASSWORD_BYTES], stored_hash.encode('utf-8')) \
                and len(encoded) <= MAX_PASSWORD_BYTES
        except ValueError as e:
            logger.warning("Password verification failed on unusable hash", extra={"error": str(e)})
            return False
