from typing import Protocol


class PasswordHasher(Protocol):
    """One-way salted password hashing."""

    def hash(self, plaintext: str, work_factor: int | None = None) -> str:
        """Hash a password with a fresh salt. None selects the default work factor."""
        ...

    def verify(self, plaintext: str, stored_hash: str | None) -> bool:
        """Return True if plaintext matches stored_hash.

        Missing or malformed hashes return False; they never raise.
        """
        ...
