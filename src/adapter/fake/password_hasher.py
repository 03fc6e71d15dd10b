"""Fast, non-cryptographic PasswordHasher for testing.

Keeps the observable contract of the bcrypt adapter (random salt, one-way,
False on malformed hashes) without paying the work factor.
"""

import hashlib
import hmac
import secrets

DEFAULT_WORK_FACTOR = 10


class FakePasswordHasher:
    def __init__(self):
        self.hash_calls: list[int] = []
        self.verify_calls = 0

    def hash(self, plaintext: str, work_factor: int | None = None) -> str:
        rounds = work_factor or DEFAULT_WORK_FACTOR
        self.hash_calls.append(rounds)
        salt = secrets.token_hex(8)
        digest = hashlib.sha256(f"{salt}:{plaintext}".encode('utf-8')).hexdigest()
        return f"fake${rounds}${salt}${digest}"

    def verify(self, plaintext: str, stored_hash: str | None) -> bool:
        self.verify_calls += 1
        if not stored_hash:
            return False
        parts = stored_hash.split('$')
        if len(parts) != 4 or parts[0] != 'fake':
            return False
        salt, digest = parts[2], parts[3]
        candidate = hashlib.sha256(f"{salt}:{plaintext}".encode('utf-8')).hexdigest()
        return hmac.compare_digest(candidate, digest)
