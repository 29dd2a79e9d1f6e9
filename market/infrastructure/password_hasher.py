"""Password Hasher: bcrypt digests for user credentials.

Invariants:
    - hash() never returns the plaintext; each call uses a fresh salt
    - hash() rejects passwords over MAX_PASSWORD_BYTES with InvalidArgumentError
    - verify() returns False (never raises) for over-long passwords and malformed digests
"""

import logging

import bcrypt

from market.core.domain_types import MAX_PASSWORD_BYTES
from market.core.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class BcryptPasswordHasher:
    """Implements core.collaborator_protocols.PasswordHasher."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            raise InvalidArgumentError(
                f"Invalid password: must be at most {MAX_PASSWORD_BYTES} bytes",
                "password",
            )
        digest = bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.rounds))
        return digest.decode("utf-8")

    def verify(self, plaintext: str, digest: str) -> bool:
        secret = plaintext.encode("utf-8")
        # No stored password can be longer
        if len(secret) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(secret, digest.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Unreadable password digest: {e}")
            return False
