"""Password reset ticket.
The raw token only ever leaves the server in the reset email; the user row
keeps its SHA-256 hash and an expiry, always together.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
import hashlib
import secrets

from utils.dates import utcnow

DEFAULT_LIFETIME = timedelta(hours=1)


@dataclass(frozen=True)
class ResetTicket:
    token_hash: str
    expires_at: datetime

    def __post_init__(self):
        if not self.token_hash or self.expires_at is None:
            raise ValueError('A reset ticket needs both a token hash and an expiry')

    @staticmethod
    def hash_token(raw_token: str) -> str:
        return hashlib.sha256(raw_token.encode('utf-8')).hexdigest()

    @classmethod
    def issue(cls, lifetime: timedelta = DEFAULT_LIFETIME):
        """Create a fresh ticket. Returns ``(raw_token, ticket)``."""
        raw_token = secrets.token_hex(32)
        ticket = cls(token_hash=cls.hash_token(raw_token), expires_at=utcnow() + lifetime)
        return raw_token, ticket
