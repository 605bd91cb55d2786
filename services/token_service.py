"""Bearer token service.

Tokens are HS256 JWTs carrying the user id (``sub``) and email. They are
stateless: nothing is stored server side and there is no revocation or
refresh, a caller whose token expired logs in again.

Every way a token can be bad (garbage, bad signature, missing claim,
expired) surfaces as the same `InvalidToken`, so callers cannot tell an
expired token from a forged one.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
import secrets
from typing import Optional

import jwt
from flask import current_app

REQUIRED_CLAIMS = ['sub', 'iat', 'exp']


class InvalidToken(Exception):
    """The token could not be verified."""


@dataclass(frozen=True)
class TokenIdentity:
    user_id: str
    email: Optional[str] = None


def _signing_key() -> str:
    return current_app.config['JWT_SECRET_KEY']


def issue_token(user_id: str, email: str) -> str:
    """
    Issue a signed access token for a user.

    Args:
        user_id: Identifier of the user the token speaks for
        email: User email, carried as a convenience claim

    Returns:
        Encoded JWT string
    """
    issued_at = datetime.now(timezone.utc)
    payload = {
        'sub': str(user_id),
        'email': email,
        'iat': issued_at,
        'exp': issued_at + current_app.config['JWT_ACCESS_TOKEN_EXPIRES'],
        'jti': secrets.token_hex(8),
    }
    return jwt.encode(payload, _signing_key(), algorithm=current_app.config['JWT_ALGORITHM'])


def verify_token(token: str) -> TokenIdentity:
    """
    Verify a token's signature and expiry.

    Args:
        token: Encoded JWT string

    Returns:
        TokenIdentity for the user the token was issued to

    Raises:
        InvalidToken: If the token is malformed, tampered with or expired
    """
    if not token:
        raise InvalidToken()
    try:
        payload = jwt.decode(
            token,
            _signing_key(),
            algorithms=[current_app.config['JWT_ALGORITHM']],
            options={'require': REQUIRED_CLAIMS},
        )
    except jwt.InvalidTokenError as e:
        raise InvalidToken() from e

    user_id = payload.get('sub')
    if not user_id:
        raise InvalidToken()
    return TokenIdentity(user_id=user_id, email=payload.get('email'))
