# spotfinder/services/auth_service.py
"""
Identity verifier for `Authorization: Bearer <jwt>` headers.

Tokens are HS256 JWTs issued by the login service (not part of this API).
Required claims: `exp` and a subject (`sub`, or legacy `user_id`); `email` is optional.
Expired tokens raise a different AuthError reason than tampered or malformed ones,
since the client shows "log in again" only for the former.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Header

from spotfinder.config import settings
from spotfinder.exceptions import AuthError
from spotfinder.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    subject_id: str
    email: Optional[str]
    expires_at: Optional[datetime]


def _extract_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise AuthError(AuthError.MISSING, "Authentication required. Please log in.")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthError(AuthError.MALFORMED, "Invalid authorization format. Use: Bearer <token>")
    return parts[1]


def decode_token(token: str) -> Identity:
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError(AuthError.EXPIRED, "Token expired. Please log in again.")
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected token: {e}")
        raise AuthError(AuthError.INVALID, "Invalid token")

    subject = claims.get("sub") or claims.get("user_id")
    if subject is None or subject == "":
        raise AuthError(AuthError.INVALID, "Invalid token")
    return Identity(
        subject_id=str(subject),
        email=claims.get("email"),
        expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
    )


def verify(authorization: Optional[str]) -> Identity:
    """Parse and verify a raw Authorization header value. Raises AuthError."""
    return decode_token(_extract_token(authorization))


def verify_optional(authorization: Optional[str]) -> Optional[Identity]:
    """Like verify(), but any failure just means an anonymous caller."""
    try:
        return verify(authorization)
    except AuthError:
        return None


def create_access_token(subject_id: str, email: Optional[str] = None,
                        expires_in: Optional[timedelta] = None) -> str:
    """Mint a token the verifier accepts. For setup scripts and tests."""
    expire = datetime.now(timezone.utc) + (expires_in or timedelta(minutes=settings.TOKEN_TTL_MINUTES))
    claims = {"sub": subject_id, "exp": expire}
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


# ── FastAPI dependencies ─────────────────────────────────────────────────────
def require_identity(authorization: Optional[str] = Header(None)) -> Identity:
    return verify(authorization)


def optional_identity(authorization: Optional[str] = Header(None)) -> Optional[Identity]:
    return verify_optional(authorization)
