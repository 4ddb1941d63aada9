"""JWT issuance/validation and password hashing."""

from __future__ import annotations

import logging
import time
from typing import Any

import bcrypt
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from ems.core.config import Settings
from ems.core.exceptions import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)


# bcrypt only looks at the first 72 bytes; newer releases reject anything longer
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(email: str, settings: Settings, *, now: int | None = None) -> str:
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not configured")

    issued_at = int(time.time()) if now is None else now
    claims = {
        "sub": email,
        "iat": issued_at,
        "exp": issued_at + settings.JWT_EXPIRATION_MINUTES * 60,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def validate_token(token: str, settings: Settings) -> dict[str, Any]:
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not configured")

    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require_exp": True, "require_sub": True},
        )
    except ExpiredSignatureError as e:
        raise AuthenticationError("Token is expired") from e
    except (JWTClaimsError, JWTError) as e:
        logger.debug("Token rejected: %s", e)
        raise AuthenticationError("Invalid authentication credentials") from e


def extract_subject(payload: dict[str, Any]) -> str | None:
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub.strip():
        return None
    return sub
