"""
Password hashing and JWT helpers shared by customer and admin auth
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a bcrypt hash; malformed hashes never match"""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def create_token(claims: Dict[str, Any], secret: str, expires_hours: int) -> str:
    """
    Sign a JWT with the configured algorithm.

    ``iat`` and ``exp`` are added to the given claims.
    """
    now = datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = now
    payload["exp"] = now + timedelta(hours=expires_hours)
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, secret: str) -> Dict[str, Any]:
    """
    Verify signature and expiry of a JWT.

    Raises:
        JWTError: bad signature, malformed token or expired token
    """
    return jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])


__all__ = [
    "JWTError",
    "create_token",
    "decode_token",
    "hash_password",
    "verify_password",
]
