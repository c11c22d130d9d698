"""Security and authentication utilities."""
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Optional

import argon2
import jwt
from fastapi import HTTPException, Request

from volunteerhub.core import config
from volunteerhub.core.constants import STAFF_COOKIE_NAME

# Argon2 hasher for staff passwords
ph = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,
    parallelism=1,
    hash_len=32,
    salt_len=16
)


def generate_waiver_token() -> str:
    """Generate an unguessable token for a guardian waiver link."""
    return secrets.token_urlsafe(32)


def generate_temporary_password(length: int = 16) -> str:
    """Random password for a new staff account (replaced on first login)."""
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def get_password_hash(password: str) -> str:
    """Hash a password using Argon2."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its Argon2 hash."""
    try:
        ph.verify(password_hash, password)
        return True
    except argon2.exceptions.VerificationError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.settings.SECRET_KEY, algorithm=config.settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, config.settings.SECRET_KEY, algorithms=[config.settings.ALGORITHM])


def verify_staff_token(request: Request) -> dict:
    """Verify the staff JWT from its cookie and return the payload."""
    token = request.cookies.get(STAFF_COOKIE_NAME)

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    if payload.get("role") not in ("admin", "staff") or "sub" not in payload:
        raise HTTPException(status_code=403, detail="Not authorized")
    return payload
