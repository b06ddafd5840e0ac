"""
Actor resolution for Elevate.

Every mutating operation is attributed to an employee. The caller presents a
signed access token; the token's email claim (or subject) is matched against
the employee directory to find the acting employee key.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog
from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from elevate.core.config import get_settings
from elevate.models.employee import Employee

log = structlog.get_logger()
settings = get_settings()

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


# ---------------------------------------------------------------------------
# Access tokens
# ---------------------------------------------------------------------------

def create_access_token(
    email: str,
    *,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for an employee email (development and tests)."""
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "sub": email,
        "email": email,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": exp,
        "jti": str(uuid.uuid4()),
    }
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Decode and verify an access token. Raises jwt.PyJWTError on failure."""
    options = {"require": ["exp", "sub"]}
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options=options,
    )


def bearer_token(authorization: Optional[str]) -> str:
    """Strip the Bearer scheme from an Authorization header value."""
    if not authorization:
        return ""
    if authorization.startswith("Bearer "):
        return authorization[7:].strip()
    return authorization.strip()


# ---------------------------------------------------------------------------
# Actor resolution
# ---------------------------------------------------------------------------

async def resolve_actor(credential: str, session: AsyncSession) -> Optional[int]:
    """Map an access token to the acting employee key.

    Returns None when the token is missing or invalid, carries no email, or
    names an email that is not in the employee directory.
    """
    if not credential:
        log.warning("actor.unresolved", reason="missing_token")
        return None

    try:
        claims = decode_access_token(credential)
    except jwt.PyJWTError as exc:
        log.warning("actor.unresolved", reason="invalid_token", error=str(exc))
        return None

    email = claims.get("email") or claims.get("sub")
    if not isinstance(email, str) or not email:
        log.warning("actor.unresolved", reason="missing_email_claim")
        return None

    result = await session.execute(
        select(Employee.employee_key).where(Employee.email == email)
    )
    employee_key = result.scalar_one_or_none()
    if employee_key is None:
        log.warning("actor.unresolved", reason="unknown_employee", email=email)
        return None
    return employee_key


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

async def get_access_token(
    authorization: Optional[str] = Depends(api_key_header),
) -> str:
    """Raw bearer credential from the Authorization header ("" when absent)."""
    return bearer_token(authorization)
