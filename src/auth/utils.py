from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from src import exceptions
from src.auth.schemas import Caller, CallerRole
from src.config import settings


def create_access_token(subject: str, role: CallerRole, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token carrying the caller subject and role"""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"sub": str(subject), "role": CallerRole(role).value, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Caller:
    """Decode an access token, raising InvalidCredentials when it cannot be trusted"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        raise exceptions.InvalidCredentials()

    subject = payload.get("sub")
    role = payload.get("role")
    if subject is None or role not in {r.value for r in CallerRole}:
        raise exceptions.InvalidCredentials()
    return Caller(subject=subject, role=CallerRole(role))
