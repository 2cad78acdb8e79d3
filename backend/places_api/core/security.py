"""
Caller identity for protected routes.

Tokens are HS256 JWTs carrying ``userId`` and ``email`` claims, sent as
``Authorization: Bearer <token>``. ``get_current_user_id`` is the FastAPI
dependency handlers use to learn who is calling.
"""
from datetime import datetime, timedelta, timezone
import logging

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from places_api.core.config import settings
from places_api.core.errors import AuthorizationError
from places_api.core.logger import logs

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, email: str, expires_minutes: int | None = None) -> str:
    """Sign a token for the given user."""
    if expires_minutes is None:
        expires_minutes = settings.JWT_EXPIRE_MINUTES
    expires = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {"userId": user_id, "email": email, "exp": expires}
    return jwt.encode(payload, settings.JWT_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logs.log(logging.INFO, f"Rejected access token: {str(e)}")
        raise AuthorizationError()


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthorizationError()

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("userId")
    if not user_id:
        raise AuthorizationError()
    return str(user_id)
