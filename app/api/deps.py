# app/api/deps.py
from typing import Optional
from datetime import date
from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
import jwt
import uuid

from app.core.database import get_async_session
from app.core.security import decode_access_token
from app.crud.user import get_user_by_id
from app.models.user import User
from app.utils.periods import parse_month

# Security schemes
optional_security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """Look for the token in the Authorization header, then query params, then cookies."""
    if credentials and credentials.credentials:
        return credentials.credentials

    token = request.query_params.get("token") or request.query_params.get("access_token")
    if token:
        return token

    token = request.cookies.get("access_token")
    # Remove "Bearer " prefix if present in cookie
    if token and token.startswith("Bearer "):
        token = token[7:]
    return token


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)
) -> User:
    """
    Resolve the signed-in user from the identity provider's token.

    The token's ``sub`` claim is the user id; everything downstream is scoped
    by that id.
    """
    token = _extract_token(request, credentials)
    if not token:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid token")

    user_id_str = payload.get("sub")
    if not user_id_str:
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_id = uuid.UUID(str(user_id_str))
    except ValueError:
        raise _unauthorized("Invalid user ID format in token")

    user = await get_user_by_id(user_id, db)
    if not user:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise _unauthorized("Inactive user")

    return user


def get_month(
    month: Optional[str] = Query(None, description="Calendar month as YYYY-MM; defaults to the current month"),
) -> date:
    """First day of the requested month."""
    try:
        return parse_month(month)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
