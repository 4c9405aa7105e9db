from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from devlink.core.database import get_db
from devlink.core.exceptions import AuthenticationError
from devlink.core.logging_config import bind_log_context
from devlink.core.security import decode_token
from devlink.core.types import canonical_uuid
from devlink.models.user import User
from devlink.services.portfolio_store import PortfolioStore

# auto_error=False: a missing header is our 401, not FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user; any failure is 401 Unauthorized"""

    if credentials is None:
        raise AuthenticationError()

    payload = decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise AuthenticationError("Invalid token type")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    if canonical_uuid(user_id) is None:
        raise AuthenticationError("Invalid user ID format")

    result = await db.execute(
        select(User).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()

    if not user:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthenticationError("User account is inactive")

    request.state.user_id = user.id
    bind_log_context(user_id=user.id)
    return user


def get_portfolio_store(db: AsyncSession = Depends(get_db)) -> PortfolioStore:
    """Portfolio store bound to the request's database session"""
    return PortfolioStore(db)
