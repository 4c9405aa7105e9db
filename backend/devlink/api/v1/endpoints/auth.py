from fastapi import APIRouter, Depends, status, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from devlink.core.database import get_db
from devlink.core.config import settings
from devlink.core.exceptions import ValidationError, InvalidCredentialsError
from devlink.core.security import verify_password, get_password_hash, create_access_token
from devlink.core.logging_config import logger, bind_log_context
from devlink.core.rate_limiter import limiter
from devlink.models.user import User
from devlink.schemas.auth import (
    UserRegister,
    UserLogin,
    Token,
    UserResponse,
    RegisterResponse,
)
from devlink.modules.auth.dependencies import get_current_user


router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("3/minute")
async def register(
    request: Request,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Register new user (rate limited: 3/min)"""
    client_ip = request.client.host if request.client else "unknown"

    if not user_data.name or not user_data.email or not user_data.password:
        raise ValidationError("Missing required fields")

    if len(user_data.password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters",
            field="password"
        )

    # Check if email already exists
    result = await db.execute(
        select(User).where(User.email == user_data.email)
    )
    if result.scalar_one_or_none():
        logger.log_auth_event(
            event="register",
            success=False,
            user_email=user_data.email,
            reason="User already exists",
            client_ip=client_ip
        )
        raise ValidationError("User already exists", field="email")

    user = User(
        email=user_data.email,
        name=user_data.name,
        hashed_password=get_password_hash(user_data.password),
    )

    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Registered concurrently between the check and the insert
        await db.rollback()
        raise ValidationError("User already exists", field="email")
    await db.refresh(user)

    logger.log_auth_event(
        event="register",
        success=True,
        user_email=user.email,
        client_ip=client_ip
    )

    return {"message": "User created successfully", "user": user}


@router.post("/login", response_model=Token)
@limiter.limit("5/minute")
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Login with email/password (rate limited: 5/min). One message for every failure."""
    client_ip = request.client.host if request.client else "unknown"

    result = await db.execute(
        select(User).where(User.email == credentials.email)
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise InvalidCredentialsError()

    if not user.is_active:
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Account inactive",
            client_ip=client_ip
        )
        raise InvalidCredentialsError()

    bind_log_context(user_id=user.id)
    access_token = create_access_token(data={"sub": str(user.id)})

    logger.log_auth_event(
        event="login",
        success=True,
        user_email=user.email,
        client_ip=client_ip
    )

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user,
    }


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user"""
    return current_user
