# conference_api/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from conference_api.config import get_settings
from conference_api.database import scoped_session_dependency
from conference_api.errors import Unauthenticated
from conference_api.models import Role, User
from conference_api.policy import Principal
from conference_api.schemas import Token, UserCreate, UserLogin, UserResponse

import logging

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/users/login", auto_error=False)

auth_router = APIRouter(prefix="/api/v1/users")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


async def get_user_by_email(session: AsyncSession, email: str):
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def authenticate_user(session: AsyncSession, email: str, password: str):
    user = await get_user_by_email(session, email)
    if not user:
        return False
    if not verify_password(password, user.hashed_password):
        return False
    return user


async def create_user(session: AsyncSession, name: str, email: str, password: str, role: Role = Role.USER):
    user = User(
        name=name,
        email=email.lower(),
        hashed_password=get_password_hash(password),
        role=role,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(user)
    logger.info("Registered user %s with role %s", user.id, role.value)
    return user


def create_access_token(data: dict, expires_delta: timedelta | None = None):
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def token_for(user: User) -> Token:
    return Token(access_token=create_access_token(data={"sub": str(user.id)}), token_type="bearer")


async def authenticate(session: AsyncSession, token: Optional[str]) -> Principal:
    """Resolve a bearer token to the principal it was issued for."""
    if not token:
        raise Unauthenticated()
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        subject = payload.get("sub")
        if subject is None:
            raise Unauthenticated()
        user_id = int(subject)
    except (JWTError, ValueError):
        raise Unauthenticated()
    user = await session.get(User, user_id)
    if user is None:
        raise Unauthenticated("User not found")
    return Principal(id=user.id, role=user.role)


async def get_current_principal(
    token: Optional[str] = Depends(oauth2_scheme),
    session: AsyncSession = Depends(scoped_session_dependency),
) -> Principal:
    return await authenticate(session, token)


async def get_optional_principal(
    token: Optional[str] = Depends(oauth2_scheme),
    session: AsyncSession = Depends(scoped_session_dependency),
) -> Optional[Principal]:
    """Like ``get_current_principal`` but anonymous callers get None."""
    if not token:
        return None
    return await authenticate(session, token)


@auth_router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, session: AsyncSession = Depends(scoped_session_dependency)):
    db_user = await get_user_by_email(session, user.email)
    if db_user:
        raise HTTPException(status_code=400, detail="User already exists")
    try:
        new_user = await create_user(session, user.name, user.email, user.password)
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        raise HTTPException(status_code=400, detail="User already exists")
    return token_for(new_user)


@auth_router.post("/login", response_model=Token)
async def login_for_access_token(form_data: UserLogin, session: AsyncSession = Depends(scoped_session_dependency)):
    user = await authenticate_user(session, form_data.email, form_data.password)
    if not user:
        raise HTTPException(status_code=400, detail="Invalid email or password")
    return token_for(user)


@auth_router.get("/profile", response_model=UserResponse)
async def profile(
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(scoped_session_dependency),
):
    return await session.get(User, principal.id)


@auth_router.get("/verify")
async def verify(principal: Principal = Depends(get_current_principal)):
    return {"id": principal.id, "role": principal.role}
