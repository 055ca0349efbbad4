"""Auth routes: register, login, me. Bearer JWT for every protected route."""
from __future__ import annotations

import re
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nuancevault.core.security import (
    create_access_token,
    hash_password,
    user_id_from_token,
    verify_password,
)
from nuancevault.db.session import get_db
from nuancevault.models.user import User
from nuancevault.schemas.auth import CredentialsSchema, RegisterSchema, TokenOutSchema, UserOutSchema

router = APIRouter(prefix="/api/auth", tags=["auth"])
bearer = HTTPBearer(auto_error=False)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8
# bcrypt hard limit
MAX_PASSWORD_BYTES = 72


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _token_response(user: User) -> TokenOutSchema:
    return TokenOutSchema(
        access_token=create_access_token(user.id, extra={"role": user.role}),
        user=UserOutSchema.model_validate(user),
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Resolve the bearer token to a user; 401 otherwise."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")

    user_id = user_id_from_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid token.")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid token. User not found.")
    return user


@router.post("/register", response_model=TokenOutSchema, status_code=201)
async def register(
    body: RegisterSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a user and return an access token."""
    email_norm = _normalize_email(body.email)
    pwd = body.password or ""

    if not email_norm or not EMAIL_RE.match(email_norm):
        raise HTTPException(status_code=400, detail="Invalid email")
    if len(pwd) < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail="Password too short")
    if len(pwd.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise HTTPException(status_code=400, detail="Password too long")

    result = await db.execute(select(User).where(User.email == email_norm))
    if result.scalar_one_or_none() is not None:
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(email=email_norm, username=body.username, hashed_password=hash_password(pwd))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return _token_response(user)


@router.post("/login", response_model=TokenOutSchema)
async def login(
    body: CredentialsSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Check credentials and return an access token."""
    result = await db.execute(select(User).where(User.email == _normalize_email(body.email)))
    user = result.scalar_one_or_none()
    if not user or not verify_password(body.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _token_response(user)


@router.get("/me", response_model=UserOutSchema)
async def me(current_user: Annotated[User, Depends(get_current_user)]):
    return current_user
