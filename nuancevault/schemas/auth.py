"""Pydantic schemas for registration, login and the current user."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CredentialsSchema(BaseModel):
    email: str
    password: str


class RegisterSchema(CredentialsSchema):
    username: str | None = None


class UserOutSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str | None = None
    role: str
    created_at: datetime | None = None


class TokenOutSchema(BaseModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    user: UserOutSchema
