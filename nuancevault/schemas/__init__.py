from nuancevault.schemas.auth import CredentialsSchema, RegisterSchema, TokenOutSchema, UserOutSchema
from nuancevault.schemas.gamification import (
    GamificationOutSchema,
    MessageOutSchema,
    PracticeInSchema,
    PracticeOutSchema,
    ProgressOutSchema,
    SetProgressOutSchema,
)

__all__ = [
    "CredentialsSchema",
    "RegisterSchema",
    "TokenOutSchema",
    "UserOutSchema",
    "GamificationOutSchema",
    "MessageOutSchema",
    "PracticeInSchema",
    "PracticeOutSchema",
    "ProgressOutSchema",
    "SetProgressOutSchema",
]
