"""User model: the identity every progress record belongs to."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from nuancevault.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(64), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    progress = relationship(
        "ProgressRecord",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
