"""SQLAlchemy declarative base and model imports for Alembic."""
from nuancevault.db.session import Base

# Import all models so Alembic can see them
from nuancevault.models.progress import ProgressRecord, SetProgressEntry  # noqa: F401
from nuancevault.models.user import User  # noqa: F401

__all__ = ["Base", "User", "ProgressRecord", "SetProgressEntry"]
