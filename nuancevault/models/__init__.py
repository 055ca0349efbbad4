from nuancevault.models.user import User
from nuancevault.models.progress import ProgressRecord, SetProgressEntry

__all__ = ["User", "ProgressRecord", "SetProgressEntry"]
