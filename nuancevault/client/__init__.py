from nuancevault.client.api import GamificationAPI, GamificationSyncError
from nuancevault.client.reconciler import OptimisticProgress, is_persisted_set_id
from nuancevault.client.store import LocalProgressCache, LocalProgressState, LocalSetStats

__all__ = [
    "GamificationAPI",
    "GamificationSyncError",
    "OptimisticProgress",
    "is_persisted_set_id",
    "LocalProgressCache",
    "LocalProgressState",
    "LocalSetStats",
]
