"""Client state stores."""
from .auth import AuthStore
from .dashboard import DashboardStore
from .stations import StationStore

__all__ = ["AuthStore", "DashboardStore", "StationStore"]
