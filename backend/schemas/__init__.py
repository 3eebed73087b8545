# Schemas package
from .auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from .dashboard import DashboardResponse
from .health import HealthResponse
from .stations import (
    CONNECTOR_TYPES,
    STATION_STATUSES,
    StationCreate,
    StationLocation,
    StationResponse,
    StationUpdate,
)

__all__ = [
    "AuthResponse",
    "CONNECTOR_TYPES",
    "DashboardResponse",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "STATION_STATUSES",
    "StationCreate",
    "StationLocation",
    "StationResponse",
    "StationUpdate",
    "UserResponse",
]
