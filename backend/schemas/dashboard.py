"""Dashboard aggregate response schema."""
from pydantic import BaseModel

from schemas.stations import StationResponse


class DashboardResponse(BaseModel):
    """Counts by status and connector type plus power totals."""

    totalStations: int
    byStatus: dict[str, int]
    byConnectorType: dict[str, int]
    totalPowerOutput: float
    averagePowerOutput: float
    recentStations: list[StationResponse] = []
