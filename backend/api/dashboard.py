"""Dashboard API routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.stations import station_to_response
from db import get_db
from repositories.station_repository import summarize_stations
from schemas.dashboard import DashboardResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def dashboard(db: Session = Depends(get_db)) -> DashboardResponse:
    """Aggregate counts by status and connector type, power totals, newest stations."""
    summary = summarize_stations(db)
    return DashboardResponse(
        totalStations=summary["total"],
        byStatus=summary["by_status"],
        byConnectorType=summary["by_connector_type"],
        totalPowerOutput=round(summary["total_power_output"], 2),
        averagePowerOutput=round(summary["average_power_output"], 2),
        recentStations=[station_to_response(s) for s in summary["recent"]],
    )
