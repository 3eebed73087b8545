"""Station API routes."""
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.deps import get_current_user
from db import get_db
from models.station import Station
from models.user import User
from repositories.station_repository import (
    create_station as repo_create_station,
    delete_station as repo_delete_station,
    get_station as repo_get_station,
    list_stations as repo_list_stations,
    update_station as repo_update_station,
)
from schemas.stations import (
    ConnectorType,
    StationCreate,
    StationLocation,
    StationResponse,
    StationStatus,
    StationUpdate,
)
from utils.errors import NotFoundError

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/stations", tags=["stations"])


def station_to_response(s: Station) -> StationResponse:
    """Build StationResponse from model instance."""
    return StationResponse(
        id=s.id,
        name=s.name,
        location=StationLocation(latitude=s.latitude, longitude=s.longitude, address=s.address),
        status=s.status,
        powerOutput=float(s.power_output),
        connectorType=s.connector_type,
        createdAt=s.created_at,
        updatedAt=s.updated_at,
    )


@router.get("", response_model=list[StationResponse])
def list_stations(
    status_filter: StationStatus | None = Query(default=None, alias="status"),
    connector_type: ConnectorType | None = Query(default=None, alias="connectorType"),
    db: Session = Depends(get_db),
) -> list[StationResponse]:
    """List stations, optionally filtered by status and connector type."""
    stations = repo_list_stations(db, status=status_filter, connector_type=connector_type)
    return [station_to_response(s) for s in stations]


@router.get("/{station_id}", response_model=StationResponse)
def get_station(station_id: str, db: Session = Depends(get_db)) -> StationResponse:
    """Get a station by id."""
    station = repo_get_station(db, station_id)
    if station is None:
        raise NotFoundError("Station not found")
    return station_to_response(station)


@router.post("", response_model=StationResponse, status_code=status.HTTP_201_CREATED)
def create_station(
    body: StationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> StationResponse:
    """Create a station."""
    station = repo_create_station(
        db,
        name=body.name,
        latitude=body.location.latitude,
        longitude=body.location.longitude,
        address=body.location.address,
        status=body.status,
        power_output=body.powerOutput,
        connector_type=body.connectorType,
    )
    LOG.info("Station %s created by user %s", station.id, current_user.id)
    return station_to_response(station)


@router.put("/{station_id}", response_model=StationResponse)
def update_station(
    station_id: str,
    body: StationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> StationResponse:
    """Replace the provided fields of a station; omitted fields keep their value."""
    station = repo_update_station(db, station_id, body.to_columns())
    if station is None:
        raise NotFoundError("Station not found")
    LOG.info("Station %s updated by user %s", station.id, current_user.id)
    return station_to_response(station)


@router.delete("/{station_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_station(
    station_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    """Delete a station by id."""
    if not repo_delete_station(db, station_id):
        raise NotFoundError("Station not found")
    LOG.info("Station %s deleted by user %s", station_id, current_user.id)
