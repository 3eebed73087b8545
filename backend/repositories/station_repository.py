"""Station repository: list, get, create, update, delete, summarize."""
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models import utcnow
from models.station import Station
from schemas.stations import CONNECTOR_TYPES, STATION_STATUSES

# Columns that may be written through update_station.
UPDATABLE_FIELDS = (
    "name",
    "latitude",
    "longitude",
    "address",
    "status",
    "power_output",
    "connector_type",
)


def list_stations(
    session: Session,
    *,
    status: Optional[str] = None,
    connector_type: Optional[str] = None,
) -> list[Station]:
    """Return stations in insertion order, optionally filtered by status and/or connector type."""
    query = select(Station)
    if status is not None:
        query = query.where(Station.status == status)
    if connector_type is not None:
        query = query.where(Station.connector_type == connector_type)
    result = session.execute(query.order_by(Station.created_at, Station.id))
    return list(result.scalars().all())


def get_station(session: Session, station_id: str) -> Optional[Station]:
    """Return a station by id or None."""
    return session.get(Station, station_id)


def create_station(
    session: Session,
    *,
    name: str,
    latitude: float,
    longitude: float,
    power_output: float,
    connector_type: str,
    status: str = "active",
    address: Optional[str] = None,
    station_id: Optional[str] = None,
) -> Station:
    """Create a station, commit, and return it. Id is generated if not provided."""
    station = Station(
        name=name,
        latitude=latitude,
        longitude=longitude,
        address=address,
        status=status,
        power_output=power_output,
        connector_type=connector_type,
    )
    if station_id is not None:
        station.id = station_id
    session.add(station)
    session.commit()
    session.refresh(station)
    return station


def update_station(session: Session, station_id: str, changes: dict[str, Any]) -> Optional[Station]:
    """Overwrite the given columns of a station and bump updated_at. Returns updated station or None if not found."""
    station = get_station(session, station_id)
    if station is None:
        return None
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Not updatable: {', '.join(sorted(unknown))}")
    for field, value in changes.items():
        setattr(station, field, value)
    station.updated_at = utcnow()
    session.commit()
    session.refresh(station)
    return station


def delete_station(session: Session, station_id: str) -> bool:
    """Delete a station by id. Returns True if deleted, False if not found."""
    station = get_station(session, station_id)
    if station is None:
        return False
    session.delete(station)
    session.commit()
    return True


def count_stations(session: Session) -> int:
    """Return the number of stations."""
    result = session.execute(select(func.count()).select_from(Station))
    return result.scalar() or 0


def summarize_stations(session: Session, recent_limit: int = 5) -> dict[str, Any]:
    """Aggregate counts by status and connector type, power totals, and newest stations."""
    by_status = {s: 0 for s in STATION_STATUSES}
    for status, n in session.execute(select(Station.status, func.count()).group_by(Station.status)):
        by_status[status] = n
    by_connector = {c: 0 for c in CONNECTOR_TYPES}
    for connector, n in session.execute(
        select(Station.connector_type, func.count()).group_by(Station.connector_type)
    ):
        by_connector[connector] = n
    total, power_sum = session.execute(
        select(func.count(), func.coalesce(func.sum(Station.power_output), 0.0)).select_from(Station)
    ).one()
    recent = session.execute(
        select(Station).order_by(Station.created_at.desc(), Station.id).limit(recent_limit)
    ).scalars().all()
    return {
        "total": total,
        "by_status": by_status,
        "by_connector_type": by_connector,
        "total_power_output": float(power_sum),
        "average_power_output": float(power_sum) / total if total else 0.0,
        "recent": list(recent),
    }
