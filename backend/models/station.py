"""Station model for DB persistence."""
import uuid
from datetime import datetime

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from models import Base, UTCDateTime, utcnow


class Station(Base):
    """Station table: id, name, coordinates, address, status, power_output (kW), connector_type, timestamps."""

    __tablename__ = "station"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    address: Mapped[str | None] = mapped_column(String(512), nullable=True)
    # One of schemas.stations.STATION_STATUSES.
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active", index=True)
    power_output: Mapped[float] = mapped_column(Float, nullable=False)
    # One of schemas.stations.CONNECTOR_TYPES.
    connector_type: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
