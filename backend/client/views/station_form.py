"""Station create/edit form: local validation, submit through the store, live map preview."""
import logging
import math
from typing import Any

from client.router import RouteMatch, Router
from client.stores.stations import StationStore
from client.views.map_view import MapView
from schemas.stations import CONNECTOR_TYPES, STATION_STATUSES

LOG = logging.getLogger(__name__)

PREVIEW_ID = "preview"


def _to_float(value: Any) -> float | None:
    """Parse a form value as a finite float; None if blank or not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _blank_fields() -> dict[str, Any]:
    return {
        "name": "",
        "latitude": "",
        "longitude": "",
        "address": "",
        "status": "active",
        "powerOutput": "",
        "connectorType": "",
    }


class StationForm:
    """Form state for /stations/new (create) and /stations/:id/edit (edit)."""

    def __init__(self, store: StationStore, router: Router, station_id: str | None = None) -> None:
        self.store = store
        self.router = router
        self.station_id = station_id
        self.mode = "edit" if station_id else "create"
        self.fields = _blank_fields()
        self.errors: dict[str, str] = {}
        self.error: str | None = None
        self.submitting = False
        self.preview = MapView()
        self._update_preview()

    @classmethod
    def from_route(cls, store: StationStore, router: Router, match: RouteMatch) -> "StationForm":
        station_id = match.params.get("id") if match.name == "station-edit" else None
        return cls(store, router, station_id)

    def load(self) -> bool:
        """In edit mode, fill fields from the stored station. False if it could not be loaded."""
        if self.mode != "edit":
            return True
        station = self.store.fetch_station(self.station_id)
        if station is None:
            self.error = self.store.error or "Station not found."
            return False
        location = station.get("location") or {}
        self.fields.update(
            name=station.get("name", ""),
            latitude=location.get("latitude", ""),
            longitude=location.get("longitude", ""),
            address=location.get("address") or "",
            status=station.get("status", "active"),
            powerOutput=station.get("powerOutput", ""),
            connectorType=station.get("connectorType", ""),
        )
        self._update_preview()
        return True

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.fields:
            raise KeyError(name)
        self.fields[name] = value
        self.errors.pop(name, None)
        if name in ("latitude", "longitude", "name", "status"):
            self._update_preview()

    def validate(self) -> dict[str, str]:
        """Check every field; returns (and stores) a field -> message map, empty when valid."""
        f = self.fields
        errors: dict[str, str] = {}
        if not str(f["name"] or "").strip():
            errors["name"] = "Name is required"
        lat = _to_float(f["latitude"])
        if lat is None or not -90 <= lat <= 90:
            errors["latitude"] = "Latitude must be a number between -90 and 90"
        lng = _to_float(f["longitude"])
        if lng is None or not -180 <= lng <= 180:
            errors["longitude"] = "Longitude must be a number between -180 and 180"
        power = _to_float(f["powerOutput"])
        if power is None or power <= 0:
            errors["powerOutput"] = "Power output must be a positive number"
        connector = str(f["connectorType"] or "").strip()
        if not connector:
            errors["connectorType"] = "Connector type is required"
        elif connector not in CONNECTOR_TYPES:
            errors["connectorType"] = f"Connector type must be one of {', '.join(CONNECTOR_TYPES)}"
        if f["status"] not in STATION_STATUSES:
            errors["status"] = f"Status must be one of {', '.join(STATION_STATUSES)}"
        self.errors = errors
        return errors

    def to_payload(self) -> dict[str, Any]:
        """Request body for create/update. Call after validate()."""
        f = self.fields
        return {
            "name": str(f["name"]).strip(),
            "location": {
                "latitude": _to_float(f["latitude"]),
                "longitude": _to_float(f["longitude"]),
                "address": str(f["address"] or "").strip() or None,
            },
            "status": f["status"],
            "powerOutput": _to_float(f["powerOutput"]),
            "connectorType": str(f["connectorType"]).strip(),
        }

    def submit(self) -> bool:
        """Validate, then create or update. On success navigate to the station list."""
        if self.submitting:
            return False
        self.error = None
        if self.validate():
            self.error = "Please correct the highlighted fields."
            return False
        self.submitting = True
        try:
            payload = self.to_payload()
            if self.mode == "edit":
                result = self.store.update_station(self.station_id, payload)
            else:
                result = self.store.create_station(payload)
        finally:
            self.submitting = False
        if result is None:
            self.error = self.store.error or "Failed to save station."
            return False
        self.router.push("/stations")
        return True

    def _update_preview(self) -> None:
        lat = _to_float(self.fields["latitude"])
        lng = _to_float(self.fields["longitude"])
        if lat is None or lng is None or not -90 <= lat <= 90 or not -180 <= lng <= 180:
            self.preview.render([])
            return
        self.preview.render([
            {
                "id": self.station_id or PREVIEW_ID,
                "name": str(self.fields["name"] or "").strip() or "New station",
                "location": {"latitude": lat, "longitude": lng},
                "status": self.fields["status"],
                "powerOutput": self.fields["powerOutput"],
                "connectorType": self.fields["connectorType"],
            }
        ])
