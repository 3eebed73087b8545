"""Station list/detail store synchronized with the API."""
import logging
from collections.abc import Callable
from typing import Any

from client.api import ApiClient, ApiError
from client.reactive import Observable

LOG = logging.getLogger(__name__)


class StationStore(Observable):
    """Caches the station list and the station being viewed. Failures set `error` instead of raising."""

    def __init__(self, api: ApiClient) -> None:
        super().__init__()
        self.api = api
        self.stations: list[dict] = []
        self.current: dict | None = None
        self.loading = False
        self.error: str | None = None

    def _call(self, fallback: str, fn: Callable[..., Any], *args: Any) -> tuple[bool, Any]:
        """Run one API call with loading/error bookkeeping. Returns (ok, result)."""
        self.loading = True
        self.error = None
        try:
            return True, fn(*args)
        except ApiError as e:
            self.error = e.message or fallback
            return False, None
        finally:
            self.loading = False

    def fetch_stations(self, status: str | None = None, connector_type: str | None = None) -> list[dict]:
        ok, stations = self._call("Failed to load stations.", self.api.list_stations, status, connector_type)
        if ok:
            self.stations = stations
        self.notify()
        return self.stations if ok else []

    def fetch_station(self, station_id: str) -> dict | None:
        ok, station = self._call("Failed to load station.", self.api.get_station, station_id)
        self.current = station if ok else None
        self.notify()
        return self.current

    def create_station(self, data: dict) -> dict | None:
        ok, station = self._call("Failed to create station.", self.api.create_station, data)
        if ok:
            self.stations = [*self.stations, station]
            LOG.info("Created station %s", station["id"])
        self.notify()
        return station

    def update_station(self, station_id: str, data: dict) -> dict | None:
        ok, station = self._call("Failed to update station.", self.api.update_station, station_id, data)
        if ok:
            self.stations = [station if s["id"] == station_id else s for s in self.stations]
            if self.current and self.current.get("id") == station_id:
                self.current = station
        self.notify()
        return station

    def delete_station(self, station_id: str) -> bool:
        ok, _ = self._call("Failed to delete station.", self.api.delete_station, station_id)
        if ok:
            self.stations = [s for s in self.stations if s["id"] != station_id]
            if self.current and self.current.get("id") == station_id:
                self.current = None
        self.notify()
        return ok
