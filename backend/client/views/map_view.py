"""Map view model: one colored marker per station, viewport fitted to all markers."""
import copy
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from client.reactive import Observable

LOG = logging.getLogger(__name__)

STATUS_COLORS = {
    "active": "#16a34a",
    "inactive": "#6b7280",
    "maintenance": "#f59e0b",
}
DEFAULT_MARKER_COLOR = "#3b82f6"
EMPTY_PLACEHOLDER = "No charging stations to display"

# Whole-world view used before any marker exists.
DEFAULT_CENTER = (20.0, 0.0)
DEFAULT_ZOOM = 2


@dataclass(frozen=True)
class Marker:
    station_id: str
    latitude: float
    longitude: float
    color: str
    title: str
    popup: str


Bounds = tuple[tuple[float, float], tuple[float, float]]


def marker_for(station: dict) -> Marker:
    """Build the marker for one station dict as returned by the API."""
    location = station.get("location") or {}
    status = station.get("status", "")
    details = [f"{station.get('powerOutput', '?')} kW", station.get("connectorType", "?"), status]
    if location.get("address"):
        details.append(location["address"])
    return Marker(
        station_id=str(station.get("id", "")),
        latitude=float(location["latitude"]),
        longitude=float(location["longitude"]),
        color=STATUS_COLORS.get(status, DEFAULT_MARKER_COLOR),
        title=station.get("name", ""),
        popup=" | ".join(str(d) for d in details),
    )


def fit_bounds(markers: Iterable[Marker]) -> Bounds | None:
    """South-west and north-east corners enclosing every marker, or None when there are none."""
    markers = list(markers)
    if not markers:
        return None
    lats = [m.latitude for m in markers]
    lngs = [m.longitude for m in markers]
    return (min(lats), min(lngs)), (max(lats), max(lngs))


class MapView:
    """
    Renders a station sequence as markers. Any change to the sequence (deep equality)
    tears down every marker and rebuilds; an unchanged sequence is a no-op.
    Selecting a marker's detail link emits the station to `on_select` listeners.
    """

    def __init__(self) -> None:
        self.markers: list[Marker] = []
        self.bounds: Bounds | None = None
        self.render_count = 0
        self._stations: list[dict] | None = None
        self._select_listeners: list[Callable[[dict], None]] = []

    @property
    def is_empty(self) -> bool:
        return not self.markers

    @property
    def placeholder(self) -> str | None:
        """Text shown instead of the marker layer when there is nothing to draw."""
        return EMPTY_PLACEHOLDER if self.is_empty else None

    @property
    def center(self) -> tuple[float, float]:
        if self.bounds is None:
            return DEFAULT_CENTER
        (south, west), (north, east) = self.bounds
        return (south + north) / 2, (west + east) / 2

    def render(self, stations: Iterable[dict]) -> bool:
        """Rebuild markers if stations differ from the last render. Returns True when rebuilt."""
        stations = list(stations)
        if self._stations is not None and stations == self._stations:
            return False
        self._stations = copy.deepcopy(stations)
        self.markers = []
        for station in stations:
            try:
                self.markers.append(marker_for(station))
            except (KeyError, TypeError, ValueError):
                LOG.warning("Skipping station without usable location: %s", station.get("id"))
        self.bounds = fit_bounds(self.markers)
        self.render_count += 1
        return True

    def bind(self, store: Observable) -> Callable[[], None]:
        """Render from a store's `stations` now and on every change. Returns the unsubscribe function."""
        self.render(getattr(store, "stations"))
        return store.subscribe(lambda s: self.render(s.stations))

    def on_select(self, listener: Callable[[dict], None]) -> None:
        self._select_listeners.append(listener)

    def select(self, station_id: str) -> dict:
        """Emit the selection event for a rendered station."""
        for station in self._stations or []:
            if str(station.get("id")) == station_id:
                for listener in list(self._select_listeners):
                    listener(station)
                return station
        raise KeyError(station_id)

    def to_geojson(self) -> dict[str, Any]:
        """FeatureCollection of the current markers for the mapping library."""
        return {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "id": m.station_id,
                    "geometry": {"type": "Point", "coordinates": [m.longitude, m.latitude]},
                    "properties": {"title": m.title, "popup": m.popup, "color": m.color},
                }
                for m in self.markers
            ],
        }
