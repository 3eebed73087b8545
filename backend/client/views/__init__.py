"""Client view models."""
from .map_view import MapView, Marker
from .station_form import StationForm

__all__ = ["MapView", "Marker", "StationForm"]
