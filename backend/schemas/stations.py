"""Pydantic schemas for station API."""
from datetime import datetime
from typing import Annotated, Literal, get_args

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

StationStatus = Literal["active", "inactive", "maintenance"]
ConnectorType = Literal["Type1", "Type2", "CCS", "CHAdeMO", "Tesla"]

# Single source of truth for allowed values (server validation, dashboard keys, client form).
STATION_STATUSES: tuple[str, ...] = get_args(StationStatus)
CONNECTOR_TYPES: tuple[str, ...] = get_args(ConnectorType)


class StationLocation(BaseModel):
    """Geocoordinate plus optional street address. Accepts lat/lng as input aliases."""

    latitude: float = Field(ge=-90, le=90, strict=True, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(ge=-180, le=180, strict=True, validation_alias=AliasChoices("longitude", "lng"))
    address: str | None = None

    model_config = ConfigDict(allow_inf_nan=False)

    @field_validator("address")
    @classmethod
    def blank_address_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Name is required")
    if len(v) > 255:
        raise ValueError("Name must be at most 255 characters")
    return v


StationName = Annotated[str, AfterValidator(_clean_name)]
# Numbers only; booleans and numeric strings are rejected.
PowerOutput = Annotated[float, Field(gt=0, allow_inf_nan=False, strict=True)]


class StationCreate(BaseModel):
    """Payload for creating a station."""

    name: StationName
    location: StationLocation
    status: StationStatus = "active"
    powerOutput: PowerOutput
    connectorType: ConnectorType


class StationUpdate(BaseModel):
    """
    Payload for updating a station. Every provided field replaces the stored value;
    omitted fields are kept. A provided location is replaced as a whole.
    """

    name: StationName | None = None
    location: StationLocation | None = None
    status: StationStatus | None = None
    powerOutput: PowerOutput | None = None
    connectorType: ConnectorType | None = None

    @model_validator(mode="after")
    def no_null_for_provided_fields(self) -> "StationUpdate":
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def to_columns(self) -> dict:
        """Map provided fields to station table columns."""
        columns: dict = {}
        if "name" in self.model_fields_set:
            columns["name"] = self.name
        if "location" in self.model_fields_set:
            columns["latitude"] = self.location.latitude
            columns["longitude"] = self.location.longitude
            columns["address"] = self.location.address
        if "status" in self.model_fields_set:
            columns["status"] = self.status
        if "powerOutput" in self.model_fields_set:
            columns["power_output"] = self.powerOutput
        if "connectorType" in self.model_fields_set:
            columns["connector_type"] = self.connectorType
        return columns


class StationResponse(BaseModel):
    """Station in API responses."""

    id: str
    name: str
    location: StationLocation
    status: str
    powerOutput: float
    connectorType: str
    createdAt: datetime
    updatedAt: datetime
