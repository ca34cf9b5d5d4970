"""Pydantic schemas for location API."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

# Fields that may be sent as explicit null in an update.
NULLABLE_UPDATE_FIELDS = frozenset({"address"})


def _blank_to_none(value: Any) -> Any:
    """Empty or whitespace-only address means "no address"."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class LocationFields(BaseModel):
    """Field constraints shared by create and bulk rows."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = None
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    snow_load: float = Field(..., ge=0, allow_inf_nan=False)
    wind_speed: float = Field(..., ge=0, allow_inf_nan=False)
    seismic_load: float = Field(..., ge=0, allow_inf_nan=False)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("address", mode="before")
    @classmethod
    def _normalize_address(cls, v: Any) -> Any:
        return _blank_to_none(v)


class LocationCreate(LocationFields):
    """Payload for creating a location."""


class CsvLocation(LocationFields):
    """One row of a bulk upload, validated independently of its siblings."""


class LocationUpdate(BaseModel):
    """Payload for updating a location. Only fields present in the request change.

    Presence is tracked through ``model_fields_set`` so an omitted ``address``
    (leave unchanged) and ``"address": null`` (clear it) are different requests.
    """

    id: int
    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    longitude: float | None = Field(default=None, ge=-180, le=180, allow_inf_nan=False)
    snow_load: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    wind_speed: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    seismic_load: float | None = Field(default=None, ge=0, allow_inf_nan=False)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("address", mode="before")
    @classmethod
    def _normalize_address(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @model_validator(mode="after")
    def _reject_null_for_required(self) -> "LocationUpdate":
        for field in self.model_fields_set - NULLABLE_UPDATE_FIELDS - {"id"}:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly provided in the request, excluding id."""
        return self.model_dump(include=self.model_fields_set - {"id"})


class LocationId(BaseModel):
    """Payload identifying a single location."""

    id: int


class LocationResponse(BaseModel):
    """Location in API responses; coordinates as plain numbers."""

    id: int
    name: str
    address: str | None
    latitude: float
    longitude: float
    snow_load: float
    wind_speed: float
    seismic_load: float
    created_at: datetime
    updated_at: datetime


class DeleteLocationResponse(BaseModel):
    """Result of a delete; false when nothing matched."""

    success: bool


class BulkUploadRequest(BaseModel):
    """Payload for bulk upload. Rows stay raw here so one bad row cannot reject the batch."""

    locations: list[Any] = Field(..., min_length=1)


class BulkUploadResponse(BaseModel):
    """Outcome of a bulk upload. ``errors`` is left out when every row succeeded."""

    success: bool
    created_count: int
    errors: list[str] | None = None


class GeocodeRequest(BaseModel):
    """Payload for the geocoding stub."""

    address: str = Field(..., min_length=1)


class GeocodeResponse(BaseModel):
    latitude: float
    longitude: float


class LocationStatsResponse(BaseModel):
    """Summary figures for the dashboard."""

    total_locations: int
    average_snow_load: float
    average_wind_speed: float
    average_seismic_load: float


class ImportPreviewResponse(BaseModel):
    """Result of validating an upload without storing anything."""

    valid_rows: list[CsvLocation]
    errors: list[str]
    total_rows: int
