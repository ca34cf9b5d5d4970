"""Location procedures, one route per procedure under /rpc.

Queries are GET, mutations are POST with a JSON body.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from models.location import Location
from repositories.location_repository import (
    bulk_create_locations as repo_bulk_create_locations,
    create_location as repo_create_location,
    delete_location as repo_delete_location,
    get_location as repo_get_location,
    list_locations as repo_list_locations,
    location_stats as repo_location_stats,
    update_location as repo_update_location,
)
from schemas.health import HealthResponse
from schemas.locations import (
    BulkUploadRequest,
    BulkUploadResponse,
    DeleteLocationResponse,
    GeocodeRequest,
    GeocodeResponse,
    LocationCreate,
    LocationId,
    LocationResponse,
    LocationStatsResponse,
    LocationUpdate,
)
from utils.geocoding import geocode_address

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/rpc", tags=["rpc"])


def location_to_response(loc: Location) -> LocationResponse:
    """Build LocationResponse from model instance; decimal coordinates become floats."""
    return LocationResponse(
        id=loc.id,
        name=loc.name,
        address=loc.address,
        latitude=float(loc.latitude),
        longitude=float(loc.longitude),
        snow_load=loc.snow_load,
        wind_speed=loc.wind_speed,
        seismic_load=loc.seismic_load,
        created_at=loc.created_at,
        updated_at=loc.updated_at,
    )


def run_bulk_upload(db: Session, rows: list) -> BulkUploadResponse:
    """Shared by the bulk procedure and the file import."""
    try:
        created, errors = repo_bulk_create_locations(db, rows)
    except SQLAlchemyError:
        LOG.exception("Bulk upload of %d locations failed", len(rows))
        raise
    return BulkUploadResponse(
        success=created > 0,
        created_count=created,
        errors=errors or None,
    )


@router.get("/healthcheck", response_model=HealthResponse)
def healthcheck() -> HealthResponse:
    """Health check procedure."""
    return HealthResponse()


@router.post("/createLocation", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
def create_location(body: LocationCreate, db: Session = Depends(get_db)) -> LocationResponse:
    """Create a new location."""
    try:
        loc = repo_create_location(db, **body.model_dump())
    except SQLAlchemyError:
        LOG.exception("Create location %r failed", body.name)
        raise
    return location_to_response(loc)


@router.get("/getLocations", response_model=list[LocationResponse])
def get_locations(
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[LocationResponse]:
    """List locations, most recently created first, optionally filtered by name or address."""
    search = search.strip() if search else None
    try:
        locations = repo_list_locations(db, search=search)
    except SQLAlchemyError:
        LOG.exception("Listing locations failed")
        raise
    return [location_to_response(loc) for loc in locations]


@router.get("/getLocationStats", response_model=LocationStatsResponse)
def get_location_stats(db: Session = Depends(get_db)) -> LocationStatsResponse:
    """Location count and average load values."""
    try:
        stats = repo_location_stats(db)
    except SQLAlchemyError:
        LOG.exception("Location stats failed")
        raise
    return LocationStatsResponse(**stats)


@router.get("/getLocationById", response_model=LocationResponse | None)
def get_location_by_id(id: int = Query(...), db: Session = Depends(get_db)) -> LocationResponse | None:
    """Return a location or null; a missing id is not an error."""
    try:
        loc = repo_get_location(db, id)
    except SQLAlchemyError:
        LOG.exception("Get location %d failed", id)
        raise
    return location_to_response(loc) if loc is not None else None


@router.post("/updateLocation", response_model=LocationResponse)
def update_location(body: LocationUpdate, db: Session = Depends(get_db)) -> LocationResponse:
    """Update the fields present in the body."""
    try:
        loc = repo_update_location(db, body.id, body.changes())
    except SQLAlchemyError:
        LOG.exception("Update location %d failed", body.id)
        raise
    if loc is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return location_to_response(loc)


@router.post("/deleteLocation", response_model=DeleteLocationResponse)
def delete_location(body: LocationId, db: Session = Depends(get_db)) -> DeleteLocationResponse:
    """Delete a location by id; success is false when nothing matched."""
    try:
        deleted = repo_delete_location(db, body.id)
    except SQLAlchemyError:
        LOG.exception("Delete location %d failed", body.id)
        raise
    return DeleteLocationResponse(success=deleted)


@router.post(
    "/bulkUploadLocations",
    response_model=BulkUploadResponse,
    response_model_exclude_none=True,
)
def bulk_upload_locations(body: BulkUploadRequest, db: Session = Depends(get_db)) -> BulkUploadResponse:
    """Insert many locations; bad rows are reported and skipped."""
    return run_bulk_upload(db, body.locations)


@router.post("/geocodeAddress", response_model=GeocodeResponse)
def geocode(body: GeocodeRequest) -> GeocodeResponse:
    """Fill in coordinates for an address (offline stub)."""
    latitude, longitude = geocode_address(body.address)
    return GeocodeResponse(latitude=latitude, longitude=longitude)
