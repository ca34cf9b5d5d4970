"""Location repository: list, get, create, update, delete, bulk create."""
import logging
from datetime import timedelta
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Any, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.location import COORDINATE_SCALE, Location, utcnow
from utils.import_validators import format_row_error, validate_location_row

LOG = logging.getLogger(__name__)

_COORDINATE_QUANTUM = Decimal(1).scaleb(-COORDINATE_SCALE)
_COORDINATE_FIELDS = ("latitude", "longitude")


def to_coordinate(value: float) -> Decimal:
    """Quantize a float coordinate to the column's fixed scale."""
    return Decimal(str(value)).quantize(_COORDINATE_QUANTUM, rounding=ROUND_HALF_EVEN)


def _new_location(
    *,
    name: str,
    address: str | None,
    latitude: float,
    longitude: float,
    snow_load: float,
    wind_speed: float,
    seismic_load: float,
) -> Location:
    """Build an unsaved Location; created_at and updated_at share one clock reading."""
    now = utcnow()
    return Location(
        name=name,
        address=address,
        latitude=to_coordinate(latitude),
        longitude=to_coordinate(longitude),
        snow_load=snow_load,
        wind_speed=wind_speed,
        seismic_load=seismic_load,
        created_at=now,
        updated_at=now,
    )


def list_locations(session: Session, search: str | None = None) -> list[Location]:
    """Return all locations, newest first. search matches name or address, case-insensitively."""
    query = select(Location)
    if search:
        escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        query = query.where(
            or_(Location.name.ilike(pattern, escape="\\"), Location.address.ilike(pattern, escape="\\"))
        )
    result = session.execute(query.order_by(Location.created_at.desc(), Location.id.desc()))
    return list(result.scalars().all())


def get_location(session: Session, location_id: int) -> Optional[Location]:
    """Return a location by id or None."""
    return session.get(Location, location_id)


def create_location(
    session: Session,
    *,
    name: str,
    address: str | None,
    latitude: float,
    longitude: float,
    snow_load: float,
    wind_speed: float,
    seismic_load: float,
) -> Location:
    """Create a location, commit, and return it."""
    loc = _new_location(
        name=name,
        address=address,
        latitude=latitude,
        longitude=longitude,
        snow_load=snow_load,
        wind_speed=wind_speed,
        seismic_load=seismic_load,
    )
    session.add(loc)
    session.commit()
    session.refresh(loc)
    return loc


def update_location(session: Session, location_id: int, changes: dict[str, Any]) -> Optional[Location]:
    """Apply changes to a location. Returns updated location or None if not found.

    Only keys present in ``changes`` are written; ``updated_at`` is always bumped.
    """
    loc = get_location(session, location_id)
    if loc is None:
        return None
    for field, value in changes.items():
        if field in _COORDINATE_FIELDS:
            value = to_coordinate(value)
        setattr(loc, field, value)
    now = utcnow()
    if now <= loc.updated_at:
        now = loc.updated_at + timedelta(microseconds=1)
    loc.updated_at = now
    session.commit()
    session.refresh(loc)
    return loc


def count_locations(session: Session) -> int:
    """Return the number of locations."""
    result = session.execute(select(func.count()).select_from(Location))
    return result.scalar() or 0


def location_stats(session: Session) -> dict[str, float | int]:
    """Location count and average load values; averages are 0.0 when there are no locations."""
    averages = session.execute(
        select(
            func.avg(Location.snow_load),
            func.avg(Location.wind_speed),
            func.avg(Location.seismic_load),
        )
    ).one()
    snow, wind, seismic = averages
    return {
        "total_locations": count_locations(session),
        "average_snow_load": float(snow or 0.0),
        "average_wind_speed": float(wind or 0.0),
        "average_seismic_load": float(seismic or 0.0),
    }


def delete_location(session: Session, location_id: int) -> bool:
    """Delete a location by id. Returns True if deleted, False if not found."""
    loc = get_location(session, location_id)
    if loc is None:
        return False
    session.delete(loc)
    session.commit()
    return True


def bulk_create_locations(session: Session, rows: list[Any]) -> tuple[int, list[str]]:
    """
    Insert rows in order, each in its own SAVEPOINT. Returns (created_count, errors).

    A row that fails validation or insertion is reported as
    "Row <1-based index> (<name>): <reason>" and skipped; rows before and after it
    are kept. Everything is committed once at the end.
    """
    created = 0
    errors: list[str] = []
    for index, raw_row in enumerate(rows, start=1):
        ok, row, err = validate_location_row(raw_row)
        if not ok or row is None:
            errors.append(format_row_error(index, raw_row, err))
            continue
        savepoint = session.begin_nested()
        try:
            session.add(_new_location(**row.model_dump()))
            session.flush()
        except SQLAlchemyError as e:
            savepoint.rollback()
            LOG.warning("Bulk upload row %d (%s) failed: %s", index, row.name, e)
            errors.append(format_row_error(index, raw_row, str(e)))
            continue
        savepoint.commit()
        created += 1
    session.commit()
    if errors:
        LOG.info("Bulk upload created %d of %d rows; %d failed", created, len(rows), len(errors))
    return created, errors
