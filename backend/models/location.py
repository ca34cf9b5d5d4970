"""Location model for DB persistence."""
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Float, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models import Base

# Coordinates are stored as NUMERIC(10, 7).
COORDINATE_PRECISION = 10
COORDINATE_SCALE = 7


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite does not keep tzinfo)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Location(Base):
    """Location table: id, name, address, coordinates, load values, timestamps."""

    __tablename__ = "location"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(Text(), nullable=True)
    latitude: Mapped[Decimal] = mapped_column(
        Numeric(COORDINATE_PRECISION, COORDINATE_SCALE), nullable=False
    )
    longitude: Mapped[Decimal] = mapped_column(
        Numeric(COORDINATE_PRECISION, COORDINATE_SCALE), nullable=False
    )
    snow_load: Mapped[float] = mapped_column(Float(), nullable=False)
    wind_speed: Mapped[float] = mapped_column(Float(), nullable=False)
    seismic_load: Mapped[float] = mapped_column(Float(), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(), nullable=False, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(), nullable=False, default=utcnow)
