# Schemas package
from .health import HealthResponse
from .locations import (
    BulkUploadRequest,
    BulkUploadResponse,
    CsvLocation,
    DeleteLocationResponse,
    LocationCreate,
    LocationResponse,
    LocationUpdate,
)

__all__ = [
    "BulkUploadRequest",
    "BulkUploadResponse",
    "CsvLocation",
    "DeleteLocationResponse",
    "HealthResponse",
    "LocationCreate",
    "LocationResponse",
    "LocationUpdate",
]
