"""Validate location rows for bulk upload and file import."""
from typing import Any

from pydantic import ValidationError

from schemas.locations import CsvLocation


def format_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into "field: message; field: message"."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "row"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def row_label(row: Any) -> str:
    """Name used to identify a row in error messages, even when the row is invalid."""
    if not isinstance(row, dict):
        return ""
    name = row.get("name")
    if name is None:
        return ""
    return str(name).strip()


def validate_location_row(row: Any) -> tuple[bool, CsvLocation | None, str]:
    """
    Validate a location row. Returns (ok, location, error_message).
    If ok is True, location carries the same constraints as a single create.
    """
    if not isinstance(row, dict):
        return False, None, "row must be an object"
    try:
        return True, CsvLocation.model_validate(row), ""
    except ValidationError as e:
        return False, None, format_validation_error(e)


def format_row_error(index: int, row: Any, reason: str) -> str:
    """"Row <1-based index> (<name>): <reason>"."""
    return f"Row {index} ({row_label(row)}): {reason}"


def preview_location_rows(rows: list[Any]) -> tuple[list[CsvLocation], list[str]]:
    """Validate rows without storing them. Returns (valid_rows, errors) in bulk-upload error format."""
    valid: list[CsvLocation] = []
    errors: list[str] = []
    for index, raw_row in enumerate(rows, start=1):
        ok, row, err = validate_location_row(raw_row)
        if not ok or row is None:
            errors.append(format_row_error(index, raw_row, err))
            continue
        valid.append(row)
    return valid, errors
