"""Parse CSV and JSON uploads for location import."""
import csv
import json
from io import StringIO
from typing import Any

# CSV header expected by the import (and written to the template).
LOCATION_CSV_HEADERS = [
    "name",
    "address",
    "latitude",
    "longitude",
    "snow_load",
    "wind_speed",
    "seismic_load",
]


def _normalize_key(k: str) -> str:
    """Strip and return key; empty after strip treated as missing."""
    return k.strip() if k else ""


def _normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    """Strip keys and string values; drop empty keys."""
    out: dict[str, Any] = {}
    for k, v in row.items():
        key = _normalize_key(k)
        if not key:
            continue
        if isinstance(v, str):
            val = v.strip()
        else:
            val = v
        out[key] = val
    return out


def _is_blank(row: dict[str, Any]) -> bool:
    return all(v is None or v == "" for v in row.values())


def _location_normalize(row: dict[str, Any]) -> dict[str, Any]:
    """Empty address means the row has coordinates only."""
    out = dict(row)
    if out.get("address") == "":
        out["address"] = None
    return out


def parse_csv(content: bytes) -> list[dict[str, Any]]:
    """Parse CSV bytes into list of location dicts. Skip empty rows. Raises ValueError on missing headers."""
    text = content.decode("utf-8-sig", errors="replace")
    reader = csv.DictReader(StringIO(text))
    headers = [_normalize_key(h) for h in (reader.fieldnames or [])]
    missing = [h for h in LOCATION_CSV_HEADERS if h not in headers]
    if missing:
        raise ValueError(f"Missing required headers: {', '.join(missing)}")
    rows: list[dict[str, Any]] = []
    for row in reader:
        normalized = _normalize_row(dict(row))
        if not normalized or _is_blank(normalized):
            continue
        rows.append(_location_normalize(normalized))
    return rows


def parse_json(content: bytes) -> list[dict[str, Any]]:
    """Parse JSON bytes (expect list of objects) into list of location dicts."""
    try:
        data = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError("JSON must be an array of objects")
    rows: list[dict[str, Any]] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Row {i + 1} is not an object")
        normalized = _normalize_row(item)
        if not normalized:
            continue
        rows.append(_location_normalize(normalized))
    return rows


def parse_upload(content: bytes, filename: str | None) -> list[dict[str, Any]]:
    """Detect format from filename or content and parse. Raises ValueError if invalid."""
    if filename and filename.lower().endswith(".json"):
        return parse_json(content)
    if filename and filename.lower().endswith(".csv"):
        return parse_csv(content)
    # Detect from content: JSON array starts with [
    stripped = content.lstrip()
    if stripped.startswith(b"["):
        return parse_json(content)
    return parse_csv(content)
