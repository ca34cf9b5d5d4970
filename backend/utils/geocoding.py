"""Geocoding stand-in: derives repeatable coordinates from an address string."""

# Base point the stub scatters addresses around (New York City).
BASE_LATITUDE = 40.7128
BASE_LONGITUDE = -74.0060


def address_hash(address: str) -> int:
    """32-bit signed rolling hash (h * 31 + char), wrapping like a Java/JS int."""
    h = 0
    for ch in address:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def geocode_address(address: str) -> tuple[float, float]:
    """
    Return (latitude, longitude) for an address without calling any service.

    Args:
        address: Free-form address text.

    Returns:
        Coordinates within 0.1 degree of the base point, rounded to 6 places.
    """
    h = address_hash(address)
    # Remainder keeps the sign of the hash.
    offset = (abs(h) % 1000) * (-1 if h < 0 else 1) / 10000
    return round(BASE_LATITUDE + offset, 6), round(BASE_LONGITUDE + offset, 6)
