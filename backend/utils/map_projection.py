"""SVG map of locations: bounding-box projection and load-coloured markers."""
from dataclasses import dataclass
from typing import Iterable, Protocol
from xml.sax.saxutils import escape

MAP_WIDTH = 800
MAP_HEIGHT = 500
MAP_PADDING = 50

# Total load thresholds (snow + wind + seismic) for marker colours.
LOW_LOAD_LIMIT = 10.0
MEDIUM_LOAD_LIMIT = 50.0
LOW_LOAD_COLOR = "#10b981"
MEDIUM_LOAD_COLOR = "#f59e0b"
HIGH_LOAD_COLOR = "#ef4444"


class MapPoint(Protocol):
    name: str
    latitude: float
    longitude: float
    snow_load: float
    wind_speed: float
    seismic_load: float


@dataclass(frozen=True)
class Bounds:
    north: float
    south: float
    east: float
    west: float


# Shown when there is nothing to plot.
DEFAULT_BOUNDS = Bounds(north=41.0, south=40.0, east=-73.0, west=-75.0)


def compute_bounds(points: Iterable[MapPoint]) -> Bounds:
    """Smallest box containing every point, or DEFAULT_BOUNDS for no points."""
    pts = list(points)
    if not pts:
        return DEFAULT_BOUNDS
    lats = [float(p.latitude) for p in pts]
    lngs = [float(p.longitude) for p in pts]
    return Bounds(north=max(lats), south=min(lats), east=max(lngs), west=min(lngs))


def marker_position(
    latitude: float,
    longitude: float,
    bounds: Bounds,
    width: int = MAP_WIDTH,
    height: int = MAP_HEIGHT,
    padding: int = MAP_PADDING,
) -> tuple[float, float]:
    """Project a coordinate onto the SVG canvas, clamped to the padded area."""
    lat_range = (bounds.north - bounds.south) or 0.1
    lng_range = (bounds.east - bounds.west) or 0.1
    x = padding + (longitude - bounds.west) / lng_range * (width - 2 * padding)
    y = padding + (bounds.north - latitude) / lat_range * (height - 2 * padding)
    x = max(padding, min(width - padding, x))
    y = max(padding, min(height - padding, y))
    return x, y


def marker_color(point: MapPoint) -> str:
    total = point.snow_load + point.wind_speed + point.seismic_load
    if total < LOW_LOAD_LIMIT:
        return LOW_LOAD_COLOR
    if total < MEDIUM_LOAD_LIMIT:
        return MEDIUM_LOAD_COLOR
    return HIGH_LOAD_COLOR


def render_svg(points: Iterable[MapPoint]) -> str:
    """Render all points as an SVG document with a grid, bound labels and one marker per point."""
    pts = list(points)
    bounds = compute_bounds(pts)
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {MAP_WIDTH} {MAP_HEIGHT}" '
        f'width="{MAP_WIDTH}" height="{MAP_HEIGHT}">',
        "<defs>",
        '<pattern id="grid" width="40" height="40" patternUnits="userSpaceOnUse">',
        '<path d="M 40 0 L 0 0 0 40" fill="none" stroke="#e5e7eb" stroke-width="0.5"/>',
        "</pattern>",
        "</defs>",
        f'<rect width="{MAP_WIDTH}" height="{MAP_HEIGHT}" fill="url(#grid)"/>',
        f'<text x="50" y="30" font-size="12" fill="#6b7280">N: {bounds.north:.4f}°</text>',
        f'<text x="50" y="480" font-size="12" fill="#6b7280">S: {bounds.south:.4f}°</text>',
        f'<text x="750" y="30" font-size="12" fill="#6b7280" text-anchor="end">W: {bounds.west:.4f}°</text>',
        f'<text x="750" y="480" font-size="12" fill="#6b7280" text-anchor="end">E: {bounds.east:.4f}°</text>',
    ]
    for p in pts:
        x, y = marker_position(float(p.latitude), float(p.longitude), bounds)
        parts.append(
            f'<g class="marker"><circle cx="{x:.2f}" cy="{y + 2:.2f}" r="8" fill="rgba(0,0,0,0.2)"/>'
            f'<circle cx="{x:.2f}" cy="{y:.2f}" r="6" fill="{marker_color(p)}" stroke="white" stroke-width="2"/>'
            f'<text x="{x:.2f}" y="{y - 15:.2f}" font-size="10" fill="#374151" text-anchor="middle">'
            f"{escape(p.name)}</text></g>"
        )
    parts.append("</svg>")
    return "\n".join(parts)
