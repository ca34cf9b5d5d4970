"""Unit tests: SVG map projection and marker colours."""
from types import SimpleNamespace

import pytest

from utils.map_projection import (
    DEFAULT_BOUNDS,
    HIGH_LOAD_COLOR,
    LOW_LOAD_COLOR,
    MEDIUM_LOAD_COLOR,
    Bounds,
    compute_bounds,
    marker_color,
    marker_position,
    render_svg,
)

pytestmark = pytest.mark.unit


def _point(name="P", lat=0.0, lng=0.0, snow=0.0, wind=0.0, seismic=0.0):
    return SimpleNamespace(
        name=name, latitude=lat, longitude=lng, snow_load=snow, wind_speed=wind, seismic_load=seismic
    )


def test_compute_bounds_empty_uses_default():
    """No points gives the default box."""
    assert compute_bounds([]) == DEFAULT_BOUNDS


def test_compute_bounds():
    """Bounds are the min/max of the coordinates."""
    bounds = compute_bounds([_point(lat=10, lng=-5), _point(lat=-20, lng=30)])
    assert bounds == Bounds(north=10, south=-20, east=30, west=-5)


def test_marker_position_corners():
    """North-west maps to the top-left padding corner, south-east to bottom-right."""
    bounds = Bounds(north=10, south=0, east=20, west=0)
    assert marker_position(10, 0, bounds) == (50, 50)
    assert marker_position(0, 20, bounds) == (750, 450)
    assert marker_position(5, 10, bounds) == pytest.approx((400, 250))


def test_marker_position_single_point():
    """A zero-size box does not divide by zero."""
    bounds = Bounds(north=1, south=1, east=2, west=2)
    assert marker_position(1, 2, bounds) == (50, 50)


def test_marker_position_clamped():
    """Points outside the bounds are clamped to the padded area."""
    bounds = Bounds(north=10, south=0, east=20, west=0)
    assert marker_position(50, -40, bounds) == (50, 50)


@pytest.mark.parametrize("snow,wind,seismic,color", [
    (1, 2, 3, LOW_LOAD_COLOR),
    (5, 4.9, 0, LOW_LOAD_COLOR),
    (5, 5, 0, MEDIUM_LOAD_COLOR),
    (2.4, 30.5, 0.8, MEDIUM_LOAD_COLOR),
    (10, 40, 0, HIGH_LOAD_COLOR),
])
def test_marker_color(snow, wind, seismic, color):
    """Colour follows the total load thresholds 10 and 50."""
    assert marker_color(_point(snow=snow, wind=wind, seismic=seismic)) == color


def test_render_svg_escapes_names_and_draws_markers():
    """One marker group per point; names are XML-escaped."""
    svg = render_svg([_point(name="A & <B>", lat=1, lng=1), _point(name="C", lat=2, lng=2)])
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert svg.count('class="marker"') == 2
    assert "A &amp; &lt;B&gt;" in svg


def test_render_svg_empty():
    """An empty map still renders the grid and default bounds."""
    svg = render_svg([])
    assert 'class="marker"' not in svg
    assert "N: 41.0000°" in svg
