"""Map API: SVG rendering of all stored locations."""
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from api.rpc import location_to_response
from db import get_db
from repositories.location_repository import list_locations as repo_list_locations
from utils.map_projection import render_svg

router = APIRouter(tags=["map"])


@router.get("/map.svg", response_class=Response)
def locations_map(db: Session = Depends(get_db)) -> Response:
    """SVG map with one marker per location."""
    locations = [location_to_response(loc) for loc in repo_list_locations(db)]
    return Response(content=render_svg(locations), media_type="image/svg+xml")
