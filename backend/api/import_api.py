"""Import API: location file upload and template download."""
from fastapi import APIRouter, Depends, File, Form, HTTPException, status, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session

from api.rpc import run_bulk_upload
from db import get_db
from schemas.locations import ImportPreviewResponse
from utils.import_parsers import LOCATION_CSV_HEADERS, parse_upload
from utils.import_validators import preview_location_rows

router = APIRouter(tags=["import"])

LOCATIONS_CSV_TEMPLATE = (
    ",".join(LOCATION_CSV_HEADERS)
    + "\n"
    + '"Office Building Downtown","123 Main St, City, State",40.712800,-74.006000,2.40,30.50,0.80\n'
    + '"Warehouse North","456 Industrial Blvd, City, State",40.758900,-73.985100,1.80,25.00,0.60\n'
    + '"Residential Complex","789 Oak Ave, City, State",40.689200,-74.044500,2.10,28.75,0.75\n'
)


async def _read_upload(file: UploadFile) -> bytes:
    """Read full content of uploaded file."""
    content = await file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")
    return content


@router.post("/import/locations")
async def import_locations(
    file: UploadFile = File(...),
    dry_run: bool = Form(default=False),
    db: Session = Depends(get_db),
):
    """Upload CSV or JSON; import valid location rows; report the rest per row.
    With dry_run, only validate and return the rows that would be imported."""
    content = await _read_upload(file)
    try:
        rows = parse_upload(content, file.filename)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    if not rows:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No data rows in file")
    if dry_run:
        valid, errors = preview_location_rows(rows)
        return ImportPreviewResponse(valid_rows=valid, errors=errors, total_rows=len(rows)).model_dump()
    return run_bulk_upload(db, rows).model_dump(exclude_none=True)


@router.get("/import/templates/locations.csv", response_class=Response)
def template_locations_csv():
    """Download locations CSV template."""
    return Response(
        content=LOCATIONS_CSV_TEMPLATE,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="location_template.csv"'},
    )
