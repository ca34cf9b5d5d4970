"""API tests: location import endpoint (CSV/JSON upload) and template."""
import io

import pytest

pytestmark = pytest.mark.api

HEADER = b"name,address,latitude,longitude,snow_load,wind_speed,seismic_load\n"


def _upload(client, filename, content, media_type="text/csv"):
    data = {"file": (filename, io.BytesIO(content), media_type)}
    return client.post("/api/import/locations", files=data)


def test_import_csv_success(client):
    """Valid CSV rows are all created; errors key is absent."""
    csv = HEADER + b'"Office","123 Main St, City",40.7128,-74.006,2.4,30.5,0.8\nWarehouse,,40.7589,-73.9851,1.8,25,0.6\n'
    r = _upload(client, "locations.csv", csv)
    assert r.status_code == 200
    assert r.json() == {"success": True, "created_count": 2}
    locations = client.get("/api/rpc/getLocations").json()
    by_name = {loc["name"]: loc for loc in locations}
    assert by_name["Office"]["address"] == "123 Main St, City"
    assert by_name["Warehouse"]["address"] is None


def test_import_csv_partial_failure(client):
    """Bad rows are reported with their data row number."""
    csv = HEADER + b"A,,1,2,0,0,0\nB,,north,2,0,0,0\nC,,1,2,0,0,0\n"
    body = _upload(client, "locations.csv", csv).json()
    assert body["created_count"] == 2
    assert body["success"] is True
    assert len(body["errors"]) == 1
    assert body["errors"][0].startswith("Row 2 (B): latitude:")


def test_import_json_success(client):
    """JSON arrays are accepted too."""
    content = b'[{"name":"J","address":null,"latitude":1,"longitude":2,"snow_load":0,"wind_speed":0,"seismic_load":0}]'
    r = _upload(client, "locations.json", content, "application/json")
    assert r.status_code == 200
    assert r.json()["created_count"] == 1


def test_import_missing_headers_400(client):
    """CSV without the required headers is rejected with the missing names."""
    r = _upload(client, "locations.csv", b"name,latitude\nA,1\n")
    assert r.status_code == 400
    assert "Missing required headers" in r.json()["detail"]


def test_import_empty_file_400(client):
    """Empty upload returns 400."""
    r = _upload(client, "empty.csv", b"")
    assert r.status_code == 400


def test_import_header_only_400(client):
    """A CSV with no data rows returns 400."""
    r = _upload(client, "locations.csv", HEADER)
    assert r.status_code == 400


def test_template_locations_csv(client):
    """GET /api/import/templates/locations.csv returns CSV template."""
    r = client.get("/api/import/templates/locations.csv")
    assert r.status_code == 200
    assert "text/csv" in r.headers.get("content-type", "")
    assert r.text.startswith("name,address,latitude,longitude,snow_load,wind_speed,seismic_load")


def test_template_round_trips_through_import(client):
    """The template itself imports cleanly."""
    template = client.get("/api/import/templates/locations.csv").content
    body = _upload(client, "location_template.csv", template).json()
    assert body == {"success": True, "created_count": 3}


def test_import_dry_run_stores_nothing(client):
    """dry_run returns valid rows, row errors and the row total without inserting."""
    csv = HEADER + b"A,,1,2,0,0,0\nB,,north,2,0,0,0\nC,5 Elm St,3,4,1,2,3\n"
    data = {"file": ("locations.csv", io.BytesIO(csv), "text/csv")}
    r = client.post("/api/import/locations", files=data, data={"dry_run": "true"})
    assert r.status_code == 200
    body = r.json()
    assert body["total_rows"] == 3
    assert [row["name"] for row in body["valid_rows"]] == ["A", "C"]
    assert body["valid_rows"][0]["address"] is None
    assert body["valid_rows"][1]["latitude"] == 3.0
    assert len(body["errors"]) == 1
    assert body["errors"][0].startswith("Row 2 (B): latitude:")
    assert client.get("/api/rpc/getLocations").json() == []


def test_import_dry_run_false_imports(client):
    """dry_run=false behaves like a normal import."""
    data = {"file": ("locations.csv", io.BytesIO(HEADER + b"A,,1,2,0,0,0\n"), "text/csv")}
    r = client.post("/api/import/locations", files=data, data={"dry_run": "false"})
    assert r.json() == {"success": True, "created_count": 1}
