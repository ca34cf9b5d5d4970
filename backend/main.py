"""Environmental load locations: FastAPI backend."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI

from utils.config import CORS_ORIGINS, LOG_LEVEL, PORT

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
from fastapi.middleware.cors import CORSMiddleware

from api.import_api import router as import_router
from api.map import router as map_router
from api.rpc import router as rpc_router
from schemas.health import HealthResponse

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="Environmental Load Locations",
    description="Locations with snow, wind and seismic load values",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes under /api (no static mount at / so /api is never shadowed)
app.include_router(rpc_router, prefix="/api")
app.include_router(import_router, prefix="/api")
app.include_router(map_router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse)
def api_health() -> HealthResponse:
    """Explicit health route so /api/health is always available."""
    return HealthResponse()


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations."""
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    LOG.info("Database schema is up to date")


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "load-locations", "docs": "/docs", "health": "/api/health"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
