import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from brainqr import __version__
from brainqr.config import settings
from brainqr.routes import filenames, qr, series_types

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
log = logging.getLogger("brainqr")

FRONTEND_DIR = Path(__file__).parent.parent / "frontend"

app = FastAPI(
    title="brain-section-qr",
    description="Standardized brain section filenames with scannable QR codes",
    version=__version__,
)

app.include_router(filenames.router)
app.include_router(series_types.router)
app.include_router(qr.router)

# Serve static files (CSS, JS)
app.mount("/static", StaticFiles(directory=FRONTEND_DIR), name="static")


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError):
    """Report malformed input as ``{"error": ...}`` like every other client error."""
    in_body = any(err.get("loc", ("",))[0] == "body" for err in exc.errors())
    message = "Invalid request body" if in_body else "Invalid request parameters"
    log.info("rejected request: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "version": __version__}


@app.get("/")
async def serve_frontend():
    """Serve the frontend HTML."""
    return FileResponse(FRONTEND_DIR / "index.html")
