import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, Response

from brainqr.services.qrcodes import QRCodeService, QRSizeTooSmallError

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["qr"])


@router.get("/qr")
async def render_qr(
    value: str = Query(default=""),
    size: int | None = Query(default=None, ge=16, le=2048),
    download: bool = Query(default=False),
):
    """Render *value* as a PNG QR code; ``download=true`` serves it as an attachment."""
    if not value:
        return JSONResponse(status_code=400, content={"error": "No value to encode"})
    try:
        png = QRCodeService.render_png(value, size)
    except QRSizeTooSmallError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except Exception:
        log.exception("error generating QR code")
        return JSONResponse(
            status_code=500, content={"error": "Failed to generate QR code"}
        )

    headers = {}
    if download:
        headers["Content-Disposition"] = (
            f'attachment; filename="{QRCodeService.export_filename()}"'
        )
    return Response(content=png, media_type="image/png", headers=headers)
