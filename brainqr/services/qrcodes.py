import base64
import io
import time

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_M

from brainqr.config import settings


class QRSizeTooSmallError(ValueError):
    """The requested width has fewer pixels than the code has modules."""

    def __init__(self, size: int, modules: int) -> None:
        super().__init__(
            f"QR size {size}px is too small for this value; use at least {modules}px"
        )
        self.size = size
        self.modules = modules


class QRCodeService:
    """Render filenames as square PNG QR codes (qrcode + Pillow)."""

    # Quiet zone around the code, in modules.
    MARGIN = 2
    DARK = "#000000"
    LIGHT = "#FFFFFF"

    @staticmethod
    def _build(value: str) -> qrcode.QRCode:
        if not value:
            raise ValueError("Cannot render a QR code for an empty value")
        qr = qrcode.QRCode(
            error_correction=ERROR_CORRECT_M,
            border=QRCodeService.MARGIN,
        )
        qr.add_data(value)
        qr.make(fit=True)
        return qr

    @staticmethod
    def module_count(value: str) -> int:
        """Width of the code for *value* in modules, quiet zone included."""
        return QRCodeService._build(value).modules_count + 2 * QRCodeService.MARGIN

    @staticmethod
    def render_image(value: str, size: int | None = None) -> Image.Image:
        """Return a *size* x *size* RGB image encoding *value*.

        Raises ``QRSizeTooSmallError`` when *size* has fewer pixels than the
        code has modules, since a smaller image cannot be scanned.
        """
        qr = QRCodeService._build(value)
        size = size or settings.qr_size
        if size < 1:
            raise ValueError(f"QR size must be positive, got {size}")

        modules = qr.modules_count + 2 * QRCodeService.MARGIN
        if size < modules:
            raise QRSizeTooSmallError(size, modules)

        # Pick the largest whole-pixel module size that fits, then scale up to
        # the exact width with nearest-neighbour so module edges stay sharp.
        qr.box_size = size // modules
        img = qr.make_image(
            fill_color=QRCodeService.DARK, back_color=QRCodeService.LIGHT
        ).get_image()
        img = img.convert("RGB")
        if img.size != (size, size):
            img = img.resize((size, size), Image.Resampling.NEAREST)
        return img

    @staticmethod
    def render_png(value: str, size: int | None = None) -> bytes:
        buffer = io.BytesIO()
        QRCodeService.render_image(value, size).save(buffer, format="PNG")
        return buffer.getvalue()

    @staticmethod
    def data_url(value: str, size: int | None = None) -> str:
        encoded = base64.b64encode(QRCodeService.render_png(value, size)).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    @staticmethod
    def export_filename() -> str:
        """Download name for an exported image, e.g. ``qr-code-1700000000000.png``."""
        return f"qr-code-{int(time.time() * 1000)}.png"

    @staticmethod
    def save(value: str, path: str, size: int | None = None) -> None:
        QRCodeService.render_image(value, size).save(path, format="PNG")
