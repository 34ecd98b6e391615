from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError
from reportlab.lib import pagesizes
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from printbridge.conversion.base import BaseConverter
from printbridge.conversion.exceptions import ConversionError


def resolve_page_size(name: str) -> tuple[float, float]:
    """Look up a reportlab page size ("A4", "letter", ...) in portrait."""
    size = getattr(pagesizes, name.upper(), None)
    if not isinstance(size, tuple) or len(size) != 2:
        raise ValueError(f"Unknown page size '{name}'")
    return pagesizes.portrait(size)


def fit_centered(
    image_size: tuple[int, int], page_size: tuple[float, float]
) -> tuple[float, float, float, float]:
    """Scale an image to fit the page, keeping aspect ratio, centered.

    Returns:
        (x, y, width, height) in page units.
    """
    img_w, img_h = image_size
    page_w, page_h = page_size
    scale = min(page_w / img_w, page_h / img_h)
    width, height = img_w * scale, img_h * scale
    return (page_w - width) / 2, (page_h - height) / 2, width, height


class ImageConverter(BaseConverter):
    """Renders one image onto a single fixed-size PDF page."""

    def __init__(self, page_size: tuple[float, float] = pagesizes.A4) -> None:
        self._page_size = pagesizes.portrait(page_size)

    def convert(self, source: Path, target: Path) -> Path:
        try:
            with Image.open(source) as opened:
                image = ImageOps.exif_transpose(opened)
                if image.mode not in ("RGB", "L"):
                    image = image.convert("RGB")
                self._render(image, target)
        except (UnidentifiedImageError, OSError) as exc:
            raise ConversionError(f"Cannot convert image {source.name}: {exc}") from exc
        return target

    def _render(self, image: Image.Image, target: Path) -> None:
        if image.width > image.height:
            page = pagesizes.landscape(self._page_size)
        else:
            page = self._page_size
        x, y, width, height = fit_centered(image.size, page)
        pdf = canvas.Canvas(str(target), pagesize=page)
        pdf.drawImage(ImageReader(image), x, y, width=width, height=height)
        pdf.showPage()
        pdf.save()
