from pathlib import Path

import pdfplumber
import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4, letter

from printbridge.conversion.exceptions import ConversionError
from printbridge.conversion.image_converter import (
    ImageConverter,
    fit_centered,
    resolve_page_size,
)


def _page_size(pdf_path: Path) -> tuple[float, float]:
    with pdfplumber.open(pdf_path) as pdf:
        assert len(pdf.pages) == 1
        page = pdf.pages[0]
        return float(page.width), float(page.height)


class TestImageConverter:
    def test_wide_image_gives_landscape_page(self, landscape_png: Path, tmp_path: Path) -> None:
        target = tmp_path / "out.pdf"

        ImageConverter().convert(landscape_png, target)

        width, height = _page_size(target)
        assert width > height
        assert (width, height) == pytest.approx((A4[1], A4[0]), abs=1)

    def test_tall_image_with_alpha_gives_portrait_page(
        self, portrait_png: Path, tmp_path: Path
    ) -> None:
        target = tmp_path / "out.pdf"

        ImageConverter().convert(portrait_png, target)

        width, height = _page_size(target)
        assert (width, height) == pytest.approx(A4, abs=1)

    def test_applies_exif_orientation(self, tmp_path: Path) -> None:
        source = tmp_path / "rotated.jpg"
        exif = Image.Exif()
        exif[0x0112] = 6  # rotate 90 CW on display
        Image.new("RGB", (400, 200), color=(0, 0, 0)).save(source, exif=exif)
        target = tmp_path / "out.pdf"

        ImageConverter().convert(source, target)

        width, height = _page_size(target)
        assert height > width

    def test_custom_page_size(self, portrait_png: Path, tmp_path: Path) -> None:
        target = tmp_path / "out.pdf"

        ImageConverter(page_size=letter).convert(portrait_png, target)

        assert _page_size(target) == pytest.approx(letter, abs=1)

    def test_undecodable_image_raises(self, tmp_path: Path) -> None:
        source = tmp_path / "broken.png"
        source.write_bytes(b"not an image")

        with pytest.raises(ConversionError, match="broken.png"):
            ImageConverter().convert(source, tmp_path / "out.pdf")


class TestFitCentered:
    def test_wide_image_fills_width(self) -> None:
        x, y, w, h = fit_centered((400, 200), (800, 800))
        assert (x, y, w, h) == (0, 200, 800, 400)

    def test_small_image_is_scaled_up_and_centered(self) -> None:
        x, y, w, h = fit_centered((10, 20), (100, 100))
        assert (w, h) == (50, 100)
        assert (x, y) == (25, 0)


class TestResolvePageSize:
    def test_known_size_is_case_insensitive(self) -> None:
        assert resolve_page_size("a4") == A4

    def test_unknown_size_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown page size"):
            resolve_page_size("napkin")
