from pathlib import Path

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def write_pdf(path: Path, pages: int) -> Path:
    """Write a PDF with `pages` numbered pages."""
    c = canvas.Canvas(str(path), pagesize=letter)
    for number in range(1, pages + 1):
        c.drawString(72, 720, f"Page {number}")
        c.showPage()
    c.save()
    return path


@pytest.fixture()
def sample_pdf_bytes(tmp_path: Path) -> bytes:
    """A minimal single-page PDF."""
    return write_pdf(tmp_path / "sample.pdf", pages=1).read_bytes()


@pytest.fixture()
def five_page_pdf(tmp_path: Path) -> Path:
    return write_pdf(tmp_path / "five.pdf", pages=5)


@pytest.fixture()
def landscape_png(tmp_path: Path) -> Path:
    """A 400x200 PNG: wider than tall."""
    path = tmp_path / "wide.png"
    Image.new("RGB", (400, 200), color=(200, 30, 30)).save(path)
    return path


@pytest.fixture()
def portrait_png(tmp_path: Path) -> Path:
    """A 200x400 PNG with an alpha channel."""
    path = tmp_path / "tall.png"
    Image.new("RGBA", (200, 400), color=(10, 120, 200, 128)).save(path)
    return path
