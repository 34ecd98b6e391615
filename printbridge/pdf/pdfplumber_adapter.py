from pathlib import Path

import pdfplumber

from printbridge.pdf.base import BasePageCounter
from printbridge.pdf.exceptions import PdfReadError


class PdfPlumberAdapter(BasePageCounter):
    """Counts PDF pages using pdfplumber."""

    def count_pages(self, pdf_path: Path) -> int:
        try:
            with pdfplumber.open(pdf_path) as pdf:
                return len(pdf.pages)
        except Exception as exc:
            raise PdfReadError(f"pdfplumber could not read {pdf_path.name}: {exc}") from exc
