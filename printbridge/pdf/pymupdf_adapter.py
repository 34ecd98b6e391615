from pathlib import Path

import pymupdf

from printbridge.pdf.base import BasePageCounter
from printbridge.pdf.exceptions import PdfReadError


class PyMuPdfAdapter(BasePageCounter):
    """Counts PDF pages using PyMuPDF."""

    def count_pages(self, pdf_path: Path) -> int:
        try:
            with pymupdf.open(pdf_path, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return int(doc.page_count)
        except Exception as exc:
            raise PdfReadError(f"pymupdf could not read {pdf_path.name}: {exc}") from exc
