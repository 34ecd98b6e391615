from abc import ABC, abstractmethod
from pathlib import Path


class BasePageCounter(ABC):
    """Contract for all PDF page counting adapters."""

    @abstractmethod
    def count_pages(self, pdf_path: Path) -> int:
        """Return the number of pages in a PDF file.

        Raises:
            PdfReadError: if the file is missing or not a readable PDF.
        """
