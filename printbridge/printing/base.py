from abc import ABC, abstractmethod
from pathlib import Path

from printbridge.printing.options import PrintOptions


class PrinterProvider(ABC):
    """Contract for OS print services."""

    @abstractmethod
    def list_printers(self) -> list[str]:
        """Names of the printers the OS knows about."""

    @abstractmethod
    def submit(self, pdf_path: Path, options: PrintOptions, title: str) -> None:
        """Hand one PDF to the spooler.

        Args:
            pdf_path: The file to print.
            options: Submission options; `mono_pages` is ignored here.
            title: Document name shown in the spool queue.

        Raises:
            SubmissionError: if the print service refuses the job.
        """
