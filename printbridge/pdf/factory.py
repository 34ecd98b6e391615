from printbridge.config.settings import Settings
from printbridge.pdf.base import BasePageCounter
from printbridge.pdf.pdfplumber_adapter import PdfPlumberAdapter
from printbridge.pdf.pymupdf_adapter import PyMuPdfAdapter


class PageCounterFactory:
    """Creates the correct page counter based on settings."""

    ADAPTERS: dict[str, type[BasePageCounter]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePageCounter:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
