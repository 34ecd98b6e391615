import platform

from printbridge.config.settings import Settings
from printbridge.printing.base import PrinterProvider
from printbridge.printing.cups_provider import CupsPrinterProvider
from printbridge.printing.sumatra_provider import SumatraPrinterProvider


class PrinterProviderFactory:
    """Creates the print backend for this host."""

    BACKENDS = ("auto", "sumatra", "cups")

    @classmethod
    def create(cls, settings: Settings) -> PrinterProvider:
        backend = settings.print_backend.lower()
        if backend == "auto":
            backend = "sumatra" if platform.system() == "Windows" else "cups"
        if backend == "sumatra":
            return SumatraPrinterProvider(
                sumatra_path=settings.sumatra_path,
                timeout_seconds=settings.print_timeout_seconds,
            )
        if backend == "cups":
            return CupsPrinterProvider(timeout_seconds=settings.print_timeout_seconds)
        raise ValueError(
            f"Unknown print backend '{settings.print_backend}'. Choose from: {list(cls.BACKENDS)}"
        )
