from pathlib import Path

from printbridge.printing.base import PrinterProvider
from printbridge.printing.commands import run_print_command
from printbridge.printing.exceptions import SubmissionError
from printbridge.printing.options import PrintOptions


def sumatra_print_settings(options: PrintOptions) -> str:
    """Render options as a SumatraPDF `-print-settings` value."""
    settings: list[str] = []
    if options.pages:
        settings.append(options.pages)
    settings.append("monochrome" if options.monochrome else "color")
    if options.orientation:
        settings.append(options.orientation)
    if options.side:
        settings.append(options.side)
    if options.scale:
        settings.append(options.scale)
    if options.paper_size:
        settings.append(f"paper={options.paper_size}")
    if options.copies:
        settings.append(f"{options.copies}x")
    return ",".join(settings)


class SumatraPrinterProvider(PrinterProvider):
    """Windows printing through the SumatraPDF command line."""

    def __init__(self, sumatra_path: str = "SumatraPDF.exe", timeout_seconds: float = 120) -> None:
        self._sumatra_path = sumatra_path
        self._timeout_seconds = timeout_seconds

    def list_printers(self) -> list[str]:
        import win32print

        flags = win32print.PRINTER_ENUM_LOCAL | win32print.PRINTER_ENUM_CONNECTIONS
        try:
            printers = win32print.EnumPrinters(flags)
        except Exception as exc:
            raise SubmissionError(f"Cannot enumerate printers: {exc}") from exc
        return [p[2] for p in printers]

    def build_command(self, pdf_path: Path, options: PrintOptions) -> list[str]:
        cmd = [self._sumatra_path]
        if options.printer:
            cmd += ["-print-to", options.printer]
        else:
            cmd.append("-print-to-default")
        cmd += ["-silent", "-print-settings", sumatra_print_settings(options), str(pdf_path)]
        return cmd

    def submit(self, pdf_path: Path, options: PrintOptions, title: str) -> None:
        """Print through Sumatra. The spool job is named after the file, so `title` is unused."""
        run_print_command(self.build_command(pdf_path, options), self._timeout_seconds)
