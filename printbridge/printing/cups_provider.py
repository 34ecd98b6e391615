import subprocess
from pathlib import Path

from printbridge.printing.base import PrinterProvider
from printbridge.printing.commands import run_print_command
from printbridge.printing.exceptions import SubmissionError
from printbridge.printing.options import PrintOptions

_SIDES = {
    "simplex": "one-sided",
    "duplex": "two-sided-long-edge",
    "duplexlong": "two-sided-long-edge",
    "duplexshort": "two-sided-short-edge",
}
_SCALING = {
    "fit": "fit-to-page",
    "shrink": "print-scaling=auto",
    "noscale": "print-scaling=none",
}


class CupsPrinterProvider(PrinterProvider):
    """Printing through the CUPS `lp` / `lpstat` command line tools."""

    def __init__(self, timeout_seconds: float = 120) -> None:
        self._timeout_seconds = timeout_seconds

    def list_printers(self) -> list[str]:
        try:
            out = subprocess.check_output(
                ["lpstat", "-a"], text=True, timeout=self._timeout_seconds
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise SubmissionError(f"lpstat failed: {exc}") from exc
        return [line.split()[0] for line in out.splitlines() if line.strip()]

    def build_command(self, pdf_path: Path, options: PrintOptions, title: str) -> list[str]:
        cmd = ["lp"]
        if options.printer:
            cmd += ["-d", options.printer]
        if options.copies:
            cmd += ["-n", str(options.copies)]
        cmd += ["-t", title]
        if options.pages:
            cmd += ["-o", f"page-ranges={options.pages}"]
        if options.paper_size:
            cmd += ["-o", f"media={options.paper_size}"]
        if options.orientation == "landscape":
            cmd += ["-o", "landscape"]
        elif options.orientation == "portrait":
            cmd += ["-o", "orientation-requested=3"]
        if options.side:
            cmd += ["-o", f"sides={_SIDES[options.side]}"]
        if options.scale:
            cmd += ["-o", _SCALING[options.scale]]
        if options.monochrome:
            cmd += ["-o", "print-color-mode=monochrome"]
        cmd.append(str(pdf_path))
        return cmd

    def submit(self, pdf_path: Path, options: PrintOptions, title: str) -> None:
        run_print_command(self.build_command(pdf_path, options, title), self._timeout_seconds)
