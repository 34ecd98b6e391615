"""Office document conversion through headless LibreOffice."""

import os
import platform
import shutil
import subprocess
import tempfile
import time
from pathlib import Path

from printbridge.conversion.base import BaseConverter
from printbridge.conversion.exceptions import ConversionError, ConversionTimeoutError
from printbridge.logging.logger import Log

_WINDOWS_SOFFICE_PATHS = (
    Path(r"C:\Program Files\LibreOffice\program\soffice.exe"),
    Path(r"C:\Program Files (x86)\LibreOffice\program\soffice.exe"),
)
_OUTPUT_POLL_SECONDS = 0.1


def resolve_soffice(configured: str = "") -> str:
    """Pick the soffice binary: configured path, PATH lookup, then known installs."""
    if configured:
        return configured
    found = shutil.which("soffice")
    if found:
        return found
    if platform.system() == "Windows":
        for candidate in _WINDOWS_SOFFICE_PATHS:
            if candidate.exists():
                return str(candidate)
    return "soffice"


class OfficeConverter(BaseConverter):
    """Runs `soffice --headless --convert-to pdf` and collects the output."""

    def __init__(
        self,
        *,
        soffice_path: str = "soffice",
        timeout_seconds: float = 120,
        output_wait_seconds: float = 2.0,
    ) -> None:
        self._soffice_path = soffice_path
        self._timeout_seconds = timeout_seconds
        self._output_wait_seconds = output_wait_seconds

    def convert(self, source: Path, target: Path) -> Path:
        output_dir = target.parent
        self._run(source, output_dir)
        generated = output_dir / f"{source.stem}.pdf"
        if not self._wait_for(generated):
            raise ConversionError(f"LibreOffice output not found: {generated.name}")
        os.replace(generated, target)
        Log.debug(f"Converted {source.name} -> {target.name}")
        return target

    def _run(self, source: Path, output_dir: Path) -> None:
        # Concurrent soffice instances must not share a user profile.
        with tempfile.TemporaryDirectory(prefix="soffice-profile-") as profile_dir:
            cmd = [
                self._soffice_path,
                "--headless",
                "--convert-to",
                "pdf",
                "--outdir",
                str(output_dir),
                f"-env:UserInstallation={Path(profile_dir).as_uri()}",
                str(source),
            ]
            try:
                proc = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    timeout=self._timeout_seconds,
                )
            except subprocess.TimeoutExpired as exc:
                raise ConversionTimeoutError(
                    f"LibreOffice timed out after {self._timeout_seconds}s on {source.name}"
                ) from exc
            except OSError as exc:
                raise ConversionError(f"LibreOffice could not be started: {exc}") from exc
        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout or "").strip()
            raise ConversionError(
                f"LibreOffice failed with exit code {proc.returncode}: {detail}"
            )

    def _wait_for(self, path: Path) -> bool:
        deadline = time.monotonic() + self._output_wait_seconds
        while True:
            if path.exists():
                return True
            if time.monotonic() >= deadline:
                return False
            time.sleep(_OUTPUT_POLL_SECONDS)
