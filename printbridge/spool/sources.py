"""Readers for the OS print queue.

Each source returns the full set of jobs currently queued. Lines that cannot
be parsed are skipped, never fatal.
"""

import json
import re
import subprocess
from abc import ABC, abstractmethod
from typing import Any

from printbridge.logging.logger import Log
from printbridge.spool.exceptions import SpoolQueryError
from printbridge.spool.models import SpoolJob, SpoolStatus

WINDOWS_SPOOL_SCRIPT = (
    "$ErrorActionPreference = 'SilentlyContinue';"
    "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8;"
    "Get-CimInstance Win32_PrintJob | ForEach-Object {"
    " [pscustomobject]@{"
    " id = $_.JobId; document = $_.Document; printer = ($_.Name -split ',')[0];"
    " pagesPrinted = $_.PagesPrinted; status = $_.JobStatus"
    " } | ConvertTo-Json -Compress }"
)
WINDOWS_SPOOL_COMMAND = ["powershell.exe", "-NoProfile", "-NonInteractive", "-Command", WINDOWS_SPOOL_SCRIPT]

# lpq rows: "active  alice  42  report.pdf  1024 bytes"
_LPQ_ROW = re.compile(r"^(?P<rank>\S+)\s+(?P<owner>\S+)\s+(?P<job>\d+)\s+(?P<files>.+?)\s+(?P<size>\d+)\s+bytes\s*$")


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_spool_record(line: str) -> SpoolJob | None:
    """Parse one JSON record `{id, document, printer, pagesPrinted, status}`."""
    line = line.strip()
    if not line:
        return None
    try:
        record = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(record, dict) or record.get("id") in (None, ""):
        return None
    return SpoolJob(
        id=str(record["id"]),
        document=str(record.get("document") or ""),
        printer=str(record.get("printer") or ""),
        status=SpoolStatus.from_os(record.get("status")),
        pages_printed=_optional_int(record.get("pagesPrinted")),
    )


def parse_lpq_row(line: str) -> SpoolJob | None:
    """Parse one job row of `lpq` output; headers and blank lines give None."""
    match = _LPQ_ROW.match(line.strip())
    if match is None:
        return None
    status = SpoolStatus.PRINTING if match["rank"] == "active" else SpoolStatus.SPOOLING
    return SpoolJob(id=match["job"], document=match["files"], status=status)


class BaseSpoolSource(ABC):
    """Contract for print queue readers."""

    @abstractmethod
    def read_jobs(self) -> list[SpoolJob]:
        """Return every job currently in the queue.

        Raises:
            SpoolQueryError: if the queue could not be read at all.
        """


class _CommandSource(BaseSpoolSource):
    def __init__(self, command: list[str], timeout_seconds: float = 10) -> None:
        self._command = command
        self._timeout_seconds = timeout_seconds

    def _run(self) -> str:
        try:
            proc = subprocess.run(
                self._command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            raise SpoolQueryError(f"{self._command[0]} timed out") from exc
        except OSError as exc:
            raise SpoolQueryError(f"{self._command[0]} could not be started: {exc}") from exc
        if proc.returncode != 0:
            raise SpoolQueryError(
                f"{self._command[0]} exited with code {proc.returncode}: {proc.stderr.strip()}"
            )
        return proc.stdout or ""


class CommandSpoolSource(_CommandSource):
    """Runs a command that prints one JSON job record per line."""

    def read_jobs(self) -> list[SpoolJob]:
        jobs: list[SpoolJob] = []
        for line in self._run().splitlines():
            job = parse_spool_record(line)
            if job is None:
                if line.strip():
                    Log.debug(f"Skipping malformed spool line: {line[:200]!r}")
                continue
            jobs.append(job)
        return jobs


class LpqSpoolSource(_CommandSource):
    """Reads the CUPS queue of every printer with `lpq -a`."""

    def __init__(self, timeout_seconds: float = 10) -> None:
        super().__init__(["lpq", "-a"], timeout_seconds)

    def read_jobs(self) -> list[SpoolJob]:
        return [job for job in map(parse_lpq_row, self._run().splitlines()) if job is not None]
