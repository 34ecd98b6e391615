import platform
import shlex

from printbridge.config.settings import Settings
from printbridge.spool.monitor import SpoolMonitor
from printbridge.spool.sources import (
    WINDOWS_SPOOL_COMMAND,
    BaseSpoolSource,
    CommandSpoolSource,
    LpqSpoolSource,
)


class SpoolSourceFactory:
    """Creates the print queue reader for this host."""

    @classmethod
    def create(cls, settings: Settings) -> BaseSpoolSource:
        timeout = settings.spool_query_timeout_seconds
        if settings.spool_query_command.strip():
            return CommandSpoolSource(shlex.split(settings.spool_query_command), timeout)
        if platform.system() == "Windows":
            return CommandSpoolSource(list(WINDOWS_SPOOL_COMMAND), timeout)
        return LpqSpoolSource(timeout)


def build_spool_monitor(settings: Settings) -> SpoolMonitor:
    """Build a SpoolMonitor with the configured source and queue limits."""
    return SpoolMonitor(
        SpoolSourceFactory.create(settings),
        interval_seconds=settings.spool_poll_interval_ms / 1000,
        queue_size=settings.spool_event_queue_size,
        put_timeout_seconds=settings.spool_event_put_timeout_seconds,
    )
