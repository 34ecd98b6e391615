import argparse
import json
import sys
from pathlib import Path

from printbridge.config.settings import Settings
from printbridge.intake.models import IncomingFile
from printbridge.logging.logger import Log
from printbridge.notify.notifier import WebhookNotifier
from printbridge.printing.options import PrintOptions
from printbridge.service.print_service import build_print_service
from printbridge.spool.factory import build_spool_monitor
from printbridge.tracking.correlator import Correlator
from printbridge.tracking.store import RegistrationStore
from printbridge.worker.job_tracker import JobTracker


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="printbridge",
        description="Normalize documents to PDF, print them and report spool progress to a webhook.",
    )
    parser.add_argument("files", nargs="*", type=Path, help="documents to print")
    parser.add_argument("--list-printers", action="store_true", help="list printers and exit")
    parser.add_argument("--count-pages", action="store_true", help="print page counts and exit")
    parser.add_argument("--printer")
    parser.add_argument("--paper-size", dest="paperSize")
    parser.add_argument("--copies")
    parser.add_argument("--landscape", action="store_true")
    parser.add_argument("--portrait", action="store_true")
    parser.add_argument("--scale", choices=["noscale", "shrink", "fit"])
    parser.add_argument("--side", choices=["simplex", "duplex", "duplexshort", "duplexlong"])
    parser.add_argument("--pages", help="explicit page filter, e.g. 1-3,5")
    parser.add_argument("--monochrome", action="store_true")
    parser.add_argument("--mono-pages", dest="mono_pages", help="pages to print in mono; the rest in color")
    parser.add_argument("--job-detail-id", dest="job_detail_id", help="caller job id reported to the webhook")
    parser.add_argument("--webhook-url", dest="webhook_url")
    parser.add_argument(
        "--wait-seconds",
        type=float,
        default=300.0,
        help="how long to keep tracking spool jobs after submission",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build dependencies -> run one request."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    store = RegistrationStore()
    notifier = WebhookNotifier(
        timeout_seconds=settings.webhook_timeout_seconds,
        max_workers=settings.webhook_max_workers,
    )
    correlator = Correlator(store, notifier)
    service = build_print_service(settings, store, correlator)

    try:
        if args.list_printers:
            print(json.dumps({"success": True, "printers": service.list_printers()}))
            return 0

        incoming = [IncomingFile(filename=path.name, content=path.read_bytes()) for path in args.files]
        if not incoming:
            print(json.dumps({"success": False, "message": "No files uploaded."}))
            return 2

        if args.count_pages:
            counts = {f.filename: service.count_pages(f) for f in incoming}
            print(json.dumps({"success": True, "pages": counts}))
            return 0

        tracker = JobTracker(build_spool_monitor(settings), correlator, store)
        tracker.start()
        try:
            batch = service.print_batch(
                incoming,
                PrintOptions.from_params(vars(args)),
                external_job_id=args.job_detail_id,
                webhook_url=args.webhook_url,
            )
            print(json.dumps(batch.to_dict()))
            if not tracker.wait_idle(args.wait_seconds):
                Log.warning(f"Stopped tracking with {len(store)} job(s) still in the spooler")
        finally:
            tracker.stop()
        return 0 if batch.success else 1
    except KeyboardInterrupt:
        Log.info("Interrupted, shutting down")
        return 130
    finally:
        notifier.close()


if __name__ == "__main__":
    sys.exit(main())
