from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from printbridge.conversion.normalizer import NormalizedDocument
from printbridge.logging.logger import Log
from printbridge.pdf.base import BasePageCounter
from printbridge.printing.base import PrinterProvider
from printbridge.printing.exceptions import SubmissionError
from printbridge.printing.options import PrintOptions
from printbridge.printing.page_ranges import format_page_ranges, split_mono_color
from printbridge.tracking.models import JobRegistration
from printbridge.tracking.store import RegistrationStore


@dataclass(frozen=True)
class PrintSubmission:
    """One call to the print service derived from a normalized document."""

    document: NormalizedDocument
    options: PrintOptions
    label: str = "document"


class SplitDispatcher:
    """Turns a normalized document into one or two print submissions.

    With a mono page list the document is printed twice: the listed pages in
    monochrome, the rest in color. Otherwise it is printed once.
    """

    def __init__(
        self,
        provider: PrinterProvider,
        page_counter: BasePageCounter,
        store: RegistrationStore,
    ) -> None:
        self._provider = provider
        self._page_counter = page_counter
        self._store = store

    def plan(self, document: NormalizedDocument, options: PrintOptions) -> list[PrintSubmission]:
        """Decide which submissions a document yields without printing anything."""
        if not options.mono_pages:
            return [PrintSubmission(document=document, options=options)]

        total_pages = self._page_counter.count_pages(document.path)
        if total_pages < 1:
            raise SubmissionError(f"{document.filename} has no pages to print")
        mono, color = split_mono_color(options.mono_pages, total_pages)
        submissions: list[PrintSubmission] = []
        if mono:
            submissions.append(
                PrintSubmission(
                    document=document,
                    options=options.for_partition(format_page_ranges(mono), monochrome=True),
                    label="mono",
                )
            )
        if color:
            submissions.append(
                PrintSubmission(
                    document=document,
                    options=options.for_partition(format_page_ranges(color), monochrome=False),
                    label="color",
                )
            )
        Log.info(
            f"Split {document.filename} ({total_pages} pages): "
            f"mono={format_page_ranges(mono) or '-'} color={format_page_ranges(color) or '-'}"
        )
        return submissions

    def dispatch(
        self,
        document: NormalizedDocument,
        options: PrintOptions,
        registration: JobRegistration | None = None,
    ) -> list[PrintSubmission]:
        """Register (when tracked) and submit every planned submission.

        Raises:
            SubmissionError: if any submission fails.
        """
        submissions = self.plan(document, options)
        if registration is not None:
            registration.expected_submissions = len(submissions)
            self._store.register(registration)
            Log.info(
                f"Registered watch {registration.filename} -> job {registration.external_job_id}"
            )

        if len(submissions) == 1:
            self._submit(submissions[0])
            return submissions

        with ThreadPoolExecutor(
            max_workers=len(submissions), thread_name_prefix="print-split"
        ) as pool:
            futures = [pool.submit(self._submit, submission) for submission in submissions]
        errors = [f.exception() for f in futures if f.exception() is not None]
        if errors:
            raise SubmissionError(
                f"{len(errors)} of {len(submissions)} submissions failed for "
                f"{document.filename}: {errors[0]}"
            ) from errors[0]
        return submissions

    def _submit(self, submission: PrintSubmission) -> None:
        Log.info(
            f"Submitting {submission.document.filename} [{submission.label}] "
            f"to {submission.options.printer or 'default printer'}"
        )
        try:
            self._provider.submit(
                submission.document.path, submission.options, title=submission.document.filename
            )
        except SubmissionError:
            raise
        except Exception as exc:
            raise SubmissionError(f"Print service error: {exc}") from exc
