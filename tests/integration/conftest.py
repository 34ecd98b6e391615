import json
from pathlib import Path

import httpx
import pytest

from printbridge.conversion.image_converter import ImageConverter
from printbridge.conversion.normalizer import DocumentNormalizer
from printbridge.conversion.office_converter import OfficeConverter, resolve_soffice
from printbridge.intake.artifact_store import ArtifactStore
from printbridge.notify.notifier import WebhookNotifier
from printbridge.pdf.pdfplumber_adapter import PdfPlumberAdapter
from printbridge.printing.base import PrinterProvider
from printbridge.printing.dispatcher import SplitDispatcher
from printbridge.printing.options import PrintOptions
from printbridge.service.print_service import PrintService
from printbridge.tracking.correlator import Correlator
from printbridge.tracking.store import RegistrationStore


class RecordingProvider(PrinterProvider):
    """Accepts every submission and remembers what it was given."""

    def __init__(self) -> None:
        self.submissions: list[tuple[Path, PrintOptions, str]] = []

    def list_printers(self) -> list[str]:
        return ["Recorder"]

    def submit(self, pdf_path: Path, options: PrintOptions, title: str) -> None:
        assert pdf_path.exists()
        self.submissions.append((pdf_path, options, title))


class WebhookRecorder:
    """httpx MockTransport handler that stores posted JSON bodies."""

    def __init__(self) -> None:
        self.payloads: list[dict[str, object]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.payloads.append(json.loads(request.content))
        return httpx.Response(204)


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    ArtifactStore(path).ensure_dir()
    return path


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def webhooks() -> WebhookRecorder:
    return WebhookRecorder()


@pytest.fixture
def store() -> RegistrationStore:
    return RegistrationStore()


@pytest.fixture
def notifier(webhooks: WebhookRecorder):
    notifier = WebhookNotifier(client=httpx.Client(transport=httpx.MockTransport(webhooks)), max_workers=1)
    yield notifier
    notifier.close()


@pytest.fixture
def correlator(store: RegistrationStore, notifier: WebhookNotifier) -> Correlator:
    return Correlator(store, notifier)


@pytest.fixture
def print_service(
    upload_dir: Path,
    provider: RecordingProvider,
    store: RegistrationStore,
    correlator: Correlator,
) -> PrintService:
    page_counter = PdfPlumberAdapter()
    normalizer = DocumentNormalizer(
        office_converter=OfficeConverter(soffice_path=resolve_soffice(), timeout_seconds=120),
        image_converter=ImageConverter(),
    )
    return PrintService(
        artifact_store=ArtifactStore(upload_dir),
        normalizer=normalizer,
        dispatcher=SplitDispatcher(provider, page_counter, store),
        page_counter=page_counter,
        provider=provider,
        correlator=correlator,
    )
