from pathlib import Path

import pytest

from printbridge.intake.artifact_store import ARTIFACT_ID_LENGTH, ArtifactStore
from printbridge.intake.exceptions import UnsupportedFormatError, UploadError
from printbridge.intake.formats import DocumentFormat, detect_format
from printbridge.intake.models import IncomingFile


class TestDetectFormat:
    @pytest.mark.parametrize("name", ["a.pdf", "A.PDF"])
    def test_pdf(self, name: str) -> None:
        assert detect_format(name) is DocumentFormat.PDF

    @pytest.mark.parametrize("name", ["p.jpg", "p.JPEG", "p.png", "p.tif", "p.webp", "p.gif"])
    def test_images(self, name: str) -> None:
        assert detect_format(name) is DocumentFormat.IMAGE

    @pytest.mark.parametrize("name", ["d.docx", "d.odt", "d.txt", "s.xlsx", "s.ods", "p.pptx"])
    def test_office(self, name: str) -> None:
        assert detect_format(name) is DocumentFormat.OFFICE

    def test_unknown_extension_raises(self) -> None:
        with pytest.raises(UnsupportedFormatError, match=".exe"):
            detect_format("setup.exe")

    def test_missing_extension_raises(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            detect_format("README")

    def test_unsupported_is_upload_error(self) -> None:
        assert issubclass(UnsupportedFormatError, UploadError)


class TestArtifactStore:
    def test_ensure_dir_creates_directory(self, tmp_path: Path) -> None:
        store = ArtifactStore(tmp_path / "uploads")
        store.ensure_dir()
        assert (tmp_path / "uploads").is_dir()

    def test_save_writes_extensionless_file(self, tmp_path: Path) -> None:
        store = ArtifactStore(tmp_path)

        artifact = store.save(IncomingFile(filename="Report.PDF", content=b"%PDF-1.4"))

        assert artifact.storage_path.parent == tmp_path
        assert artifact.storage_path.suffix == ""
        assert artifact.storage_path.read_bytes() == b"%PDF-1.4"
        assert artifact.format is DocumentFormat.PDF
        assert artifact.extension == ".pdf"
        assert len(artifact.id) == ARTIFACT_ID_LENGTH

    def test_save_uses_unique_ids(self, tmp_path: Path) -> None:
        store = ArtifactStore(tmp_path)
        a = store.save(IncomingFile(filename="a.png", content=b"1"))
        b = store.save(IncomingFile(filename="a.png", content=b"2"))
        assert a.id != b.id

    def test_save_rejects_unknown_extension_without_writing(self, tmp_path: Path) -> None:
        store = ArtifactStore(tmp_path)

        with pytest.raises(UnsupportedFormatError):
            store.save(IncomingFile(filename="virus.exe", content=b"MZ"))

        assert list(tmp_path.iterdir()) == []

    def test_discard_ignores_missing_and_none(self, tmp_path: Path) -> None:
        existing = tmp_path / "x"
        existing.write_bytes(b"1")

        ArtifactStore.discard(existing, tmp_path / "missing", None)

        assert not existing.exists()
