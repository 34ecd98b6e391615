from pathlib import Path
from unittest.mock import MagicMock

import pytest

from printbridge.conversion.exceptions import ConversionError
from printbridge.conversion.normalizer import CONVERTED_SUFFIX, DocumentNormalizer
from printbridge.intake.exceptions import UnsupportedFormatError
from printbridge.intake.formats import DocumentFormat
from printbridge.intake.models import UploadArtifact


def _make_artifact(tmp_path: Path, filename: str, fmt: DocumentFormat) -> UploadArtifact:
    storage = tmp_path / "f00dcafe0001"
    storage.write_bytes(b"payload")
    return UploadArtifact(
        id="f00dcafe0001",
        original_filename=filename,
        format=fmt,
        storage_path=storage,
    )


def _fake_converter() -> MagicMock:
    """A converter that records the source it saw and writes the target."""
    converter = MagicMock()

    def _convert(source: Path, target: Path) -> Path:
        converter.seen_source_exists = source.exists()
        target.write_bytes(b"%PDF")
        return target

    converter.convert.side_effect = _convert
    return converter


def _make_normalizer(
    office: MagicMock | None = None, image: MagicMock | None = None
) -> DocumentNormalizer:
    return DocumentNormalizer(
        office_converter=office or _fake_converter(),
        image_converter=image or _fake_converter(),
    )


class TestPdfPassThrough:
    def test_returns_storage_path(self, tmp_path: Path) -> None:
        artifact = _make_artifact(tmp_path, "doc.pdf", DocumentFormat.PDF)

        result = _make_normalizer().normalize(artifact)

        assert result.path == artifact.storage_path

    def test_is_idempotent_without_side_effects(self, tmp_path: Path) -> None:
        artifact = _make_artifact(tmp_path, "doc.pdf", DocumentFormat.PDF)
        normalizer = _make_normalizer()
        before = sorted(p.name for p in tmp_path.iterdir())

        first = normalizer.normalize(artifact)
        second = normalizer.normalize(artifact)

        assert first == second
        assert sorted(p.name for p in tmp_path.iterdir()) == before
        assert artifact.storage_path.read_bytes() == b"payload"


class TestConversion:
    def test_office_goes_to_office_converter(self, tmp_path: Path) -> None:
        office, image = _fake_converter(), _fake_converter()
        artifact = _make_artifact(tmp_path, "Letter.DOCX", DocumentFormat.OFFICE)

        result = _make_normalizer(office, image).normalize(artifact)

        source, target = office.convert.call_args.args
        assert source.name == "f00dcafe0001.docx"
        assert target == result.path
        assert result.filename == "f00dcafe0001" + CONVERTED_SUFFIX
        image.convert.assert_not_called()

    def test_image_goes_to_image_converter(self, tmp_path: Path) -> None:
        office, image = _fake_converter(), _fake_converter()
        artifact = _make_artifact(tmp_path, "photo.jpg", DocumentFormat.IMAGE)

        _make_normalizer(office, image).normalize(artifact)

        image.convert.assert_called_once()
        office.convert.assert_not_called()

    def test_renamed_intermediate_is_deleted_on_success(self, tmp_path: Path) -> None:
        office = _fake_converter()
        artifact = _make_artifact(tmp_path, "a.odt", DocumentFormat.OFFICE)

        result = _make_normalizer(office=office).normalize(artifact)

        assert office.seen_source_exists
        assert sorted(p.name for p in tmp_path.iterdir()) == [result.filename]

    def test_renamed_intermediate_is_deleted_on_failure(self, tmp_path: Path) -> None:
        office = MagicMock()
        office.convert.side_effect = ConversionError("LibreOffice failed")
        artifact = _make_artifact(tmp_path, "a.odt", DocumentFormat.OFFICE)

        with pytest.raises(ConversionError):
            _make_normalizer(office=office).normalize(artifact)

        assert list(tmp_path.iterdir()) == []

    def test_partial_output_is_deleted_on_failure(self, tmp_path: Path) -> None:
        image = MagicMock()

        def _half_written(source: Path, target: Path) -> Path:
            target.write_bytes(b"%PDF-trunc")
            raise ConversionError("boom")

        image.convert.side_effect = _half_written
        artifact = _make_artifact(tmp_path, "a.png", DocumentFormat.IMAGE)

        with pytest.raises(ConversionError):
            _make_normalizer(image=image).normalize(artifact)

        assert list(tmp_path.iterdir()) == []


class TestUnsupported:
    def test_format_without_converter_raises(self, tmp_path: Path) -> None:
        artifact = _make_artifact(tmp_path, "a.png", DocumentFormat.IMAGE)
        normalizer = _make_normalizer()
        normalizer._converters.pop(DocumentFormat.IMAGE)

        with pytest.raises(UnsupportedFormatError):
            normalizer.normalize(artifact)
