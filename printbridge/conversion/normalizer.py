"""Turns any accepted upload into a single printable PDF."""

from dataclasses import dataclass
from pathlib import Path

from printbridge.conversion.base import BaseConverter
from printbridge.conversion.exceptions import ConversionError
from printbridge.intake.exceptions import UnsupportedFormatError
from printbridge.intake.formats import DocumentFormat
from printbridge.intake.models import UploadArtifact
from printbridge.logging.logger import Log

CONVERTED_SUFFIX = ".converted.pdf"


@dataclass(frozen=True)
class NormalizedDocument:
    """A PDF ready to be printed. The file is temporary."""

    path: Path

    @property
    def filename(self) -> str:
        return self.path.name


class DocumentNormalizer:
    """Routes an artifact to the converter for its format.

    PDFs pass through untouched. Anything else is renamed to carry its real
    extension, converted next to the upload, and the renamed file is removed
    whatever the outcome.
    """

    def __init__(
        self,
        *,
        office_converter: BaseConverter,
        image_converter: BaseConverter,
    ) -> None:
        self._converters: dict[DocumentFormat, BaseConverter] = {
            DocumentFormat.OFFICE: office_converter,
            DocumentFormat.IMAGE: image_converter,
        }

    def normalize(self, artifact: UploadArtifact) -> NormalizedDocument:
        """Produce the canonical PDF for an artifact.

        Raises:
            UnsupportedFormatError: if the format has no converter.
            ConversionError: if conversion fails.
        """
        if artifact.format is DocumentFormat.PDF:
            return NormalizedDocument(path=artifact.storage_path)

        converter = self._converters.get(artifact.format)
        if converter is None:
            raise UnsupportedFormatError(
                f"No converter for {artifact.original_filename!r}"
            )

        storage = artifact.storage_path
        renamed = storage.with_name(storage.name + artifact.extension)
        target = storage.with_name(storage.name + CONVERTED_SUFFIX)
        storage.rename(renamed)
        try:
            converter.convert(renamed, target)
        except ConversionError:
            target.unlink(missing_ok=True)
            Log.error(f"Conversion failed for {artifact.original_filename!r}")
            raise
        finally:
            renamed.unlink(missing_ok=True)

        Log.info(
            f"Normalized {artifact.original_filename!r} ({artifact.format.value}) "
            f"-> {target.name}"
        )
        return NormalizedDocument(path=target)
