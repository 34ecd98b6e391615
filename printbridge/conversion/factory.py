from printbridge.config.settings import Settings
from printbridge.conversion.image_converter import ImageConverter, resolve_page_size
from printbridge.conversion.normalizer import DocumentNormalizer
from printbridge.conversion.office_converter import OfficeConverter, resolve_soffice


class NormalizerFactory:
    """Creates the document normalizer with converters built from settings."""

    @classmethod
    def create(cls, settings: Settings) -> DocumentNormalizer:
        office = OfficeConverter(
            soffice_path=resolve_soffice(settings.soffice_path),
            timeout_seconds=settings.conversion_timeout_seconds,
            output_wait_seconds=settings.conversion_output_wait_seconds,
        )
        image = ImageConverter(page_size=resolve_page_size(settings.image_page_size))
        return DocumentNormalizer(office_converter=office, image_converter=image)
