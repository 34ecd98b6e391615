from abc import ABC, abstractmethod
from pathlib import Path


class BaseConverter(ABC):
    """Contract for all to-PDF converters."""

    @abstractmethod
    def convert(self, source: Path, target: Path) -> Path:
        """Convert a file into a single PDF.

        Args:
            source: Input file carrying its real extension.
            target: Path the finished PDF must end up at.

        Returns:
            The target path.

        Raises:
            ConversionError: if the PDF could not be produced.
        """
