from printbridge.conversion.base import BaseConverter
from printbridge.conversion.factory import NormalizerFactory
from printbridge.conversion.normalizer import DocumentNormalizer, NormalizedDocument

__all__ = ["BaseConverter", "DocumentNormalizer", "NormalizedDocument", "NormalizerFactory"]
