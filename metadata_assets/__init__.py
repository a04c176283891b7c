from __future__ import annotations

from metadata_assets.config import ValidatorConfig
from metadata_assets.dimensions import ImageDimensions, read_dimensions
from metadata_assets.errors import (
    AssetCheckError,
    MetadataFormatError,
    TruncatedImageError,
    UnsupportedFileTypeError,
)

__all__ = [
    "AssetCheckError",
    "ImageDimensions",
    "MetadataFormatError",
    "TruncatedImageError",
    "UnsupportedFileTypeError",
    "ValidatorConfig",
    "read_dimensions",
]

__version__ = "0.1.0"
