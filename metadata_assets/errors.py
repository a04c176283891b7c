from __future__ import annotations

from pathlib import Path


class AssetCheckError(Exception):
    pass


class TruncatedImageError(AssetCheckError, ValueError):
    pass


class MetadataFormatError(AssetCheckError):
    pass


class UnsupportedFileTypeError(AssetCheckError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"{path}: Unsupported file type!")
        self.path = path
