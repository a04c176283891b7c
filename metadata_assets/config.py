from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_METADATA_FOLDER = "src"
DEFAULT_ASSETS_FOLDER = "assets"
DEFAULT_EXCLUDED_FOLDERS = ("assets",)
DEFAULT_IGNORED_FILES = (".DS_Store", "validator-default.png")
ALLOWED_IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg")
MIN_DIMENSION = 1024


@dataclass(frozen=True)
class ValidatorConfig:
    root: Path = Path(".")
    metadata_folder: str = DEFAULT_METADATA_FOLDER
    assets_folder: str = DEFAULT_ASSETS_FOLDER
    excluded_folders: tuple[str, ...] = DEFAULT_EXCLUDED_FOLDERS
    ignored_files: tuple[str, ...] = DEFAULT_IGNORED_FILES
    image_suffixes: tuple[str, ...] = ALLOWED_IMAGE_SUFFIXES
    min_dimension: int = MIN_DIMENSION

    @property
    def metadata_root(self) -> Path:
        return self.root / self.metadata_folder

    @property
    def assets_root(self) -> Path:
        return self.metadata_root / self.assets_folder
