from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path

from metadata_assets.config import ValidatorConfig
from metadata_assets.dimensions import ImageDimensions, read_dimensions, read_word
from metadata_assets.errors import TruncatedImageError, UnsupportedFileTypeError

TOKEN_NAME_RE = re.compile(r"^0x[0-9a-f]{40}$", re.IGNORECASE)
VALIDATOR_NAME_RE = re.compile(r"^0x[0-9a-f]{96}$", re.IGNORECASE)

NAMING_RULES = (
    ("tokens", TOKEN_NAME_RE, "Must be a valid token address."),
    ("validators", VALIDATOR_NAME_RE, "Must be a valid validator pubkey address."),
)


def iter_asset_files(root: Path, ignored_names: tuple[str, ...] = ()) -> Iterator[Path]:
    """Yield files under ``root`` depth-first, each directory listed by name."""
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            yield from iter_asset_files(entry, ignored_names)
        elif entry.name in ignored_names:
            continue
        else:
            yield entry


def naming_error(relative: str, suffix: str) -> str | None:
    base = relative[: -len(suffix)] if suffix else relative
    for folder, pattern, requirement in NAMING_RULES:
        if folder not in relative:
            continue
        candidate = base.replace(f"{folder}/", "", 1)
        if not pattern.fullmatch(candidate):
            return f"{relative}: Invalid file name! {requirement}"
        return None
    return None


def dimension_error(relative: str, dimensions: ImageDimensions | None, min_dimension: int) -> str | None:
    if (
        dimensions is None
        or dimensions.width < min_dimension
        or dimensions.height < min_dimension
        or not dimensions.is_square
    ):
        shown = str(dimensions) if dimensions is not None else "unknown"
        return f"{relative}: Invalid (Dimensions: {shown})! Must be {min_dimension}x{min_dimension} pixels."
    return None


def corner_offsets(dimensions: ImageDimensions, buffer_length: int) -> tuple[int, int, int, int]:
    # Offsets into the raw file bytes, not a decoded pixel grid.
    width, height = dimensions.width, dimensions.height
    return (
        0,
        width - 1,
        (width * (height - 1)) % buffer_length,
        min(width * height - 1, buffer_length - 4),
    )


def has_transparent_corner(data: bytes, dimensions: ImageDimensions) -> bool:
    # all four words are read before any is compared
    words = tuple(read_word(data, offset) for offset in corner_offsets(dimensions, len(data)))
    return 0 in words


class AssetValidator:
    def __init__(self, config: ValidatorConfig) -> None:
        self.config = config

    def iter_files(self) -> Iterator[Path]:
        return iter_asset_files(self.config.assets_root, self.config.ignored_files)

    def check_file(self, path: Path) -> list[str]:
        root = self.config.assets_root
        suffix = path.suffix
        if suffix.lower() not in self.config.image_suffixes:
            raise UnsupportedFileTypeError(path)

        relative = path.relative_to(root).as_posix()
        errors: list[str] = []

        name_err = naming_error(relative, suffix)
        if name_err:
            errors.append(name_err)

        data = path.read_bytes()
        try:
            dimensions = read_dimensions(data)
            dim_err = dimension_error(relative, dimensions, self.config.min_dimension)
            if dim_err:
                errors.append(dim_err)
            if suffix.lower() == ".png" and dimensions is not None:
                if has_transparent_corner(data, dimensions):
                    errors.append(f"{relative}: Invalid image! Image cannot be transparent!")
        except TruncatedImageError as exc:
            raise TruncatedImageError(f"{relative}: {exc}") from exc

        return errors

    def validate(self) -> list[str]:
        errors: list[str] = []
        for path in self.iter_files():
            errors.extend(self.check_file(path))
        return errors


def validate_assets(config: ValidatorConfig) -> list[str]:
    return AssetValidator(config).validate()
