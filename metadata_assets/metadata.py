from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from metadata_assets.config import ValidatorConfig
from metadata_assets.errors import MetadataFormatError


@dataclass(frozen=True)
class Tokens:
    addresses: list[str | None]


@dataclass(frozen=True)
class Validators:
    ids: list[str | None]


@dataclass(frozen=True)
class Vaults:
    staking_token_addresses: list[str | None]


@dataclass(frozen=True)
class Unknown:
    name: str


MetadataCategory = Union[Tokens, Validators, Vaults, Unknown]

# category folder -> (variant, identifier field in each entry)
CATEGORY_FIELDS = {
    "tokens": (Tokens, "address"),
    "validators": (Validators, "id"),
    "vaults": (Vaults, "stakingTokenAddress"),
}


@dataclass(frozen=True)
class MetadataFile:
    category_name: str
    file_name: str
    category: MetadataCategory


@dataclass(frozen=True)
class AssetReference:
    identifier: str | None
    folder: str
    label: str
    field: str


def _identifiers(entries: object, field: str, source: str) -> list[str | None]:
    # None marks an entry without a usable identifier; it is reported, not fatal.
    if not isinstance(entries, list):
        raise MetadataFormatError(f"{source}: expected a list, got {type(entries).__name__}")
    values: list[str | None] = []
    for entry in entries:
        value = entry.get(field) if isinstance(entry, dict) else None
        values.append(value if isinstance(value, str) else None)
    return values


def decode_category(name: str, document: object, source: str = "") -> MetadataCategory:
    if name not in CATEGORY_FIELDS:
        return Unknown(name)
    source = source or name
    if not isinstance(document, dict) or name not in document:
        raise MetadataFormatError(f"{source}: missing top-level key '{name}'")
    variant, field = CATEGORY_FIELDS[name]
    return variant(_identifiers(document[name], field, f"{source}:{name}"))


def asset_references(category: MetadataCategory) -> list[AssetReference]:
    if isinstance(category, Tokens):
        return [AssetReference(a, "tokens", "Token", "address") for a in category.addresses]
    if isinstance(category, Validators):
        return [AssetReference(i, "validators", "Validator", "id") for i in category.ids]
    if isinstance(category, Vaults):
        return [
            AssetReference(a, "tokens", "Vault", "stakingTokenAddress") for a in category.staking_token_addresses
        ]
    return []


def list_categories(metadata_root: Path, excluded: tuple[str, ...]) -> list[str]:
    return sorted(
        entry.name
        for entry in metadata_root.iterdir()
        if entry.is_dir() and entry.name not in excluded
    )


def load_metadata(config: ValidatorConfig) -> list[MetadataFile]:
    files: list[MetadataFile] = []
    for name in list_categories(config.metadata_root, config.excluded_folders):
        folder = config.metadata_root / name
        for path in sorted(p for p in folder.iterdir() if p.is_file() and p.name.endswith(".json")):
            document = json.loads(path.read_text(encoding="utf-8"))
            source = f"{name}/{path.name}"
            files.append(MetadataFile(name, path.name, decode_category(name, document, source)))
    return files


class MetadataChecker:
    def __init__(self, config: ValidatorConfig) -> None:
        self.config = config

    def asset_exists(self, ref: AssetReference) -> bool:
        base = self.config.assets_root / ref.folder
        return any((base / f"{ref.identifier}{suffix}").exists() for suffix in self.config.image_suffixes)

    def check_file(self, metadata_file: MetadataFile) -> list[str]:
        source = f"{metadata_file.category_name}/{metadata_file.file_name}"
        errors: list[str] = []
        for index, ref in enumerate(asset_references(metadata_file.category)):
            if ref.identifier is None:
                errors.append(f"{source}[{index}]: missing '{ref.field}'")
            elif not self.asset_exists(ref):
                errors.append(
                    f"{ref.identifier}: {ref.label} file not found in {self.config.assets_folder}/{ref.folder} folder!"
                )
        return errors

    def validate(self) -> list[str]:
        errors: list[str] = []
        for metadata_file in load_metadata(self.config):
            errors.extend(self.check_file(metadata_file))
        return errors


def validate_metadata(config: ValidatorConfig) -> list[str]:
    return MetadataChecker(config).validate()
