#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from metadata_assets.assets import AssetValidator
from metadata_assets.config import (
    DEFAULT_ASSETS_FOLDER,
    DEFAULT_METADATA_FOLDER,
    MIN_DIMENSION,
    ValidatorConfig,
)
from metadata_assets.errors import AssetCheckError
from metadata_assets.metadata import MetadataChecker
from metadata_assets.reporting import Reporter, color_enabled


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Validate token/validator image assets (naming, 1024x1024 square, no transparent corners) "
            "and check that metadata JSON entries have matching asset files."
        )
    )
    parser.add_argument("--root", default=".", help="Repository root directory (default: current directory)")
    parser.add_argument(
        "--metadata-folder",
        default=DEFAULT_METADATA_FOLDER,
        help=f"Metadata folder relative to --root (default: {DEFAULT_METADATA_FOLDER})",
    )
    parser.add_argument(
        "--assets-folder",
        default=DEFAULT_ASSETS_FOLDER,
        help=f"Assets folder relative to the metadata folder (default: {DEFAULT_ASSETS_FOLDER})",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Metadata subfolder to skip; repeatable (default: the assets folder)",
    )
    parser.add_argument(
        "--min-dimension",
        type=int,
        default=MIN_DIMENSION,
        help=f"Minimum square edge in pixels (default: {MIN_DIMENSION})",
    )
    parser.add_argument("--skip-assets", action="store_true", help="Skip the asset image validation pass")
    parser.add_argument("--skip-metadata", action="store_true", help="Skip the metadata cross-check pass")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors in output")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ValidatorConfig:
    excluded = tuple(args.exclude) if args.exclude else (args.assets_folder,)
    return ValidatorConfig(
        root=Path(args.root).expanduser().resolve(),
        metadata_folder=args.metadata_folder,
        assets_folder=args.assets_folder,
        excluded_folders=excluded,
        min_dimension=args.min_dimension,
    )


def run(config: ValidatorConfig, reporter: Reporter, skip_assets: bool = False, skip_metadata: bool = False) -> int:
    if not skip_assets:
        errors = AssetValidator(config).validate()
        if errors:
            reporter.asset_errors(errors)
            return 1
        reporter.passed(f"asset validation passed: {config.assets_root}")

    if not skip_metadata:
        warnings = MetadataChecker(config).validate()
        if warnings:
            reporter.metadata_warnings(warnings)
        else:
            reporter.passed(f"metadata cross-check passed: {config.metadata_root}")

    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = build_config(args)
    reporter = Reporter(color=color_enabled(sys.stderr, disabled=args.no_color))

    if not config.metadata_root.is_dir():
        reporter.error(f"metadata folder not found: {config.metadata_root}")
        return 1
    if not args.skip_assets and not config.assets_root.is_dir():
        reporter.error(f"assets folder not found: {config.assets_root}")
        return 1

    try:
        return run(config, reporter, skip_assets=args.skip_assets, skip_metadata=args.skip_metadata)
    except AssetCheckError as exc:
        reporter.error(str(exc))
        return 1
    except json.JSONDecodeError as exc:
        reporter.error(f"invalid metadata JSON: {exc}")
        return 1
    except OSError as exc:
        reporter.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
