#!/usr/bin/env python3
"""
Turn a source image into an asset the validator accepts.
Usage: prepare-asset <source_image> --kind token --id 0x...
"""

from __future__ import annotations

import argparse
import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from PIL.PngImagePlugin import PngInfo

from metadata_assets.assets import TOKEN_NAME_RE, VALIDATOR_NAME_RE, has_transparent_corner
from metadata_assets.config import DEFAULT_ASSETS_FOLDER, DEFAULT_METADATA_FOLDER, MIN_DIMENSION
from metadata_assets.dimensions import read_dimensions
from metadata_assets.errors import TruncatedImageError

KIND_RULES = {
    "token": ("tokens", TOKEN_NAME_RE, "a 0x-prefixed 40 hex digit token address"),
    "validator": ("validators", VALIDATOR_NAME_RE, "a 0x-prefixed 96 hex digit validator pubkey"),
}
PADDING_ATTEMPTS = 256


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resize a source image into a square, opaque PNG under src/assets/<tokens|validators>/."
    )
    parser.add_argument("source", help="Source image path (any format Pillow can open)")
    parser.add_argument("--kind", choices=sorted(KIND_RULES), required=True, help="Asset kind")
    parser.add_argument("--id", dest="identifier", required=True, help="Token address or validator pubkey")
    parser.add_argument("--root", default=".", help="Repository root directory (default: current directory)")
    parser.add_argument("--metadata-folder", default=DEFAULT_METADATA_FOLDER, help="Metadata folder relative to --root")
    parser.add_argument("--assets-folder", default=DEFAULT_ASSETS_FOLDER, help="Assets folder relative to the metadata folder")
    parser.add_argument("--size", type=int, default=MIN_DIMENSION, help=f"Output edge in pixels (default: {MIN_DIMENSION})")
    parser.add_argument("--background", default="#ffffff", help="Fill color for transparent areas (default: #ffffff)")
    parser.add_argument("--dry-run", action="store_true", help="Print planned changes without writing files")
    return parser.parse_args(argv)


def parse_hex_color(value: str) -> tuple[int, int, int]:
    text = value.strip().lstrip("#")
    if len(text) != 6:
        raise ValueError(f"invalid background color: {value}")
    try:
        return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)
    except ValueError as exc:
        raise ValueError(f"invalid background color: {value}") from exc


def center_square(img: Image.Image) -> Image.Image:
    width, height = img.size
    edge = min(width, height)
    left = (width - edge) // 2
    top = (height - edge) // 2
    return img.crop((left, top, left + edge, top + edge))


def flatten(img: Image.Image, background: tuple[int, int, int]) -> Image.Image:
    rgba = img.convert("RGBA")
    canvas = Image.new("RGBA", rgba.size, background + (255,))
    canvas.alpha_composite(rgba)
    return canvas.convert("RGB")


def render_asset(src: Path, size: int, background: tuple[int, int, int]) -> Image.Image:
    with Image.open(src) as img:
        img.load()
        square = center_square(img)
    resized = square.resize((size, size), Image.LANCZOS)
    return flatten(resized, background)


def encode_png(image: Image.Image, compress_level: int | None = None, padding: int = 0) -> bytes:
    buf = io.BytesIO()
    params: dict = {"optimize": True} if compress_level is None else {"compress_level": compress_level}
    if padding:
        info = PngInfo()
        info.add_text("Comment", " " * padding)
        params["pnginfo"] = info
    image.save(buf, "PNG", **params)
    return buf.getvalue()


def passes_corner_check(data: bytes) -> bool:
    dimensions = read_dimensions(data)
    if dimensions is None:
        return False
    try:
        return not has_transparent_corner(data, dimensions)
    except TruncatedImageError:
        return False


def encode_valid_png(image: Image.Image) -> bytes:
    """Encode ``image`` so the raw-byte corner words of the asset check are all non-zero.

    The check reads file bytes, not pixels, so an opaque image can still trip them.
    Other compression levels are tried first, then a space-filled ``Comment`` chunk
    that shifts the checked offsets.
    """
    attempts = [{}] + [{"compress_level": level} for level in range(1, 10)]
    attempts += [{"padding": image.width + extra} for extra in range(PADDING_ATTEMPTS)]
    for params in attempts:
        data = encode_png(image, **params)
        if passes_corner_check(data):
            return data
    raise ValueError("could not encode a PNG that passes the transparency check")


def target_path(root: Path, metadata_folder: str, assets_folder: str, kind: str, identifier: str) -> Path:
    folder, pattern, requirement = KIND_RULES[kind]
    if not pattern.fullmatch(identifier):
        raise ValueError(f"invalid {kind} id: expected {requirement}, got {identifier!r}")
    return root / metadata_folder / assets_folder / folder / f"{identifier}.png"


def prepare_asset(
    src: Path,
    out: Path,
    size: int,
    background: tuple[int, int, int],
    dry_run: bool,
) -> list[str]:
    logs: list[str] = []
    if out.exists():
        logs.append(f"[PLAN] overwrite asset: {out}")
    else:
        logs.append(f"[PLAN] create asset: {out}")

    if dry_run:
        logs.append(f"[DRY-RUN] {src.name} -> {size}x{size} PNG")
        return logs

    data = encode_valid_png(render_asset(src, size, background))
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    logs.append(f"[OK] wrote {out.name} ({size}x{size}, {out.stat().st_size:,} bytes)")
    return logs


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    root = Path(args.root).expanduser().resolve()
    src = Path(args.source).expanduser().resolve()

    if not src.is_file():
        print(f"[ERROR] source image not found: {src}")
        return 1
    if args.size < 1:
        print(f"[ERROR] size must be positive: {args.size}")
        return 1

    try:
        background = parse_hex_color(args.background)
        out = target_path(root, args.metadata_folder, args.assets_folder, args.kind, args.identifier)
        for line in prepare_asset(src, out, args.size, background, args.dry_run):
            print(line)
        return 0
    except UnidentifiedImageError as exc:
        print(f"[ERROR] unreadable source image: {exc}")
        return 1
    except (OSError, ValueError) as exc:
        print(f"[ERROR] {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
