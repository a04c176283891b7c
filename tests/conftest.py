from __future__ import annotations

import json
import struct
from pathlib import Path

import pytest

from metadata_assets.config import ValidatorConfig

TOKEN_ADDRESS = "0x" + "aBcD" * 10
VALIDATOR_PUBKEY = "0x" + "a1" * 48


def png_bytes(width: int, height: int, length: int = 8192, fill: int = 0xFF) -> bytes:
    header = b"\x89PNG\r\n\x1a\n" + struct.pack(">I", 13) + b"IHDR" + struct.pack(">II", width, height)
    return header + bytes([fill]) * (length - len(header))


def segment(marker: int, payload: bytes) -> bytes:
    return bytes([0xFF, marker]) + struct.pack(">H", len(payload) + 2) + payload


def jpeg_bytes(width: int, height: int, sof_marker: int = 0xC0, extra_segments: tuple[bytes, ...] = ()) -> bytes:
    app0 = segment(0xE0, b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00")
    sof = segment(sof_marker, struct.pack(">BHHB", 8, height, width, 3) + b"\x01\x22\x00\x02\x11\x01\x03\x11\x01")
    return b"\xff\xd8" + app0 + b"".join(extra_segments) + sof + b"\xff\xd9"


@pytest.fixture
def make_png():
    return png_bytes


@pytest.fixture
def make_jpeg():
    return jpeg_bytes


@pytest.fixture
def make_segment():
    return segment


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    (tmp_path / "src" / "assets" / "tokens").mkdir(parents=True)
    (tmp_path / "src" / "assets" / "validators").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def config(repo: Path) -> ValidatorConfig:
    return ValidatorConfig(root=repo)


@pytest.fixture
def write_asset(repo: Path):
    def _write(relative: str, data: bytes) -> Path:
        path = repo / "src" / "assets" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def write_metadata(repo: Path):
    def _write(category: str, file_name: str, document: object) -> Path:
        path = repo / "src" / category / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write
