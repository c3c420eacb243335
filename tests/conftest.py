import json
from pathlib import Path

import pytest

from tests.fakes import FakeEmulator, FakeStore


@pytest.fixture
def emulator():
    return FakeEmulator()


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def rom_library(tmp_path: Path):
    """ROM and data directories with a small mixed library and tags.json."""
    rom_dir = tmp_path / "roms"
    data_dir = tmp_path / "data"
    files = [
        "gba/Pokemon Fire Red.gba",
        "gba/pokemon emerald.gba",
        "gba/Pokemon Fire Red.sav",
        "snes/Super Mario World.smc",
        "Zelda.gb",
        "Metroid.nes",
        "misc/Tetris.gbc",
        "readme.txt",
        "nes/notes.ips",
    ]
    for rel in files:
        p = rom_dir / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"\x00" * 16)
    data_dir.mkdir()
    (data_dir / "tags.json").write_text(
        json.dumps({"Pokemon Fire Red.gba": "RPG", "Super Mario World.smc": "Platformer"})
    )
    return rom_dir, data_dir
