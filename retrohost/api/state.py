"""Shared application state (injected into routes)."""
from pathlib import Path
from typing import Dict, List

from retrohost.config import DATA_DIR, ROM_DIR
from retrohost.core.scanner import list_systems, scan_roms
from retrohost.core.tag_store import load_tags
from retrohost.models.rom import RomRecord, SystemInfo


class AppState:
    def __init__(self, rom_dir: Path = ROM_DIR, data_dir: Path = DATA_DIR) -> None:
        self.rom_dir = rom_dir
        self.data_dir = data_dir
        self._tags: Dict[str, str] = {}

    def load_tags(self) -> None:
        self._tags = load_tags(self.data_dir)

    def get_tags(self) -> Dict[str, str]:
        return self._tags

    def scan(self) -> Dict[str, List[RomRecord]]:
        """Rescan the ROM directory (every catalog request sees the current files)."""
        return scan_roms(self.rom_dir, self._tags)

    def get_systems(self) -> List[SystemInfo]:
        return list_systems(self.scan())

    def get_roms(self, system_id: str) -> List[RomRecord]:
        return self.scan().get(system_id, [])


_state = AppState()


def get_state() -> AppState:
    return _state
