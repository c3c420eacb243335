"""ROM records and emulated systems."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class System:
    """Emulated system: extensions it claims and the emulator core that plays it."""
    id: str
    name: str
    extensions: tuple[str, ...]
    core: str


@dataclass(frozen=True)
class SystemInfo:
    """Catalog entry for a system that has at least one ROM."""
    id: str
    name: str
    core: str
    rom_count: int


@dataclass(frozen=True)
class RomRecord:
    """One ROM file. file_name is unique within its system."""
    name: str
    file_name: str
    system: str
    tag: Optional[str] = None

    @property
    def rom_name(self) -> str:
        """File name without its last extension; used as the save key."""
        return strip_extension(self.file_name)


def strip_extension(file_name: str) -> str:
    """Remove the last extension ('Zelda.v1.gb' -> 'Zelda.v1')."""
    stem, dot, _ext = file_name.rpartition(".")
    if not dot or not stem:
        return file_name
    return stem
