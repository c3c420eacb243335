"""Supported systems and lookups by id, directory name and file extension."""
from typing import Optional

from retrohost.models.rom import System

SYSTEMS: tuple[System, ...] = (
    System(id="gb", name="Game Boy", extensions=(".gb",), core="gb"),
    System(id="gbc", name="Game Boy Color", extensions=(".gbc",), core="gb"),
    System(id="gba", name="Game Boy Advance", extensions=(".gba",), core="vba_next"),
    System(id="nes", name="NES", extensions=(".nes",), core="nes"),
    System(id="snes", name="SNES", extensions=(".smc", ".sfc"), core="snes"),
)

# Save files, patches and backups that live next to ROMs
IGNORED_EXTENSIONS = frozenset({".srm", ".sav", ".bak", ".ips", ".ups"})

_BY_ID = {s.id: s for s in SYSTEMS}
_BY_EXTENSION = {ext: s for s in SYSTEMS for ext in s.extensions}


def system_by_id(system_id: str) -> Optional[System]:
    """Return the system with this id, or None."""
    return _BY_ID.get(system_id)


def system_by_dir(dir_name: str) -> Optional[System]:
    """Return the system a top-level ROM directory is named after (case-insensitive)."""
    return _BY_ID.get(dir_name.lower())


def system_by_extension(ext: str) -> Optional[System]:
    """Return the system claiming a file extension such as '.gba' (case-insensitive)."""
    return _BY_EXTENSION.get(ext.lower())


def system_order(system_id: str) -> int:
    """Position in SYSTEMS; unknown ids sort last."""
    for i, s in enumerate(SYSTEMS):
        if s.id == system_id:
            return i
    return len(SYSTEMS)
