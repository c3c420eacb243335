"""Walk the ROM directory and build RomRecords per system."""
import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from retrohost.config import ROM_DIR
from retrohost.core.systems import (
    IGNORED_EXTENSIONS,
    SYSTEMS,
    system_by_dir,
    system_by_extension,
)
from retrohost.models.rom import RomRecord, SystemInfo, strip_extension

logger = logging.getLogger(__name__)


def scan_roms(
    rom_dir: Path = ROM_DIR, tags: Optional[Mapping[str, str]] = None
) -> Dict[str, List[RomRecord]]:
    """Return ROMs grouped by system id.

    A file inside a top-level directory named after a system id belongs to that
    system; otherwise its extension decides. Unknown extensions and save/patch
    files are skipped. Records come back in walk order; sorting is the caller's job.
    """
    tags = tags or {}
    result: Dict[str, List[RomRecord]] = {}
    if not rom_dir.is_dir():
        logger.warning("ROM directory not found: %s", rom_dir)
        return result

    for dirpath, dirnames, filenames in os.walk(rom_dir):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            ext = path.suffix.lower()
            if ext in IGNORED_EXTENSIONS:
                continue

            system = None
            rel = path.relative_to(rom_dir)
            if len(rel.parts) > 1:
                system = system_by_dir(rel.parts[0])
            if system is None:
                system = system_by_extension(ext)
            if system is None:
                continue

            result.setdefault(system.id, []).append(
                RomRecord(
                    name=strip_extension(filename),
                    file_name=filename,
                    system=system.id,
                    tag=tags.get(filename) or None,
                )
            )
    return result


def list_systems(roms: Mapping[str, List[RomRecord]]) -> List[SystemInfo]:
    """Systems that have at least one ROM, in system-table order."""
    return [
        SystemInfo(id=s.id, name=s.name, core=s.core, rom_count=len(roms[s.id]))
        for s in SYSTEMS
        if roms.get(s.id)
    ]


def find_rom_file(rom_dir: Path, filename: str) -> Optional[Path]:
    """Locate a ROM file by base name anywhere below rom_dir."""
    name = Path(filename).name
    if not name or not rom_dir.is_dir():
        return None
    for dirpath, dirnames, filenames in os.walk(rom_dir):
        dirnames.sort()
        if name in filenames:
            return Path(dirpath) / name
    return None
