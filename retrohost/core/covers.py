"""Cover art lookup: DATA_DIR/covers/<system>/<rom-name>.{png,jpg,webp}."""
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from retrohost.config import COVERS_SUBDIR, DATA_DIR
from retrohost.core.catalog import display_key
from retrohost.core.systems import system_order
from retrohost.models.rom import RomRecord

COVER_EXTENSIONS = (".png", ".jpg", ".webp")


@dataclass(frozen=True)
class CoverStatus:
    rom: RomRecord
    cover_path: Optional[Path]

    @property
    def has_cover(self) -> bool:
        return self.cover_path is not None


def find_cover(rom: RomRecord, data_dir: Path = DATA_DIR) -> Optional[Path]:
    """Return the first existing cover image for the ROM, or None."""
    base = data_dir / COVERS_SUBDIR / rom.system
    for ext in COVER_EXTENSIONS:
        p = base / f"{rom.name}{ext}"
        if p.is_file():
            return p
    return None


def check_covers(
    roms: Mapping[str, Iterable[RomRecord]], data_dir: Path = DATA_DIR
) -> List[CoverStatus]:
    """Cover status for every ROM, ordered by system table then display name."""
    ordered = sorted(
        (rom for records in roms.values() for rom in records),
        key=lambda r: (system_order(r.system), display_key(r.name)),
    )
    return [CoverStatus(rom=r, cover_path=find_cover(r, data_dir)) for r in ordered]
