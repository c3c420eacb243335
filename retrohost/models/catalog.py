"""Grouped catalog view model."""
from dataclasses import dataclass
from typing import Optional

from retrohost.models.rom import RomRecord

UNTAGGED = ""
UNTAGGED_HEADING = "Untagged"


@dataclass(frozen=True)
class TagGroup:
    """ROMs sharing one tag, in display order. tag == UNTAGGED for ROMs without a tag."""
    tag: str
    roms: tuple[RomRecord, ...]

    @property
    def is_untagged(self) -> bool:
        return self.tag == UNTAGGED


@dataclass(frozen=True)
class CatalogView:
    groups: tuple[TagGroup, ...]

    @property
    def single_group(self) -> bool:
        """True when there is exactly one group; callers render it without headings."""
        return len(self.groups) == 1

    def heading(self, group: TagGroup) -> Optional[str]:
        if self.single_group:
            return None
        return UNTAGGED_HEADING if group.is_untagged else group.tag

    def __iter__(self):
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)
