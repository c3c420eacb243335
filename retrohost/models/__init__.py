"""Data models for ROMs, the grouped catalog, and play sessions."""
from retrohost.models.catalog import CatalogView, TagGroup
from retrohost.models.rom import RomRecord, System, SystemInfo
from retrohost.models.session import (
    LoadOutcome,
    SaveKey,
    SaveOutcome,
    SessionParams,
    SessionState,
)

__all__ = [
    "CatalogView",
    "LoadOutcome",
    "RomRecord",
    "SaveKey",
    "SaveOutcome",
    "SessionParams",
    "SessionState",
    "System",
    "SystemInfo",
    "TagGroup",
]
