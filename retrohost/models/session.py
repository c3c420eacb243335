"""Play session identity, states and operation outcomes."""
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from retrohost.errors import ConfigurationError
from retrohost.models.rom import strip_extension


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    SAVING = "saving"
    RESTORING = "restoring"
    TERMINATED = "terminated"


class SaveOutcome(str, Enum):
    SAVED = "saved"
    NOTHING_TO_SAVE = "nothing_to_save"
    NOT_READY = "not_ready"
    FAILED = "failed"
    BUSY = "busy"
    TERMINATED = "terminated"


class LoadOutcome(str, Enum):
    LOADED = "loaded"
    NO_SAVE = "no_save"
    NOT_READY = "not_ready"
    FAILED = "failed"
    BUSY = "busy"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class SaveKey:
    """Backend address of one save: system id + ROM name (file name without extension)."""
    system: str
    rom_name: str


@dataclass(frozen=True)
class SessionParams:
    """The three identifiers a player view is entered with."""
    system: str
    rom: str
    core: str

    @classmethod
    def from_query(cls, query: Mapping[str, Optional[str]]) -> "SessionParams":
        """Build from query parameters; raises ConfigurationError if any is missing or empty."""
        missing = [k for k in ("system", "rom", "core") if not query.get(k)]
        if missing:
            raise ConfigurationError(f"Missing parameters: {', '.join(missing)}")
        return cls(system=query["system"], rom=query["rom"], core=query["core"])

    @property
    def rom_name(self) -> str:
        return strip_extension(self.rom)

    @property
    def key(self) -> SaveKey:
        return SaveKey(system=self.system, rom_name=self.rom_name)
