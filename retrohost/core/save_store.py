"""Persist and load save data (one .sav file per system + ROM name)."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from retrohost.config import DATA_DIR, SAVES_SUBDIR
from retrohost.errors import SaveNotFound, TransportFailure
from retrohost.models.session import SaveKey

logger = logging.getLogger(__name__)

SAVE_SUFFIX = ".sav"


def _valid_segment(segment: str) -> bool:
    return bool(segment) and ".." not in segment and "/" not in segment and "\\" not in segment


def save_path(system: str, rom_name: str, data_dir: Path = DATA_DIR) -> Path:
    """Return DATA_DIR/saves/<system>/<rom_name>.sav. Raises ValueError on path traversal."""
    if not _valid_segment(system) or not _valid_segment(rom_name):
        raise ValueError(f"invalid save key: {system!r}/{rom_name!r}")
    return data_dir / SAVES_SUBDIR / system / f"{rom_name}{SAVE_SUFFIX}"


def read_save(system: str, rom_name: str, data_dir: Path = DATA_DIR) -> Optional[bytes]:
    """Return the stored save, or None if there is none."""
    p = save_path(system, rom_name, data_dir)
    if not p.is_file():
        return None
    return p.read_bytes()


def write_save(system: str, rom_name: str, data: bytes, data_dir: Path = DATA_DIR) -> Path:
    """Replace the stored save. The file is swapped in atomically so readers never see a partial write."""
    p = save_path(system, rom_name, data_dir)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, prefix=f".{p.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, p)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
    logger.info("Wrote save %s/%s (%d bytes)", system, rom_name, len(data))
    return p


class FileSaveStore:
    """SaveStore backed directly by the save files (no HTTP), for hosts running next to the data."""

    def __init__(self, data_dir: Path = DATA_DIR) -> None:
        self.data_dir = data_dir

    def fetch(self, key: SaveKey) -> bytes:
        try:
            data = read_save(key.system, key.rom_name, self.data_dir)
        except (OSError, ValueError) as e:
            raise TransportFailure(str(e)) from e
        if data is None:
            raise SaveNotFound(f"{key.system}/{key.rom_name}")
        return data

    def store(self, key: SaveKey, blob: bytes) -> None:
        try:
            write_save(key.system, key.rom_name, blob, self.data_dir)
        except (OSError, ValueError) as e:
            raise TransportFailure(str(e)) from e

    def send_beacon(self, key: SaveKey, blob: bytes) -> None:
        try:
            write_save(key.system, key.rom_name, blob, self.data_dir)
        except (OSError, ValueError) as e:
            logger.debug("Beacon write failed for %s/%s: %s", key.system, key.rom_name, e)
