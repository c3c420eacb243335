"""Test doubles for the emulator capability and the save store."""
import threading
from typing import Dict, List, Optional

from retrohost.errors import SaveNotFound, TransportFailure
from retrohost.models.session import SaveKey


class FakeEmulator:
    """Emulator capability with scripted readiness and save data."""

    def __init__(self, ready: bool = True, save_data: Optional[bytes] = b"SAVE", accept: bool = True) -> None:
        self.ready = ready
        self.save_data = save_data
        self.accept = accept
        self.restored: List[bytes] = []
        self.captures = 0

    def capture_save_data(self) -> Optional[bytes]:
        self.captures += 1
        return self.save_data

    def restore_save_data(self, blob: bytes) -> bool:
        self.restored.append(blob)
        return self.accept


class FakeStore:
    """In-memory save store that records every call; status simulates HTTP answers."""

    def __init__(self, saves: Optional[Dict[SaveKey, bytes]] = None, fail: bool = False) -> None:
        self.saves = dict(saves or {})
        self.fail = fail
        self.fetches: List[SaveKey] = []
        self.writes: List[tuple] = []
        self.beacons: List[tuple] = []
        self.block_store: Optional[threading.Event] = None
        self.store_entered = threading.Event()
        self.block_fetch: Optional[threading.Event] = None
        self.fetch_entered = threading.Event()

    def fetch(self, key: SaveKey) -> bytes:
        self.fetches.append(key)
        self.fetch_entered.set()
        if self.block_fetch is not None:
            self.block_fetch.wait(timeout=5)
        if self.fail:
            raise TransportFailure("HTTP 500")
        if key not in self.saves:
            raise SaveNotFound(f"{key.system}/{key.rom_name}")
        return self.saves[key]

    def store(self, key: SaveKey, blob: bytes) -> None:
        self.store_entered.set()
        if self.block_store is not None:
            self.block_store.wait(timeout=5)
        self.writes.append((key, blob))
        if self.fail:
            raise TransportFailure("HTTP 500")
        self.saves[key] = blob

    def send_beacon(self, key: SaveKey, blob: bytes) -> None:
        self.beacons.append((key, blob))
        if self.fail:
            raise TransportFailure("connection refused")
        self.saves[key] = blob
