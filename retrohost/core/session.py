"""Save-state persistence for one play session (one system + ROM).

The controller loads the stored save on entry, saves and loads on request, and
posts a best-effort save on teardown. Only one save or load runs at a time:
the first request wins and a request arriving while another is in flight is
answered with BUSY without touching the store or the emulator.
"""
import logging
import threading
from typing import Optional, Protocol

from retrohost.config import SAVE_TIMEOUT_SEC
from retrohost.core.indicator import (
    LOAD_LABELS,
    LOADING_TEXT,
    SAVE_LABELS,
    SAVING_TEXT,
    StatusIndicator,
)
from retrohost.errors import (
    CapabilityUnavailable,
    NothingToPersist,
    SaveNotFound,
    TransportFailure,
)
from retrohost.models.session import (
    LoadOutcome,
    SaveKey,
    SaveOutcome,
    SessionParams,
    SessionState,
)

logger = logging.getLogger(__name__)


class EmulatorCapability(Protocol):
    """What the controller needs from the emulator."""

    @property
    def ready(self) -> bool:
        """True once the emulator is initialized and the two calls below may be made."""

    def capture_save_data(self) -> Optional[bytes]:
        """Current save data; None or empty when there is nothing to save."""

    def restore_save_data(self, blob: bytes) -> bool:
        """Load save data into the emulator; False if it was rejected."""


class SaveStore(Protocol):
    """Backend save storage addressed by SaveKey."""

    def fetch(self, key: SaveKey) -> bytes:
        """Return the save; raise SaveNotFound or TransportFailure."""

    def store(self, key: SaveKey, blob: bytes) -> None:
        """Replace the save; raise TransportFailure."""

    def send_beacon(self, key: SaveKey, blob: bytes) -> None:
        """Fire-and-forget write that outlives the caller; no result."""


class SessionController:
    """Owns the save data of one play session from entry to teardown."""

    def __init__(
        self,
        params: SessionParams,
        emulator: EmulatorCapability,
        store: SaveStore,
        save_indicator: Optional[StatusIndicator] = None,
        load_indicator: Optional[StatusIndicator] = None,
        teardown_timeout: float = SAVE_TIMEOUT_SEC,
    ) -> None:
        self.params = params
        self._emulator = emulator
        self._store = store
        self._save_indicator = save_indicator
        self._load_indicator = load_indicator
        self._teardown_timeout = teardown_timeout
        self._state = SessionState.UNINITIALIZED
        self._state_lock = threading.Lock()
        # Held for the whole of the entry load and of every save/load
        self._op_lock = threading.Lock()
        self._pending_restore: Optional[bytes] = None

    @property
    def key(self) -> SaveKey:
        return self.params.key

    @property
    def state(self) -> SessionState:
        with self._state_lock:
            return self._state

    @property
    def pending_restore(self) -> Optional[bytes]:
        """Save found on entry that still has to be handed to the emulator before it runs."""
        return self._pending_restore

    def __enter__(self) -> "SessionController":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.terminate()

    # Entry load

    def start(self) -> bool:
        """Load the stored save for the session key. Returns True if one was found.

        Not-found and transport failures both end in READY without a restore.
        If the emulator is not ready yet the save is kept as pending_restore and
        applied by emulator_started().
        """
        with self._state_lock:
            if self._state is not SessionState.UNINITIALIZED:
                raise RuntimeError(f"session already started ({self._state.value})")
            self._state = SessionState.LOADING

        with self._op_lock:
            blob: Optional[bytes] = None
            try:
                blob = self._store.fetch(self.key)
            except SaveNotFound:
                logger.debug("No save for %s/%s", self.key.system, self.key.rom_name)
            except TransportFailure as e:
                logger.warning("Entry load failed for %s/%s: %s", self.key.system, self.key.rom_name, e)

            if blob and self.state is not SessionState.TERMINATED:
                if self._emulator.ready:
                    self._apply_restore(blob)
                else:
                    self._pending_restore = blob
            self._set_state(SessionState.READY)
        return bool(blob)

    def emulator_started(self) -> bool:
        """Hand the pending entry save to the emulator. Call once it is ready, before it executes."""
        with self._op_lock:
            blob, self._pending_restore = self._pending_restore, None
            if blob is None or self.state is SessionState.TERMINATED:
                return False
            return self._apply_restore(blob)

    def _apply_restore(self, blob: bytes) -> bool:
        try:
            ok = self._emulator.restore_save_data(blob)
        except Exception as e:
            logger.warning("Restore failed for %s/%s: %s", self.key.system, self.key.rom_name, e)
            return False
        if not ok:
            logger.warning("Emulator rejected save for %s/%s", self.key.system, self.key.rom_name)
        return bool(ok)

    # Manual save / load

    def save(self) -> SaveOutcome:
        """Capture the emulator's save data and write it to the store."""
        if not self._op_lock.acquire(blocking=False):
            return self._report_save(SaveOutcome.BUSY)
        try:
            current = self._begin(SessionState.SAVING)
            if current is SessionState.TERMINATED:
                return SaveOutcome.TERMINATED
            if current is not SessionState.READY:
                outcome = SaveOutcome.NOT_READY
            else:
                try:
                    outcome = self._save()
                finally:
                    self._set_state(SessionState.READY)
        finally:
            self._op_lock.release()
        return self._report_save(outcome)

    def _save(self) -> SaveOutcome:
        try:
            blob = self._capture()
        except CapabilityUnavailable:
            return SaveOutcome.NOT_READY
        except NothingToPersist:
            return SaveOutcome.NOTHING_TO_SAVE
        except Exception as e:
            logger.warning("Capture failed for %s/%s: %s", self.key.system, self.key.rom_name, e)
            return SaveOutcome.FAILED

        if self._save_indicator is not None:
            self._save_indicator.show(SAVING_TEXT, transient=False)
        try:
            self._store.store(self.key, blob)
        except TransportFailure as e:
            logger.warning("Save failed for %s/%s: %s", self.key.system, self.key.rom_name, e)
            return SaveOutcome.FAILED
        logger.info("Saved %s/%s (%d bytes)", self.key.system, self.key.rom_name, len(blob))
        return SaveOutcome.SAVED

    def load(self) -> LoadOutcome:
        """Read the stored save and hand it to the emulator."""
        if not self._op_lock.acquire(blocking=False):
            return self._report_load(LoadOutcome.BUSY)
        try:
            current = self._begin(SessionState.RESTORING)
            if current is SessionState.TERMINATED:
                return LoadOutcome.TERMINATED
            if current is not SessionState.READY:
                outcome = LoadOutcome.NOT_READY
            else:
                try:
                    outcome = self._load()
                finally:
                    self._set_state(SessionState.READY)
        finally:
            self._op_lock.release()
        return self._report_load(outcome)

    def _load(self) -> LoadOutcome:
        if not self._emulator.ready:
            return LoadOutcome.NOT_READY
        if self._load_indicator is not None:
            self._load_indicator.show(LOADING_TEXT, transient=False)
        try:
            blob = self._store.fetch(self.key)
        except SaveNotFound:
            logger.debug("No save for %s/%s", self.key.system, self.key.rom_name)
            return LoadOutcome.NO_SAVE
        except TransportFailure as e:
            logger.warning("Load failed for %s/%s: %s", self.key.system, self.key.rom_name, e)
            return LoadOutcome.FAILED
        if not self._apply_restore(blob):
            return LoadOutcome.FAILED
        logger.info("Loaded %s/%s", self.key.system, self.key.rom_name)
        return LoadOutcome.LOADED

    # Teardown

    def terminate(self) -> bool:
        """Page teardown: post a best-effort save and end the session.

        Issues at most one fire-and-forget write, and none when the emulator is
        not ready or has nothing to save. A save or load still in flight is
        waited for (up to teardown_timeout) so the teardown write is the last
        one for the key; if it does not finish in time no write is issued.
        Never raises; a lost teardown save is accepted. Returns True if a write
        was handed to the store.
        """
        with self._state_lock:
            if self._state is SessionState.TERMINATED:
                return False
            self._state = SessionState.TERMINATED
        for indicator in (self._save_indicator, self._load_indicator):
            if indicator is not None:
                indicator.cancel()

        if not self._op_lock.acquire(timeout=self._teardown_timeout):
            logger.debug("Teardown save skipped for %s/%s: operation still in flight", self.key.system, self.key.rom_name)
            return False
        try:
            self._pending_restore = None
            return self._teardown_save()
        finally:
            self._op_lock.release()

    def _teardown_save(self) -> bool:
        try:
            blob = self._capture()
        except (CapabilityUnavailable, NothingToPersist) as e:
            logger.debug("Teardown save skipped for %s/%s: %s", self.key.system, self.key.rom_name, type(e).__name__)
            return False
        except Exception:
            logger.debug("Teardown capture failed for %s/%s", self.key.system, self.key.rom_name, exc_info=True)
            return False
        try:
            self._store.send_beacon(self.key, blob)
        except Exception:
            logger.debug("Teardown beacon failed for %s/%s", self.key.system, self.key.rom_name, exc_info=True)
            return False
        return True

    # Helpers

    def _capture(self) -> bytes:
        if not self._emulator.ready:
            raise CapabilityUnavailable("emulator not ready")
        blob = self._emulator.capture_save_data()
        if not blob:
            raise NothingToPersist("emulator reported no save data")
        return bytes(blob)

    def _begin(self, target: SessionState) -> SessionState:
        """Move READY -> target; return the state found."""
        with self._state_lock:
            current = self._state
            if current is SessionState.READY:
                self._state = target
            return current

    def _set_state(self, target: SessionState) -> None:
        with self._state_lock:
            if self._state is not SessionState.TERMINATED:
                self._state = target

    def _report_save(self, outcome: SaveOutcome) -> SaveOutcome:
        if self._save_indicator is None or self.state is SessionState.TERMINATED:
            return outcome
        if outcome in SAVE_LABELS:
            self._save_indicator.show(SAVE_LABELS[outcome])
        return outcome

    def _report_load(self, outcome: LoadOutcome) -> LoadOutcome:
        if self._load_indicator is None or self.state is SessionState.TERMINATED:
            return outcome
        if outcome in LOAD_LABELS:
            self._load_indicator.show(LOAD_LABELS[outcome])
        return outcome
