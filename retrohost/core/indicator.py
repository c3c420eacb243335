"""Transient status text for the Save/Load controls; resets to idle text after a delay."""
import threading
from typing import Callable, Optional

from retrohost.config import STATUS_CLEAR_SEC
from retrohost.models.session import LoadOutcome, SaveOutcome

SAVE_LABELS = {
    SaveOutcome.SAVED: "Saved!",
    SaveOutcome.NOTHING_TO_SAVE: "No data",
    SaveOutcome.NOT_READY: "Not ready",
    SaveOutcome.FAILED: "Error",
    SaveOutcome.BUSY: "Busy",
}

LOAD_LABELS = {
    LoadOutcome.LOADED: "Loaded!",
    LoadOutcome.NO_SAVE: "No save",
    LoadOutcome.NOT_READY: "Not ready",
    LoadOutcome.FAILED: "Error",
    LoadOutcome.BUSY: "Busy",
}

SAVING_TEXT = "Saving..."
LOADING_TEXT = "Loading..."


class StatusIndicator:
    """Shows a status text, then falls back to idle_text after clear_after seconds.

    A newer show() replaces the pending reset. on_change is called with every new text.
    """

    def __init__(
        self,
        idle_text: str,
        clear_after: float = STATUS_CLEAR_SEC,
        on_change: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.idle_text = idle_text
        self._clear_after = clear_after
        self._on_change = on_change
        self._text = idle_text
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def text(self) -> str:
        with self._lock:
            return self._text

    def show(self, text: str, transient: bool = True) -> None:
        """Set text; if transient, schedule the reset to idle text."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._text = text
            if transient:
                self._timer = threading.Timer(self._clear_after, self.clear)
                self._timer.daemon = True
                self._timer.start()
        self._notify(text)

    def clear(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._text = self.idle_text
        self._notify(self.idle_text)

    def cancel(self) -> None:
        """Drop any pending reset without changing the text."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _notify(self, text: str) -> None:
        if self._on_change is not None:
            self._on_change(text)
