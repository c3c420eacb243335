"""HTTP save store: GET/POST /api/saves/{system}/{rom} via requests."""
import logging
import threading
from typing import Optional
from urllib.parse import quote

import requests

from retrohost.config import API_URL, SAVE_TIMEOUT_SEC
from retrohost.errors import SaveNotFound, TransportFailure
from retrohost.models.session import SaveKey

logger = logging.getLogger(__name__)

_OCTET_STREAM = {"Content-Type": "application/octet-stream"}


class HttpSaveStore:
    """SaveStore talking to the RetroHost API. Every request is bounded by timeout seconds."""

    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = SAVE_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def url_for(self, key: SaveKey) -> str:
        return f"{self.base_url}/api/saves/{quote(key.system, safe='')}/{quote(key.rom_name, safe='')}"

    def fetch(self, key: SaveKey) -> bytes:
        """Return the stored save. 404 -> SaveNotFound; other errors -> TransportFailure."""
        url = self.url_for(key)
        try:
            resp = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportFailure(f"GET {url}: {e}") from e
        if resp.status_code == 404:
            raise SaveNotFound(f"{key.system}/{key.rom_name}")
        if resp.status_code != 200:
            raise TransportFailure(f"GET {url}: HTTP {resp.status_code}")
        return resp.content

    def store(self, key: SaveKey, blob: bytes) -> None:
        """Replace the stored save; any non-2xx answer is a TransportFailure."""
        url = self.url_for(key)
        try:
            resp = self._session.post(url, data=blob, headers=_OCTET_STREAM, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportFailure(f"POST {url}: {e}") from e
        if not resp.ok:
            raise TransportFailure(f"POST {url}: HTTP {resp.status_code}")

    def send_beacon(self, key: SaveKey, blob: bytes) -> None:
        """Post the save from a non-daemon thread and return at once.

        The interpreter waits for non-daemon threads before exiting, so the
        write completes even if the caller is torn down right after.
        """
        thread = threading.Thread(
            target=_post_quietly,
            args=(self.url_for(key), bytes(blob), self.timeout),
            name=f"save-beacon-{key.system}-{key.rom_name}",
            daemon=False,
        )
        thread.start()


def _post_quietly(url: str, blob: bytes, timeout: float) -> None:
    try:
        resp = requests.post(url, data=blob, headers=_OCTET_STREAM, timeout=timeout)
        if not resp.ok:
            logger.debug("Beacon %s: HTTP %s", url, resp.status_code)
    except requests.RequestException as e:
        logger.debug("Beacon %s: %s", url, e)
