"""Catalog API client: systems and per-system ROM lists."""
import logging
from typing import List, Optional

import requests

from retrohost.config import API_URL, SAVE_TIMEOUT_SEC
from retrohost.errors import CatalogUnavailable
from retrohost.models.rom import RomRecord, SystemInfo

logger = logging.getLogger(__name__)


class CatalogClient:
    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = SAVE_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _get_json(self, path: str, params: Optional[dict] = None):
        url = f"{self.base_url}{path}"
        try:
            resp = self._session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise CatalogUnavailable(f"GET {url}: {e}") from e
        except ValueError as e:
            raise CatalogUnavailable(f"GET {url}: invalid JSON") from e

    def fetch_systems(self) -> List[SystemInfo]:
        """Systems with at least one ROM."""
        data = self._get_json("/api/systems") or []
        try:
            return [
                SystemInfo(
                    id=item["id"],
                    name=item["name"],
                    core=item["core"],
                    rom_count=int(item.get("romCount") or 0),
                )
                for item in data
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogUnavailable(f"Malformed systems response: {e}") from e

    def fetch_roms(self, system_id: str) -> List[RomRecord]:
        """ROM records for one system, in server order."""
        data = self._get_json("/api/roms", params={"system": system_id}) or []
        out = []
        for item in data:
            try:
                out.append(
                    RomRecord(
                        name=item["name"],
                        file_name=item["fileName"],
                        system=item.get("system") or system_id,
                        tag=item.get("tag") or None,
                    )
                )
            except (KeyError, TypeError):
                logger.warning("Skipping malformed ROM entry: %r", item)
                continue
        return out
