"""Catalog aggregation: flat ROM list -> tag groups in display order.

Names and tags compare case-insensitively with accents folded to their base
letter, so "mario" sorts before "Zelda" and "Érable" next to "Erable". Ties
fall back to the case-folded text and then the raw text, which keeps the order
total and independent of the process locale.
"""
import logging
import unicodedata
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode

from retrohost.core.systems import system_by_id
from retrohost.errors import CatalogUnavailable, ConfigurationError
from retrohost.models.catalog import UNTAGGED, CatalogView, TagGroup
from retrohost.models.rom import RomRecord, SystemInfo
from retrohost.models.session import SessionParams

logger = logging.getLogger(__name__)

EMPTY_STATE_SYSTEMS_FAILED = "Failed to load systems. Is the server running?"
EMPTY_STATE_NO_ROMS = "No ROMs found. Mount your ROM directory to /roms."
EMPTY_STATE_ROMS_FAILED = "Failed to load ROMs."
EMPTY_STATE_NO_ROMS_FOR_SYSTEM = "No ROMs for this system."
EMPTY_STATE_MISSING_PARAMS = "Missing parameters"


def display_key(text: str) -> Tuple[str, str, str]:
    """Sort key for display names and tags."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), text.casefold(), text)


def _rom_key(rom: RomRecord):
    return (display_key(rom.name), display_key(rom.file_name))


def _group_key(tag: str):
    # Untagged always last, whatever its label would sort as
    if tag == UNTAGGED:
        return (1, display_key(""))
    return (0, display_key(tag))


def aggregate(roms: Iterable[RomRecord]) -> CatalogView:
    """Group ROMs by tag; ROMs sorted by name inside each group, tags sorted, untagged last.

    Pure: the input is not modified and equal inputs give equal views.
    """
    groups: Dict[str, List[RomRecord]] = {}
    for rom in sorted(roms, key=_rom_key):
        groups.setdefault(rom.tag or UNTAGGED, []).append(rom)
    return CatalogView(
        groups=tuple(
            TagGroup(tag=tag, roms=tuple(groups[tag]))
            for tag in sorted(groups, key=_group_key)
        )
    )


def player_url(rom: RomRecord, core: Optional[str] = None, host: Optional[str] = None) -> str:
    """Link into the player view for a ROM: /player.html?system=..&rom=..&core=..

    core defaults to the system table's core; host, when given, makes the URL absolute.
    """
    if core is None:
        system = system_by_id(rom.system)
        core = system.core if system else ""
    query = urlencode({"system": rom.system, "rom": rom.file_name, "core": core}, quote_via=quote)
    path = f"/player.html?{query}"
    return f"http://{host}{path}" if host else path


@dataclass(frozen=True)
class CatalogPage:
    """What the library page shows: the system tabs, the active one, and either its grouped ROMs or a message."""

    systems: Tuple[SystemInfo, ...] = ()
    active: Optional[str] = None
    view: Optional[CatalogView] = None
    empty_state: Optional[str] = None


def load_catalog_page(client, system_id: Optional[str] = None) -> CatalogPage:
    """Fetch systems and the ROMs of one of them (system_id, else the first) and aggregate.

    client needs fetch_systems() and fetch_roms(system_id), e.g. CatalogClient.
    CatalogUnavailable is not raised; it becomes the matching empty-state message.
    """
    try:
        systems = tuple(client.fetch_systems())
    except CatalogUnavailable as e:
        logger.warning("Loading systems failed: %s", e)
        return CatalogPage(empty_state=EMPTY_STATE_SYSTEMS_FAILED)
    if not systems:
        return CatalogPage(empty_state=EMPTY_STATE_NO_ROMS)

    active = system_id if any(s.id == system_id for s in systems) else systems[0].id
    try:
        roms = client.fetch_roms(active)
    except CatalogUnavailable as e:
        logger.warning("Loading ROMs for %s failed: %s", active, e)
        return CatalogPage(systems=systems, active=active, empty_state=EMPTY_STATE_ROMS_FAILED)
    if not roms:
        return CatalogPage(systems=systems, active=active, empty_state=EMPTY_STATE_NO_ROMS_FOR_SYSTEM)
    return CatalogPage(systems=systems, active=active, view=aggregate(roms))


def session_params_or_message(query: Mapping[str, str]) -> Tuple[Optional[SessionParams], Optional[str]]:
    """Player entry: (params, None), or (None, message) when system/rom/core are missing."""
    try:
        return SessionParams.from_query(query), None
    except ConfigurationError as e:
        logger.warning("%s", e)
        return None, EMPTY_STATE_MISSING_PARAMS
