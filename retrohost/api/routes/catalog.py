"""Catalog endpoints: systems with ROMs, and the ROM list for one system."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from retrohost.api.state import AppState, get_state
from retrohost.models.rom import RomRecord, SystemInfo

router = APIRouter()
logger = logging.getLogger(__name__)


class SystemOut(BaseModel):
    id: str
    name: str
    core: str
    romCount: int


class RomOut(BaseModel):
    name: str
    fileName: str
    system: str
    tag: str = ""


def _system_to_dict(s: SystemInfo) -> dict:
    return {"id": s.id, "name": s.name, "core": s.core, "romCount": s.rom_count}


def _rom_to_dict(r: RomRecord) -> dict:
    return {"name": r.name, "fileName": r.file_name, "system": r.system, "tag": r.tag or ""}


@router.get("/systems", response_model=List[SystemOut])
def get_systems(state: AppState = Depends(get_state)):
    """List systems that have at least one ROM."""
    try:
        systems = state.get_systems()
    except OSError as e:
        logger.warning("ROM scan failed: %s", e)
        raise HTTPException(status_code=500, detail="failed to scan ROMs")
    return [_system_to_dict(s) for s in systems]


@router.get("/roms", response_model=List[RomOut])
def get_roms(system: Optional[str] = None, state: AppState = Depends(get_state)):
    """List ROMs for ?system=<id>; unknown systems give an empty list."""
    if not system:
        raise HTTPException(status_code=400, detail="system parameter required")
    try:
        roms = state.get_roms(system)
    except OSError as e:
        logger.warning("ROM scan failed: %s", e)
        raise HTTPException(status_code=500, detail="failed to scan ROMs")
    return [_rom_to_dict(r) for r in roms]
