"""ROM file download: /roms/{system}/{filename}."""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from retrohost.api.state import AppState, get_state
from retrohost.core.scanner import find_rom_file

router = APIRouter()


@router.get("/{system}/{filename}")
def get_rom(system: str, filename: str, state: AppState = Depends(get_state)):
    """Serve a ROM by file name; it may live anywhere below the ROM directory."""
    path = find_rom_file(state.rom_dir, filename)
    if path is None:
        raise HTTPException(status_code=404, detail="ROM not found")
    return FileResponse(path, media_type="application/octet-stream", filename=path.name)
