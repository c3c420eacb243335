"""Save data: raw binary GET/POST/PUT per system + ROM name (stored as .sav files)."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from starlette.concurrency import run_in_threadpool

from retrohost.api.state import AppState, get_state
from retrohost.config import MAX_SAVE_BYTES
from retrohost.core.save_store import read_save, save_path, write_save

router = APIRouter()
logger = logging.getLogger(__name__)


def _check_key(system: str, rom: str, state: AppState) -> None:
    try:
        save_path(system, rom, state.data_dir)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid path")


@router.get("/{system}/{rom}")
def get_save(system: str, rom: str, state: AppState = Depends(get_state)):
    """Return the save as application/octet-stream, or 404 if none exists."""
    _check_key(system, rom, state)
    data = read_save(system, rom, state.data_dir)
    if data is None:
        raise HTTPException(status_code=404, detail="no save found")
    return Response(content=data, media_type="application/octet-stream")


@router.api_route("/{system}/{rom}", methods=["POST", "PUT"])
async def put_save(system: str, rom: str, request: Request, state: AppState = Depends(get_state)):
    """Replace the save with the raw request body (last write wins)."""
    _check_key(system, rom, state)
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > MAX_SAVE_BYTES:
            raise HTTPException(status_code=413, detail="save too large")
    try:
        await run_in_threadpool(write_save, system, rom, bytes(body), state.data_dir)
    except OSError as e:
        logger.warning("Writing save %s/%s failed: %s", system, rom, e)
        raise HTTPException(status_code=500, detail="failed to write save")
    return {"status": "ok"}
