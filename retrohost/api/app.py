"""FastAPI app, CORS, static mounts and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from retrohost.api.state import AppState, get_state
from retrohost.config import EMULATORJS_DIR, FRONTEND_DIR, ensure_data_dir

# Import routes after state to avoid circular imports
from retrohost.api.routes import catalog, roms, saves

__all__ = ["app", "AppState", "get_state", "create_app"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = get_state()
    try:
        ensure_data_dir(state.data_dir)
    except OSError as e:
        logger.warning("Data directory %s not writable: %s", state.data_dir, e)
    state.load_tags()
    logger.info("ROM directory: %s", state.rom_dir)
    logger.info("Data directory: %s", state.data_dir)
    yield


def create_app(mount_static: bool = True) -> FastAPI:
    app = FastAPI(
        title="RetroHost API",
        description="Self-hosted retro gaming: ROM catalog, ROM files and save data",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(catalog.router, prefix="/api", tags=["catalog"])
    app.include_router(saves.router, prefix="/api/saves", tags=["saves"])
    app.include_router(roms.router, prefix="/roms", tags=["roms"])

    if mount_static:
        if EMULATORJS_DIR.is_dir():
            app.mount("/emulatorjs", StaticFiles(directory=EMULATORJS_DIR), name="emulatorjs")
        else:
            logger.warning("EmulatorJS directory not found at %s", EMULATORJS_DIR)
        if FRONTEND_DIR.is_dir():
            # Catch-all: index.html, player.html, css/, js/
            app.mount("/", StaticFiles(directory=FRONTEND_DIR, html=True), name="frontend")
        else:
            logger.warning("Frontend directory not found at %s", FRONTEND_DIR)
    return app


app = create_app()
