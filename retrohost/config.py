"""Configuration: env, library paths, save-store limits and timeouts."""
import os
from pathlib import Path

# Base paths (project root = parent of retrohost package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so ROM_DIR etc. are set
try:
    from dotenv import load_dotenv
    load_dotenv(BASE_DIR / ".env")
except ImportError:
    pass

# Library
ROM_DIR = Path(os.getenv("ROM_DIR", "/roms"))
DATA_DIR = Path(os.getenv("DATA_DIR", "/data"))
SAVES_SUBDIR = "saves"
COVERS_SUBDIR = "covers"
TAGS_FILE = "tags.json"

# Static assets (mounted only when the directory exists)
FRONTEND_DIR = Path(os.getenv("FRONTEND_DIR", str(BASE_DIR / "frontend")))
EMULATORJS_DIR = Path(os.getenv("EMULATORJS_DIR", str(BASE_DIR / "emulatorjs")))

# API
API_HOST = os.getenv("RETROHOST_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT", "8080"))
# External address used in printed player URLs (default localhost:PORT)
HOST_ADDR = os.getenv("HOST_ADDR", "")
# Base URL the HTTP clients talk to
API_URL = os.getenv("RETROHOST_API_URL", f"http://localhost:{API_PORT}")

# Save store
SAVE_TIMEOUT_SEC = float(os.getenv("RETROHOST_SAVE_TIMEOUT_SEC", "5"))
MAX_SAVE_BYTES = int(os.getenv("RETROHOST_MAX_SAVE_BYTES", str(10 << 20)))

# Save/Load button text resets after this many seconds
STATUS_CLEAR_SEC = float(os.getenv("RETROHOST_STATUS_CLEAR_SEC", "2.0"))


def host_addr() -> str:
    return HOST_ADDR or f"localhost:{API_PORT}"


def ensure_data_dir(data_dir: Path = DATA_DIR) -> None:
    data_dir.mkdir(parents=True, exist_ok=True)
