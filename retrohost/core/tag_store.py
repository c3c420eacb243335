"""Load ROM tags (JSON): file name -> free-form grouping label."""
import json
import logging
from pathlib import Path
from typing import Dict

from retrohost.config import DATA_DIR, TAGS_FILE

logger = logging.getLogger(__name__)


def load_tags(data_dir: Path = DATA_DIR) -> Dict[str, str]:
    """Load tags.json, e.g. {"Pokemon Fire Red.gba": "RPG"}. Missing or invalid file -> {}."""
    p = data_dir / TAGS_FILE
    if not p.exists():
        return {}
    try:
        data = json.loads(p.read_text())
    except OSError as e:
        logger.warning("Failed to read %s: %s", p, e)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse %s: %s", p, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected an object of file name -> tag", p)
        return {}
    return {str(k): str(v) for k, v in data.items() if isinstance(v, str)}
