"""Knowledge directory lookup and JSON loading."""

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def default_knowledge_dir() -> Path:
    """Repository-level ``knowledge/`` directory."""
    return Path(__file__).parents[4] / "knowledge"


def load_knowledge_file(knowledge_dir: Path, filename: str) -> Optional[dict]:
    """Load one knowledge JSON file, or None (with a warning) if it is missing or unreadable."""
    path = Path(knowledge_dir) / filename
    if not path.exists():
        logger.warning(f"Knowledge file not found: {path}")
        return None
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"Knowledge file {path} is not valid JSON: {e}")
        return None
