"""Loader for the keyword tables that drive food classification."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from foodkeeper.config import get_settings

logger = logging.getLogger(__name__)

PACKAGED_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _data_dir() -> Path:
    override = get_settings().classification_data_dir
    return Path(override) if override else PACKAGED_DATA_DIR


@lru_cache
def load_table(name: str) -> Any:
    """Load a JSON table by file stem, preferring the configured override directory."""
    path = _data_dir() / f"{name}.json"
    if not path.exists():
        logger.warning(f"Classification table {path} not found, using packaged copy")
        path = PACKAGED_DATA_DIR / f"{name}.json"
    with path.open(encoding="utf-8") as f:
        table = json.load(f)
    logger.debug(f"Loaded classification table '{name}' from {path}")
    return table
