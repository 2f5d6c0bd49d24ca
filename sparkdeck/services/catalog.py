"""
Static catalog loading.

The catalog is a JSON array of idea records (the same shape the
/api/ideas endpoint serves). Records that fail validation are skipped
with a warning so one bad entry never hides the rest of the catalog.
"""

import json
from pathlib import Path
from typing import Iterable, List, Optional

from sparkdeck.config import SAMPLE_IDEAS_PATH
from sparkdeck.logging import get_logger
from sparkdeck.models.idea import Idea

logger = get_logger(__name__)


def load_catalog_records(path: Optional[str] = None) -> List[dict]:
    """
    Read the raw catalog records from a JSON file.

    Args:
        path: Catalog file (defaults to SAMPLE_IDEAS_PATH).

    Returns:
        List of record dicts.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a JSON array.
    """
    catalog_path = Path(path or SAMPLE_IDEAS_PATH)
    with catalog_path.open(encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Catalog must be a JSON array: {catalog_path}")
    return data


def parse_ideas(records: Iterable) -> List[Idea]:
    """Convert records to Ideas, skipping (and logging) malformed ones."""
    ideas: List[Idea] = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("idea_record_skipped", position=position, error="record is not an object")
            continue
        try:
            ideas.append(Idea.from_dict(record))
        except (TypeError, ValueError) as e:
            logger.warning("idea_record_skipped", position=position, id=record.get("id"), error=str(e))
    return ideas


def load_catalog(path: Optional[str] = None) -> List[Idea]:
    """Load and parse the catalog file into Ideas."""
    ideas = parse_ideas(load_catalog_records(path))
    logger.debug("catalog_read", path=str(path or SAMPLE_IDEAS_PATH), count=len(ideas))
    return ideas
