"""IO helpers for reading already-fetched bid records from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from .models import Bid
from .normalize import normalize_bids

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json"}


def load_bid_records(path: Path) -> List[Dict[str, Any]]:
    """Read raw bid mappings from a YAML or JSON file.

    The document is either a list of bids or a mapping with a ``bids`` list.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Bid file '{path}' does not exist")

    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported file extension '{ext}' for bid file '{path}'")

    logger.info("Loading bids from %s", path)
    with path.open("r", encoding="utf-8") as stream:
        if ext == ".json":
            document = json.load(stream)
        else:
            document = yaml.safe_load(stream)

    if isinstance(document, Mapping):
        document = document.get("bids")
    if document is None:
        return []
    if not isinstance(document, list):
        raise ValueError(f"Bid file '{path}' must contain a list of bids")

    records: List[Dict[str, Any]] = []
    for index, entry in enumerate(document):
        if not isinstance(entry, Mapping):
            logger.warning("Skipping bid #%d in %s: not a mapping", index, path)
            continue
        records.append(dict(entry))
    return records


def load_bids(path: Path) -> List[Bid]:
    """Load and normalize every bid in ``path``, preserving file order."""

    bids = normalize_bids(load_bid_records(path))
    logger.debug("Loaded %d bids from %s", len(bids), path)
    return bids


__all__ = ["load_bid_records", "load_bids"]
