"""
Crop catalog loader: JSON → validated ``Crop`` tuple.

Responsibilities
----------------
1. Load the packaged reference catalog (``crop_planner/catalog/crops.json``)
   or any caller-supplied catalog JSON file.
2. Validate every row into a frozen ``Crop``.
3. Reject duplicate crop ids; warn (but keep) rows with inverted pH bounds.

The packaged catalog is parsed once per process and cached; the returned
tuple and its ``Crop`` members are immutable, so sharing it across callers
is safe.

Validation rules
----------------
- The file must contain a JSON array.
- Entries whose only keys start with ``_comment`` are skipped.
- Duplicate ``crop_id`` values are rejected.
- ``ph_min > ph_max`` is logged as a warning; scoring still handles it.

Usage
-----
    from crop_planner.catalog.loader import default_catalog, load_catalog

    crops = default_catalog()
    custom = load_catalog(Path("my_crops.json"))
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from crop_planner.models.crop import Crop

log = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "crops.json"


def parse_catalog_records(records: list[dict[str, Any]]) -> tuple[Crop, ...]:
    """Validate raw catalog dicts into ``Crop`` objects.

    Raises:
        ValueError: On a duplicate crop id or an invalid row (the message
            names the offending index).
    """
    crops: list[Crop] = []
    seen_ids: set[str] = set()
    for i, rec in enumerate(records):
        try:
            crop = Crop.model_validate(rec)
        except ValidationError as exc:
            raise ValueError(f"Crop at index {i} failed validation: {exc}") from exc

        if crop.crop_id in seen_ids:
            raise ValueError(f"Duplicate crop id '{crop.crop_id}' at index {i}.")
        seen_ids.add(crop.crop_id)

        if not crop.has_valid_ph_range:
            log.warning(
                "Crop '%s' has ph_min %.1f > ph_max %.1f; it will never score as pH-ideal.",
                crop.crop_id, crop.ph_min, crop.ph_max,
            )
        crops.append(crop)
    return tuple(crops)


def load_catalog(path: Path) -> tuple[Crop, ...]:
    """Load and validate a catalog JSON file.

    Args:
        path: JSON file containing an array of crop objects.

    Returns:
        Tuple of ``Crop`` in file order (file order is the tie-break order
        for equal scores).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the JSON is not an array or a row is invalid.
    """
    log.debug("Loading crop catalog from %s", path)
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Crop catalog {path} must contain a JSON array.")

    records = [r for r in raw if not _is_comment(r)]
    crops = parse_catalog_records(records)
    log.info("Loaded %d crops from %s", len(crops), path)
    return crops


@lru_cache(maxsize=1)
def default_catalog() -> tuple[Crop, ...]:
    """The packaged reference catalog (parsed once, then cached)."""
    return load_catalog(DEFAULT_CATALOG_PATH)


def resolve_catalog(path: Optional[str | Path] = None) -> tuple[Crop, ...]:
    """Return the catalog at ``path``, or the packaged one when ``path`` is ``None``."""
    if path is None:
        return default_catalog()
    return load_catalog(Path(path))


def _is_comment(rec: Any) -> bool:
    return isinstance(rec, dict) and bool(rec) and all(k.startswith("_comment") for k in rec)
