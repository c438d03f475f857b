"""
Record loaders: JSON files exported by the record store → validated models.

The mobile app stores fields, plantings and custom crops as camelCase JSON
(``currentPH``, ``pestDiseaseHistory``, ``cropId``, ``plantDate``, ...).
The models accept those keys through aliases, so the loaders here only
handle file reading, array/object shape checks, and error reporting.

Errors are reported with the offending index, e.g.::

    ValueError: Planting at index 3 failed validation: ...
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from crop_planner.catalog.loader import load_catalog
from crop_planner.models.crop import Crop
from crop_planner.models.field import Field
from crop_planner.models.planting import Planting

log = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def load_field(path: Path) -> Field:
    """Load a single field object from ``path``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a JSON object or fails validation.
    """
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise ValueError(f"Field file {path} must contain a JSON object.")
    try:
        field = Field.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Field in {path} failed validation: {exc}") from exc

    log.debug(
        "Loaded field %s (pH %.1f, %d history records)",
        field.field_id, field.current_ph, len(field.pest_disease_history),
    )
    return field


def parse_plantings(records: list[dict[str, Any]]) -> list[Planting]:
    """Validate raw planting dicts, reporting the first failing index."""
    plantings: list[Planting] = []
    for i, rec in enumerate(records):
        try:
            plantings.append(Planting.model_validate(rec))
        except ValidationError as exc:
            raise ValueError(f"Planting at index {i} failed validation: {exc}") from exc
    return plantings


def load_plantings(path: Path) -> list[Planting]:
    """Load a JSON array of plantings from ``path``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a JSON array or a row is invalid.
    """
    raw = _read_json(path)
    if not isinstance(raw, list):
        raise ValueError(f"Plantings file {path} must contain a JSON array.")
    plantings = parse_plantings(raw)
    log.debug("Loaded %d plantings from %s", len(plantings), path)
    return plantings


def load_crops(path: Path) -> tuple[Crop, ...]:
    """Load a caller-supplied crop catalog (same rules as the packaged one)."""
    return load_catalog(path)
