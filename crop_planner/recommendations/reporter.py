"""
Recommendation report writer: CSV and JSON output for engine results.

All functions are pure I/O over in-memory result lists. The engine never
calls them; the CLI (or any other caller) does.

Output files
------------
  <output_dir>/
    recommendations_{field_id}_{date}.csv   -- one row per crop, best first
    recommendations_{field_id}_{date}.json  -- same data, structured JSON
    avoid_{field_id}_{date}.json            -- crops to avoid
"""

from __future__ import annotations

import csv
import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Sequence

from crop_planner.models.recommendation import CropToAvoid, PlantingRecommendation
from crop_planner.utils.time_utils import today

logger = logging.getLogger(__name__)

_LIST_SEPARATOR = " | "
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def file_label(field_id: str) -> str:
    """Filesystem-safe form of ``field_id`` for report filenames.

    Runs of characters other than letters, digits, ``-`` and ``_`` become
    ``_``, so ids like ``"../etc"`` cannot escape ``output_dir``.
    """
    return _UNSAFE_CHARS.sub("_", field_id).strip("_") or "field"


def write_recommendations_csv(
    recommendations: Sequence[PlantingRecommendation],
    output_dir: Path,
    field_id: str,
    run_date: date | None = None,
) -> Path:
    """Write scored recommendations to a CSV file.

    Columns: rank, crop_id, crop_name, score, reasons, warnings, benefits.
    List columns are joined with ``" | "``.

    Args:
        recommendations: Output of ``get_recommendations()``, already sorted.
        output_dir:      Directory to write the file (created if missing).
        field_id:        Used in the filename.
        run_date:        Date label for the filename. Defaults to today.

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"recommendations_{file_label(field_id)}_{run_date}.csv"

    fieldnames = ["rank", "crop_id", "crop_name", "score", "reasons", "warnings", "benefits"]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for rank, rec in enumerate(recommendations, start=1):
            writer.writerow(
                {
                    "rank":      rank,
                    "crop_id":   rec.crop_id,
                    "crop_name": rec.crop_name,
                    "score":     rec.score,
                    "reasons":   _LIST_SEPARATOR.join(rec.reasons),
                    "warnings":  _LIST_SEPARATOR.join(rec.warnings),
                    "benefits":  _LIST_SEPARATOR.join(rec.benefits),
                }
            )

    logger.info("Recommendation CSV written: %s (%d rows)", csv_path, len(recommendations))
    return csv_path


def write_recommendations_json(
    recommendations: Sequence[PlantingRecommendation],
    output_dir: Path,
    field_id: str,
    run_date: date | None = None,
) -> Path:
    """Write scored recommendations as structured JSON.

    Structure::

        {
          "field_id": "north-bed",
          "run_date": "2025-03-01",
          "recommendations": [
            {"rank": 1, "crop_id": "...", "crop_name": "...", "score": 90,
             "reasons": [...], "warnings": [...], "benefits": [...]},
            ...
          ]
        }

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"recommendations_{file_label(field_id)}_{run_date}.json"

    payload = {
        "field_id": field_id,
        "run_date": run_date.isoformat(),
        "recommendations": [
            {"rank": rank, **rec.model_dump(mode="json")}
            for rank, rec in enumerate(recommendations, start=1)
        ],
    }
    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    logger.info("Recommendation JSON written: %s", json_path)
    return json_path


def write_crops_to_avoid_json(
    crops_to_avoid: Sequence[CropToAvoid],
    output_dir: Path,
    field_id: str,
    run_date: date | None = None,
) -> Path:
    """Write crops-to-avoid results as structured JSON.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"avoid_{file_label(field_id)}_{run_date}.json"

    payload = {
        "field_id": field_id,
        "run_date": run_date.isoformat(),
        "crops_to_avoid": [c.model_dump(mode="json") for c in crops_to_avoid],
    }
    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    logger.info("Crops-to-avoid JSON written: %s (%d crops)", json_path, len(crops_to_avoid))
    return json_path
