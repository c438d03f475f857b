"""
Planting recommendation engine: scores every catalog crop for a field,
flags crops to avoid, and finds alternatives resistant to current issues.

Usage flow
----------
1. get_recommendations(field, plantings)
   -> list[PlantingRecommendation]  (every catalog crop, best first)

2. get_crops_to_avoid(field, plantings)
   -> list[CropToAvoid]  (only flagged crops, highest risk first)

3. get_resistant_alternatives(field)
   -> list[PlantingRecommendation]  (empty unless the field has active issues)

All three are pure: they read their arguments, allocate new result objects
and never mutate inputs.  ``available_crops=None`` selects the packaged
catalog.  Recency windows ("months since") are measured against ``as_of``,
which defaults to today's UTC date; pass it explicitly for reproducible
output.

Ordering
--------
Results are sorted with Python's stable ``sorted``, so crops with equal
scores (or equal risk levels) keep their catalog order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from crop_planner.catalog.loader import default_catalog
from crop_planner.config import RecommendationConfig
from crop_planner.models.crop import Crop
from crop_planner.models.field import Field, PestDiseaseRecord
from crop_planner.models.planting import Planting
from crop_planner.models.recommendation import CropToAvoid, PlantingRecommendation
from crop_planner.recommendations.matching import issue_affects_crop, matching_issues
from crop_planner.recommendations.rotation import is_good_rotation, legume_feeds_next
from crop_planner.recommendations.scorer import clamp, compute_score, soil_type_matches
from crop_planner.taxonomy.crop_taxonomy import (
    RISK_ORDER,
    RiskLevel,
    Severity,
    max_risk,
)
from crop_planner.utils.time_utils import months_since, today

log = logging.getLogger(__name__)

_DEFAULT_CONFIG = RecommendationConfig()

RESISTANT_BASE_SCORE = 85
RESISTANT_POINTS_PER_ISSUE = 5
PH_AVOID_TOLERANCE = 0.5


@dataclass(frozen=True)
class FieldHistory:
    """Planting and pest/disease history of one field, prepared for scoring.

    Attributes:
        recent_plantings:   Most recent plantings on the field, newest first.
        recent_crop_ids:    Crop ids of ``recent_plantings`` (newest first).
        active_issues:      Unresolved pest/disease records.
        historical_issues:  Every pest/disease record, resolved or not.
    """

    recent_plantings:  tuple[Planting, ...]
    recent_crop_ids:   tuple[str, ...]
    active_issues:     tuple[PestDiseaseRecord, ...]
    historical_issues: tuple[PestDiseaseRecord, ...]

    @property
    def last_crop_id(self) -> Optional[str]:
        return self.recent_crop_ids[0] if self.recent_crop_ids else None

    def last_planting_of(self, crop_id: str) -> Optional[Planting]:
        """Most recent planting of ``crop_id`` within the recent window."""
        return next((p for p in self.recent_plantings if p.crop_id == crop_id), None)


def build_field_history(
    field: Field,
    all_plantings: Sequence[Planting],
    window: int = _DEFAULT_CONFIG.recent_plantings_window,
) -> FieldHistory:
    """Filter plantings to ``field``, newest first, and split its issue history.

    Plantings sharing a date keep their input order.
    """
    field_plantings = sorted(
        (p for p in all_plantings if p.field_id == field.field_id),
        key=lambda p: p.plant_date,
        reverse=True,
    )
    recent = tuple(field_plantings[:window])
    return FieldHistory(
        recent_plantings=recent,
        recent_crop_ids=tuple(p.crop_id for p in recent),
        active_issues=tuple(field.active_issues),
        historical_issues=tuple(field.pest_disease_history),
    )


# ── get_recommendations ───────────────────────────────────────────────────────

def get_recommendations(
    field:           Field,
    all_plantings:   Sequence[Planting],
    available_crops: Optional[Sequence[Crop]] = None,
    *,
    as_of:  Optional[date] = None,
    config: Optional[RecommendationConfig] = None,
) -> list[PlantingRecommendation]:
    """Score every catalog crop for ``field``.

    Args:
        field:           Field to plant.
        all_plantings:   Plantings for any field; filtered by ``field.field_id``.
        available_crops: Crop catalog; ``None`` uses the packaged catalog.
        as_of:           Reference date for recency windows (default: today).
        config:          Window settings (default: ``RecommendationConfig()``).

    Returns:
        One ``PlantingRecommendation`` per crop, sorted by score descending.
    """
    crops = _resolve_crops(available_crops)
    cfg = config or _DEFAULT_CONFIG
    as_of = as_of or today()
    history = build_field_history(field, all_plantings, cfg.recent_plantings_window)
    recently_planted = set(history.recent_crop_ids)

    last_crop = _find_crop(crops, history.last_crop_id)

    recommendations: list[PlantingRecommendation] = []
    for crop in crops:
        components = compute_score(
            crop=crop,
            field_ph=field.current_ph,
            soil_type=field.soil_type,
            recently_planted=crop.crop_id in recently_planted,
            active_issues=history.active_issues,
        )
        reasons:  list[str] = []
        warnings: list[str] = []
        benefits: list[str] = []

        reason, warning = _ph_messages(field.current_ph, crop)
        if reason:
            reasons.append(reason)
        if warning:
            warnings.append(warning)

        # Rotation
        if last_crop is not None and is_good_rotation(last_crop, crop):
            benefits.append(f"Excellent rotation after {last_crop.name}")
            reasons.append("Follows crop rotation best practices")

        if last_crop is not None and crop.crop_id in recently_planted:
            previous = history.last_planting_of(crop.crop_id)
            if previous is not None:
                elapsed = months_since(previous.plant_date, as_of)
                if elapsed < cfg.replant_warning_months:
                    warnings.append(
                        f"Recently planted {elapsed} months ago - may deplete soil"
                    )

        if last_crop is not None and legume_feeds_next(last_crop, crop):
            benefits.append("Benefits from nitrogen fixed by previous legume crop")

        # Pest and disease
        pest_warnings = _pest_disease_warnings(crop, history, as_of, cfg)
        warnings.extend(pest_warnings)
        if history.active_issues and not matching_issues(crop, history.active_issues):
            benefits.append("Not susceptible to current field pest/disease issues")

        if soil_type_matches(field.soil_type, crop):
            reasons.append(f"Compatible with {field.soil_type} soil")

        if crop.recommended_cover_crops:
            benefits.append(
                "Can be followed by cover crops: "
                + ", ".join(crop.recommended_cover_crops[:2])
            )

        recommendations.append(
            PlantingRecommendation(
                crop_id=crop.crop_id,
                crop_name=crop.name,
                score=components.total,
                reasons=tuple(reasons),
                warnings=tuple(warnings),
                benefits=tuple(benefits),
            )
        )

    log.debug(
        "Scored %d crops for field %s (%d recent plantings, %d active issues)",
        len(recommendations), field.field_id,
        len(history.recent_plantings), len(history.active_issues),
    )
    return sorted(recommendations, key=lambda r: -r.score)


# ── get_crops_to_avoid ────────────────────────────────────────────────────────

def get_crops_to_avoid(
    field:           Field,
    all_plantings:   Sequence[Planting],
    available_crops: Optional[Sequence[Crop]] = None,
    *,
    as_of:  Optional[date] = None,
    config: Optional[RecommendationConfig] = None,
) -> list[CropToAvoid]:
    """Flag crops that are risky to plant in ``field``.

    Reasons come from active issues affecting the crop, resolved issues seen
    within ``config.avoid_history_months``, and a pH more than 0.5 outside
    the crop's range.  ``all_plantings`` is accepted for signature parity
    with ``get_recommendations``; planting history does not flag crops.

    Returns:
        Flagged crops only, sorted by risk level (high first).
    """
    crops = _resolve_crops(available_crops)
    cfg = config or _DEFAULT_CONFIG
    as_of = as_of or today()

    active = field.active_issues
    recent_resolved = [
        issue for issue in field.pest_disease_history
        if not issue.is_active
        and months_since(issue.date, as_of) < cfg.avoid_history_months
    ]

    flagged: list[CropToAvoid] = []
    for crop in crops:
        reasons: list[str] = []
        risk = RiskLevel.LOW

        for issue in active:
            if issue_affects_crop(issue, crop):
                reasons.append(f"Susceptible to active {issue.type.value}: {issue.name}")
                issue_risk = RiskLevel.HIGH if issue.severity == Severity.HIGH else RiskLevel.MEDIUM
                risk = max_risk(risk, issue_risk)

        for issue in recent_resolved:
            if issue_affects_crop(issue, crop):
                reasons.append(
                    f"History of {issue.name} ({months_since(issue.date, as_of)} months ago)"
                )
                risk = max_risk(risk, RiskLevel.MEDIUM)

        if (
            field.current_ph < crop.ph_min - PH_AVOID_TOLERANCE
            or field.current_ph > crop.ph_max + PH_AVOID_TOLERANCE
        ):
            reasons.append(
                f"pH {field.current_ph:.1f} is outside acceptable range "
                f"({crop.ph_range_label()})"
            )
            risk = max_risk(risk, RiskLevel.MEDIUM)

        if reasons:
            flagged.append(
                CropToAvoid(
                    crop_id=crop.crop_id,
                    crop_name=crop.name,
                    reasons=tuple(reasons),
                    risk_level=risk,
                )
            )

    log.debug("Flagged %d of %d crops to avoid for field %s",
              len(flagged), len(crops), field.field_id)
    return sorted(flagged, key=lambda c: -RISK_ORDER[c.risk_level])


# ── get_resistant_alternatives ────────────────────────────────────────────────

def get_resistant_alternatives(
    field:           Field,
    available_crops: Optional[Sequence[Crop]] = None,
) -> list[PlantingRecommendation]:
    """Crops unaffected by every active pest/disease issue on ``field``.

    Each survivor scores ``85 + 5 * <active issues>`` (clamped to 100).

    Returns:
        Empty list when the field has no active issues; otherwise resistant
        crops sorted by score descending.
    """
    active = field.active_issues
    if not active:
        return []

    crops = _resolve_crops(available_crops)
    alternatives: list[PlantingRecommendation] = []
    for crop in crops:
        if any(issue_affects_crop(issue, crop) for issue in active):
            continue

        benefits = tuple(f"Not susceptible to {issue.name}" for issue in active)
        reasons = ["Resistant to current field issues"]
        if crop.ph_in_range(field.current_ph):
            reasons.append(f"pH compatible ({field.current_ph:.1f})")

        alternatives.append(
            PlantingRecommendation(
                crop_id=crop.crop_id,
                crop_name=crop.name,
                score=clamp(
                    RESISTANT_BASE_SCORE + RESISTANT_POINTS_PER_ISSUE * len(benefits), 0, 100
                ),
                reasons=tuple(reasons),
                warnings=(),
                benefits=benefits,
            )
        )

    log.debug("Found %d resistant alternatives for field %s (%d active issues)",
              len(alternatives), field.field_id, len(active))
    return sorted(alternatives, key=lambda r: -r.score)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _resolve_crops(available_crops: Optional[Sequence[Crop]]) -> Sequence[Crop]:
    return default_catalog() if available_crops is None else available_crops


def _find_crop(crops: Sequence[Crop], crop_id: Optional[str]) -> Optional[Crop]:
    if crop_id is None:
        return None
    return next((c for c in crops if c.crop_id == crop_id), None)


def _ph_messages(ph: float, crop: Crop) -> tuple[Optional[str], Optional[str]]:
    """(reason, warning) for the pH factor; exactly one is set."""
    if crop.ph_in_range(ph):
        return f"pH {ph:.1f} is ideal for {crop.name}", None
    if ph < crop.ph_min:
        return None, f"Soil pH {ph:.1f} is too acidic (needs {crop.ph_range_label()})"
    return None, f"Soil pH {ph:.1f} is too alkaline (needs {crop.ph_range_label()})"


def _pest_disease_warnings(
    crop:    Crop,
    history: FieldHistory,
    as_of:   date,
    cfg:     RecommendationConfig,
) -> list[str]:
    """Warnings for active issues plus recently resolved ones affecting ``crop``."""
    warnings: list[str] = []
    for issue in matching_issues(crop, history.active_issues):
        warnings.append(
            f"Susceptible to active {issue.type.value}: {issue.name} "
            f"({issue.severity.value} severity)"
        )

    for issue in history.historical_issues:
        if issue.is_active:
            continue
        elapsed = months_since(issue.date, as_of)
        if elapsed < cfg.recent_history_months and issue_affects_crop(issue, crop):
            warnings.append(f"Recent history of {issue.name} ({elapsed} months ago)")
    return warnings
