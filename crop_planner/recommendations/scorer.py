"""
Crop suitability scoring: pure arithmetic over one crop and one field.

Score formula (additive, clamped to 0–100)
------------------------------------------
    total = clamp(
        BASE_SCORE                 # 50
        + ph_points                # +25 / +15 / +5 / -20
        + rotation_points          # +15 fresh, -15 recently planted
        - pest_penalty             # 10 or 15 per matching active issue, cap 30
        + resistance_bonus         # +20 when issues exist but none match
        + soil_points              # +10 on soil-type match
    )

Component explanations
----------------------
ph_points:
    In range -> +25.  Otherwise the distance to the *nearer* bound decides:
    <= 0.5 -> +15, <= 1.0 -> +5, further -> -20.  With malformed bounds
    (ph_min > ph_max) nothing is "in range" and the distance rule applies.

rotation_points:
    +15 when the crop is absent from the field's recent plantings window,
    -15 when present.

pest_penalty:
    Each active issue affecting the crop adds 15 (high severity) or 10
    (low/medium).  Capped at 30.

resistance_bonus:
    +20 if the field has at least one active issue and the raw penalty is 0.

soil_points:
    +10 if the field's soil description contains any of the crop's soil types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from crop_planner.models.crop import Crop
from crop_planner.models.field import PestDiseaseRecord
from crop_planner.recommendations.matching import contains_any, matching_issues
from crop_planner.taxonomy.crop_taxonomy import Severity

BASE_SCORE = 50

PH_IDEAL_POINTS = 25
PH_CLOSE_POINTS = 15
PH_MARGINAL_POINTS = 5
PH_FAR_POINTS = -20
PH_CLOSE_TOLERANCE = 0.5
PH_MARGINAL_TOLERANCE = 1.0

ROTATION_POINTS = 15

_SEVERITY_PENALTY: dict[Severity, int] = {
    Severity.LOW:    10,
    Severity.MEDIUM: 10,
    Severity.HIGH:   15,
}
MAX_PEST_PENALTY = 30
RESISTANCE_BONUS = 20

SOIL_MATCH_POINTS = 10


@dataclass(frozen=True)
class ScoreComponents:
    """All components of a crop suitability score.

    Attributes:
        ph_points:        pH compatibility contribution.
        rotation_points:  +15 or -15 depending on recent plantings.
        pest_penalty:     Capped susceptibility penalty (0–30), subtracted.
        raw_pest_penalty: Uncapped penalty, kept for diagnostics.
        resistance_bonus: 0 or 20.
        soil_points:      0 or 10.
    """

    ph_points:        int
    rotation_points:  int
    pest_penalty:     int
    raw_pest_penalty: int
    resistance_bonus: int
    soil_points:      int

    @property
    def unclamped(self) -> int:
        return (
            BASE_SCORE
            + self.ph_points
            + self.rotation_points
            - self.pest_penalty
            + self.resistance_bonus
            + self.soil_points
        )

    @property
    def total(self) -> int:
        """Final score clamped to ``[0, 100]``."""
        return clamp(self.unclamped, 0, 100)


def ph_distance(ph: float, crop: Crop) -> float:
    """Distance from ``ph`` to the nearer of the crop's two pH bounds."""
    return min(abs(ph - crop.ph_min), abs(ph - crop.ph_max))


def ph_points(ph: float, crop: Crop) -> int:
    if crop.ph_in_range(ph):
        return PH_IDEAL_POINTS
    diff = ph_distance(ph, crop)
    if diff <= PH_CLOSE_TOLERANCE:
        return PH_CLOSE_POINTS
    if diff <= PH_MARGINAL_TOLERANCE:
        return PH_MARGINAL_POINTS
    return PH_FAR_POINTS


def soil_type_matches(soil_type: str | None, crop: Crop) -> bool:
    """``True`` if the field's soil text contains any of the crop's soil types."""
    return contains_any(soil_type, crop.soil_types)


def susceptibility_penalty(crop: Crop, active_issues: Sequence[PestDiseaseRecord]) -> int:
    """Uncapped sum of per-issue penalties for issues affecting ``crop``."""
    return sum(_SEVERITY_PENALTY[i.severity] for i in matching_issues(crop, active_issues))


def compute_score(
    crop:              Crop,
    field_ph:          float,
    soil_type:         str | None,
    recently_planted:  bool,
    active_issues:     Sequence[PestDiseaseRecord],
) -> ScoreComponents:
    """Compute every score component for one crop in one field.

    Args:
        crop:             Candidate crop.
        field_ph:         Field's current soil pH.
        soil_type:        Field's soil description (may be ``None``).
        recently_planted: Whether the crop is in the field's recent window.
        active_issues:    The field's unresolved pest/disease records.

    Returns:
        ScoreComponents; use ``.total`` for the clamped score.
    """
    raw_penalty = susceptibility_penalty(crop, active_issues)
    bonus = RESISTANCE_BONUS if active_issues and raw_penalty == 0 else 0

    return ScoreComponents(
        ph_points=ph_points(field_ph, crop),
        rotation_points=-ROTATION_POINTS if recently_planted else ROTATION_POINTS,
        pest_penalty=min(raw_penalty, MAX_PEST_PENALTY),
        raw_pest_penalty=raw_penalty,
        resistance_bonus=bonus,
        soil_points=SOIL_MATCH_POINTS if soil_type_matches(soil_type, crop) else 0,
    )


# ── Helper ────────────────────────────────────────────────────────────────────

def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))
