"""
Recommendation engine output models.

``PlantingRecommendation`` is a scored crop suggestion with the reasons,
warnings and benefits that explain the score.  ``CropToAvoid`` is a crop the
grower should not plant in the field, with the worst ``RiskLevel`` found.

Both models are frozen and immediately renderable: every string is already
worded for display.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from crop_planner.taxonomy.crop_taxonomy import RiskLevel


class PlantingRecommendation(BaseModel):
    """Suitability score and explanation for one crop in one field.

    Attributes:
        crop_id: Catalog id of the recommended crop.
        crop_name: Display name of the crop.
        score: Suitability in ``[0, 100]``; higher is better.
        reasons: Neutral/positive explanations of the score.
        warnings: Risks the grower should know about.
        benefits: Positive factors beyond the score.
    """

    model_config = ConfigDict(frozen=True)

    crop_id: str
    crop_name: str
    score: int
    reasons: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    benefits: tuple[str, ...] = ()

    @field_validator("score")
    @classmethod
    def validate_score_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"score must be in [0, 100], got {v}.")
        return v


class CropToAvoid(BaseModel):
    """A crop flagged as risky for a field.

    Attributes:
        crop_id: Catalog id of the crop.
        crop_name: Display name of the crop.
        reasons: Why the crop is flagged; never empty.
        risk_level: Worst risk implied by any reason.
    """

    model_config = ConfigDict(frozen=True)

    crop_id: str
    crop_name: str
    reasons: tuple[str, ...]
    risk_level: RiskLevel

    @field_validator("reasons")
    @classmethod
    def validate_reasons_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("reasons must not be empty.")
        return v
