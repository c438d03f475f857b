"""
Crop catalog entry.

``Crop`` is immutable reference data: the built-in catalog ships as JSON
under ``crop_planner/catalog/`` and callers may supply their own list.

The pH bounds are **not** cross-validated.  A catalog row with
``ph_min > ph_max`` is accepted so that scoring degrades (the pH branch
always warns) instead of failing; ``has_valid_ph_range`` lets loaders
flag such rows.

Field names are snake_case; camelCase aliases (``phMin``, ``commonPests``,
``recommendedCoverCrops``, ...) are accepted so records exported by the
mobile app can be validated directly.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from crop_planner.taxonomy.crop_taxonomy import CropCategory


class Crop(BaseModel):
    """A crop the engine can recommend.

    Attributes:
        crop_id: Stable catalog identifier, e.g. ``"tomato"``.
        name: Display name, e.g. ``"Tomato"``.  Rotation heuristics match
            keywords against this string.
        category: ``CropCategory`` grouping.
        ph_min: Lowest acceptable soil pH.
        ph_max: Highest acceptable soil pH.
        soil_types: Compatible soil types, e.g. ``["loamy", "sandy"]``.
        common_pests: Pest names this crop is susceptible to.
        common_diseases: Disease names this crop is susceptible to.
        recommended_cover_crops: Cover crops that follow this crop well.
        description: Free-text description (display only).
        companion_plants: Good neighbours (display only).
        avoid_plants: Bad neighbours (display only).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    crop_id: str = Field(validation_alias=AliasChoices("crop_id", "id", "cropId"))
    name: str
    category: CropCategory
    ph_min: float = Field(validation_alias=AliasChoices("ph_min", "phMin"))
    ph_max: float = Field(validation_alias=AliasChoices("ph_max", "phMax"))
    soil_types: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("soil_types", "soilType", "soilTypes")
    )
    common_pests: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("common_pests", "commonPests")
    )
    common_diseases: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("common_diseases", "commonDiseases")
    )
    recommended_cover_crops: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("recommended_cover_crops", "recommendedCoverCrops"),
    )
    description: Optional[str] = None
    companion_plants: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("companion_plants", "companionPlants")
    )
    avoid_plants: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("avoid_plants", "avoidPlants")
    )

    @field_validator("crop_id", "name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("crop_id and name must not be empty.")
        return v.strip()

    @property
    def has_valid_ph_range(self) -> bool:
        """``True`` when ``ph_min <= ph_max``."""
        return self.ph_min <= self.ph_max

    def ph_in_range(self, ph: float) -> bool:
        """Return ``True`` if ``ph`` lies within ``[ph_min, ph_max]`` inclusive."""
        return self.ph_min <= ph <= self.ph_max

    def ph_range_label(self) -> str:
        """Range as shown to growers, e.g. ``"6-7"`` or ``"5.5-6.8"``."""
        return f"{self.ph_min:g}-{self.ph_max:g}"
