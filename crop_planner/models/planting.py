"""Planting model: one historical or planned sowing of a crop in a field."""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

PlantingStatus = Literal["planned", "planted", "growing", "harvested"]


class Planting(BaseModel):
    """A sowing event.

    Attributes:
        planting_id: Identifier from the record store.
        crop_id: Catalog id of the crop sown.
        field_id: Field the crop was sown in.
        plant_date: Sowing date (planned or actual).
        status: Lifecycle status; informational only.
        notes: Free-form annotation.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    planting_id: str = Field(validation_alias=AliasChoices("planting_id", "id"))
    crop_id: str = Field(validation_alias=AliasChoices("crop_id", "cropId"))
    field_id: str = Field(validation_alias=AliasChoices("field_id", "fieldId"))
    plant_date: date = Field(validation_alias=AliasChoices("plant_date", "plantDate"))
    status: Optional[PlantingStatus] = None
    notes: Optional[str] = None
