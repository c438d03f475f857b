"""
Field and pest/disease history models.

A ``Field`` is a snapshot of one growing area: its current soil pH, its soil
type, and the ordered pest/disease history recorded against it.  The
recommendation engine only reads these objects; both models are frozen.

History records are never deleted when an outbreak ends.  They are marked
``resolved=True`` instead, which removes them from the *active* issue set but
keeps them available for recency-based warnings.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field as ModelField

from crop_planner.taxonomy.crop_taxonomy import IssueType, Severity


class PestDiseaseRecord(BaseModel):
    """One pest or disease observation on a field.

    Attributes:
        record_id: Optional identifier from the record store.
        type: ``IssueType.PEST`` or ``IssueType.DISEASE``.
        name: Free-text pest/disease name, e.g. ``"aphids"``.
        severity: ``Severity`` of the outbreak.
        date: Date the issue was observed.
        resolved: ``True`` once the issue no longer affects the field.
        affected_crops: Crop ids the issue was seen on (informational).
        treatment: Treatment applied (informational).
        notes: Free-form annotation.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    record_id: Optional[str] = ModelField(
        default=None, validation_alias=AliasChoices("record_id", "id")
    )
    type: IssueType
    name: str
    severity: Severity
    date: dt.date
    resolved: bool = False
    affected_crops: tuple[str, ...] = ModelField(
        default=(), validation_alias=AliasChoices("affected_crops", "affectedCrops")
    )
    treatment: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return not self.resolved


class Field(BaseModel):
    """A growing area with soil chemistry and pest/disease history.

    Attributes:
        field_id: Identifier plantings refer to.
        name: Display name, e.g. ``"North bed"``.
        current_ph: Most recent soil pH reading.
        soil_type: Free-text soil description, e.g. ``"Sandy Loam"``.
            ``None`` or empty skips the soil-type factor.
        pest_disease_history: Ordered history records (oldest first by
            convention, but order is not relied upon).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field_id: str = ModelField(validation_alias=AliasChoices("field_id", "id", "fieldId"))
    name: Optional[str] = None
    current_ph: float = ModelField(
        validation_alias=AliasChoices("current_ph", "currentPH", "currentPh")
    )
    soil_type: Optional[str] = ModelField(
        default=None, validation_alias=AliasChoices("soil_type", "soilType")
    )
    pest_disease_history: tuple[PestDiseaseRecord, ...] = ModelField(
        default=(),
        validation_alias=AliasChoices("pest_disease_history", "pestDiseaseHistory"),
    )

    @property
    def active_issues(self) -> list[PestDiseaseRecord]:
        """Unresolved history records, in history order."""
        return [r for r in self.pest_disease_history if r.is_active]
