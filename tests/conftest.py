"""
Shared pytest fixtures for the crop-planner test suite.

Provides:
  - ``as_of``: the fixed reference date every recency calculation uses.
  - Factory helpers (``make_crop``, ``make_field``, ``make_issue``,
    ``make_planting``) with neutral defaults, so each test only spells out
    the attribute it cares about.
  - ``sample_catalog``: a small hand-built catalog with known families.
"""

from __future__ import annotations

from datetime import date

import pytest

from crop_planner.models.crop import Crop
from crop_planner.models.field import Field, PestDiseaseRecord
from crop_planner.models.planting import Planting

AS_OF = date(2025, 6, 1)


def make_crop(
    crop_id: str = "lettuce",
    name: str = "Lettuce",
    category: str = "vegetable",
    ph_min: float = 6.0,
    ph_max: float = 7.0,
    soil_types: tuple[str, ...] = (),
    common_pests: tuple[str, ...] = (),
    common_diseases: tuple[str, ...] = (),
    recommended_cover_crops: tuple[str, ...] = (),
) -> Crop:
    return Crop(
        crop_id=crop_id,
        name=name,
        category=category,
        ph_min=ph_min,
        ph_max=ph_max,
        soil_types=soil_types,
        common_pests=common_pests,
        common_diseases=common_diseases,
        recommended_cover_crops=recommended_cover_crops,
    )


def make_issue(
    name: str = "aphids",
    type: str = "pest",
    severity: str = "high",
    on: date = date(2025, 5, 1),
    resolved: bool = False,
) -> PestDiseaseRecord:
    return PestDiseaseRecord(
        type=type, name=name, severity=severity, date=on, resolved=resolved
    )


def make_field(
    current_ph: float = 6.5,
    soil_type: str | None = None,
    history: tuple[PestDiseaseRecord, ...] = (),
    field_id: str = "north-bed",
) -> Field:
    return Field(
        field_id=field_id,
        current_ph=current_ph,
        soil_type=soil_type,
        pest_disease_history=history,
    )


def make_planting(
    crop_id: str,
    plant_date: date,
    field_id: str = "north-bed",
    planting_id: str | None = None,
) -> Planting:
    return Planting(
        planting_id=planting_id or f"{field_id}-{crop_id}-{plant_date}",
        crop_id=crop_id,
        field_id=field_id,
        plant_date=plant_date,
    )


@pytest.fixture
def as_of() -> date:
    """Fixed reference date for "months since" calculations."""
    return AS_OF


@pytest.fixture
def sample_catalog() -> list[Crop]:
    """Six crops spanning legumes, nightshades, brassicas and a fruit."""
    return [
        make_crop(
            "bush-beans", "Bush Beans",
            common_pests=("bean beetle", "aphids"),
            common_diseases=("rust",),
            recommended_cover_crops=("oats", "winter rye", "clover"),
        ),
        make_crop(
            "tomato", "Tomato", ph_min=6.0, ph_max=6.8,
            soil_types=("loam",),
            common_pests=("hornworms", "aphids"),
            common_diseases=("early blight", "late blight"),
        ),
        make_crop(
            "pepper", "Bell Pepper", ph_min=6.0, ph_max=6.8,
            common_pests=("aphids", "pepper weevil"),
            common_diseases=("bacterial spot",),
        ),
        make_crop(
            "cabbage", "Cabbage", ph_min=6.0, ph_max=7.5,
            common_pests=("cabbage worms",),
            common_diseases=("clubroot",),
        ),
        make_crop(
            "lettuce", "Lettuce",
            common_pests=("slugs",),
            common_diseases=("downy mildew",),
        ),
        make_crop(
            "strawberry", "Strawberry", category="fruit", ph_min=5.5, ph_max=6.8,
            common_pests=("slugs", "spider mites"),
            common_diseases=("gray mold",),
        ),
    ]
