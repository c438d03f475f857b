"""Frozen pydantic records consumed and produced by the recommendation engine."""

from crop_planner.models.crop import Crop
from crop_planner.models.field import Field, PestDiseaseRecord
from crop_planner.models.planting import Planting
from crop_planner.models.recommendation import CropToAvoid, PlantingRecommendation

__all__ = [
    "Crop",
    "CropToAvoid",
    "Field",
    "PestDiseaseRecord",
    "Planting",
    "PlantingRecommendation",
]
