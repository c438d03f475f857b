"""
Crop and field-issue taxonomy for rotation-aware planting recommendations.

Three small enums describe the records the engine reasons about:
  - ``CropCategory``: the *kind* of crop (vegetable, fruit, grain, ...).
  - ``IssueType``   : whether a field history record is a pest or a disease.
  - ``Severity``    : how bad a recorded pest/disease outbreak was.

``RiskLevel`` is the coarse ordinal attached to crops-to-avoid results; use
``RISK_ORDER`` (or ``max_risk``) to compare two levels.

Keyword groups
--------------
Rotation heuristics match crop *names* against keyword lists rather than
botanical identifiers, because catalog entries are free text ("Cherry
Tomato", "Bush Beans").  All keywords are lowercase.

    FAMILY_GROUPS          brassicas / nightshades / cucurbits
    LEGUME_KEYWORDS        nitrogen fixers ("bean", "pea")
    HEAVY_FEEDER_KEYWORDS  nutrient-hungry vegetables ("tomato", "corn", "cabbage")

This module has NO imports from any other ``crop_planner`` package.
"""

from enum import StrEnum


class CropCategory(StrEnum):
    """Top-level crop grouping used by the rotation rule."""

    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    GRAIN = "grain"
    FLOWER = "flower"
    HERB = "herb"
    SPICE = "spice"
    AROMATIC = "aromatic"
    LEGUME = "legume"
    """Field legumes grown as a crop in their own right (soy, lentil, ...)."""

    COVER = "cover"
    """Green manures and cover crops (clover, rye, vetch)."""


class IssueType(StrEnum):
    """Kind of field history record."""

    PEST = "pest"
    DISEASE = "disease"


class Severity(StrEnum):
    """Recorded severity of a pest or disease outbreak."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(StrEnum):
    """Worst factor found for a crop-to-avoid entry."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


RISK_ORDER: dict[RiskLevel, int] = {
    RiskLevel.LOW:    1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH:   3,
}


def max_risk(current: RiskLevel, candidate: RiskLevel) -> RiskLevel:
    """Return whichever of two risk levels is more severe."""
    return candidate if RISK_ORDER[candidate] > RISK_ORDER[current] else current


# ── Keyword groups ────────────────────────────────────────────────────────────

FAMILY_GROUPS: dict[str, tuple[str, ...]] = {
    "brassicas":   ("cabbage", "broccoli", "cauliflower", "kale", "brussels"),
    "nightshades": ("tomato", "pepper", "eggplant", "potato"),
    "cucurbits":   ("cucumber", "squash", "pumpkin", "melon"),
}

LEGUME_KEYWORDS: tuple[str, ...] = ("bean", "pea")

HEAVY_FEEDER_KEYWORDS: tuple[str, ...] = ("tomato", "corn", "cabbage")
