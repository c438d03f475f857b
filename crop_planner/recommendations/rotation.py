"""
Crop-rotation heuristics.

All checks work on crop names and categories only (see the keyword groups
in ``crop_planner.taxonomy.crop_taxonomy``).

Good rotation (previous -> next), first match wins:
    1. previous is a legume and next is a heavy feeder   -> good
    2. categories differ                                 -> good
    3. both names fall in the same family group          -> bad
    4. otherwise                                         -> good
"""

from __future__ import annotations

from crop_planner.models.crop import Crop
from crop_planner.recommendations.matching import contains_any
from crop_planner.taxonomy.crop_taxonomy import (
    FAMILY_GROUPS,
    HEAVY_FEEDER_KEYWORDS,
    LEGUME_KEYWORDS,
    CropCategory,
)


def is_legume(crop: Crop) -> bool:
    """Nitrogen fixer by name ("bean", "pea")."""
    return contains_any(crop.name, LEGUME_KEYWORDS)


def is_heavy_feeder(crop: Crop) -> bool:
    """Vegetable whose name contains "tomato", "corn" or "cabbage"."""
    return crop.category == CropCategory.VEGETABLE and contains_any(
        crop.name, HEAVY_FEEDER_KEYWORDS
    )


def family_groups_of(crop: Crop) -> set[str]:
    """Names of every family group whose keywords appear in the crop name."""
    return {
        family
        for family, keywords in FAMILY_GROUPS.items()
        if contains_any(crop.name, keywords)
    }


def same_family(a: Crop, b: Crop) -> bool:
    """``True`` if both crop names fall in at least one shared family group."""
    return bool(family_groups_of(a) & family_groups_of(b))


def is_good_rotation(previous: Crop, following: Crop) -> bool:
    """Return ``True`` if planting ``following`` after ``previous`` is sound."""
    if is_legume(previous) and is_heavy_feeder(following):
        return True
    if previous.category != following.category:
        return True
    return not same_family(previous, following)


def legume_feeds_next(previous: Crop, following: Crop) -> bool:
    """Previous legume leaves nitrogen that a heavy feeder will use."""
    return is_legume(previous) and is_heavy_feeder(following)
