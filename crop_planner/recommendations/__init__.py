"""
Recommendation engine: scores catalog crops for a field, flags crops to
avoid, and surfaces alternatives resistant to active pest/disease issues.

Modules
-------
matching : names_match() + issue_affects_crop(): fuzzy pest/disease matching.
rotation : is_good_rotation() + legume/heavy-feeder/family heuristics.
scorer   : ScoreComponents dataclass + compute_score(): pure arithmetic.
engine   : get_recommendations() + get_crops_to_avoid()
           + get_resistant_alternatives(): the public operations.
reporter : write_recommendations_csv() / _json() + write_crops_to_avoid_json().
"""

from crop_planner.recommendations.engine import (
    get_crops_to_avoid,
    get_recommendations,
    get_resistant_alternatives,
)

__all__ = [
    "get_crops_to_avoid",
    "get_recommendations",
    "get_resistant_alternatives",
]
