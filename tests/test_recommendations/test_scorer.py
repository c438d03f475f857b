"""
Tests for crop_planner/recommendations/scorer.py.

What we test
------------
compute_score():
  - Baseline: in-range pH, not recently planted, no issues -> 90.
  - pH bands: in range +25, within 0.5 +15, within 1.0 +5, further -20.
  - Malformed bounds (ph_min > ph_max) never count as in range and do not raise.
  - Rotation: recently planted swings the component from +15 to -15.
  - Pest penalty: 15 for high severity, 10 otherwise, capped at 30.
  - Resistance bonus: +20 only when issues exist and none match.
  - Soil bonus: +10 on substring match.

ScoreComponents.total:
  - Clamped to [0, 100] at both ends.
"""

from __future__ import annotations

import pytest

from conftest import make_crop, make_issue
from crop_planner.recommendations.scorer import (
    ScoreComponents,
    compute_score,
    ph_distance,
    ph_points,
)


def _score(
    crop=None,
    field_ph: float = 6.5,
    soil_type: str | None = None,
    recently_planted: bool = False,
    active_issues=(),
) -> ScoreComponents:
    return compute_score(
        crop=crop or make_crop(common_pests=("aphids",), common_diseases=("blight",)),
        field_ph=field_ph,
        soil_type=soil_type,
        recently_planted=recently_planted,
        active_issues=list(active_issues),
    )


class TestBaseline:
    def test_ideal_unplanted_crop_scores_90(self):
        c = _score()
        assert c.ph_points == 25
        assert c.rotation_points == 15
        assert c.pest_penalty == 0
        assert c.resistance_bonus == 0
        assert c.soil_points == 0
        assert c.total == 90


class TestPhPoints:
    @pytest.mark.parametrize(
        "ph, expected",
        [
            (6.0, 25),    # lower bound inclusive
            (7.0, 25),    # upper bound inclusive
            (5.6, 15),
            (5.5, 15),    # exactly 0.5 below
            (7.5, 15),    # exactly 0.5 above
            (5.2, 5),
            (5.0, 5),     # exactly 1.0 below
            (4.0, -20),
            (8.5, -20),
        ],
    )
    def test_bands(self, ph, expected):
        assert ph_points(ph, make_crop(ph_min=6.0, ph_max=7.0)) == expected

    def test_distance_uses_nearer_bound(self):
        assert ph_distance(7.4, make_crop(ph_min=6.0, ph_max=7.0)) == pytest.approx(0.4)

    def test_inverted_bounds_are_never_in_range(self):
        crop = make_crop(ph_min=7.0, ph_max=6.0)
        # 6.5 sits "between" the bounds but the range is empty; distance 0.5
        assert ph_points(6.5, crop) == 15
        assert _score(crop=crop, field_ph=6.5).total == 80


class TestRotationPoints:
    def test_recently_planted_crop(self):
        c = _score(recently_planted=True)
        assert c.rotation_points == -15
        assert c.total == 60

    def test_swing_is_thirty_points(self):
        assert _score().total - _score(recently_planted=True).total == 30


class TestPestPenalty:
    def test_high_severity_match(self):
        c = _score(active_issues=[make_issue("aphids", severity="high")])
        assert c.pest_penalty == 15
        assert c.total == 75

    @pytest.mark.parametrize("severity", ["low", "medium"])
    def test_non_high_severity_match(self, severity):
        c = _score(active_issues=[make_issue("aphids", severity=severity)])
        assert c.pest_penalty == 10
        assert c.total == 80

    def test_disease_match(self):
        c = _score(active_issues=[make_issue("late blight", type="disease", severity="high")])
        assert c.pest_penalty == 15

    def test_penalty_capped_at_30(self):
        issues = [
            make_issue("aphids", severity="high"),
            make_issue("aphid", severity="high"),
            make_issue("blight", type="disease", severity="high"),
        ]
        c = _score(active_issues=issues)
        assert c.raw_pest_penalty == 45
        assert c.pest_penalty == 30
        assert c.total == 60

    def test_matching_issue_gets_no_resistance_bonus(self):
        c = _score(active_issues=[make_issue("aphids"), make_issue("thrips")])
        assert c.resistance_bonus == 0


class TestResistanceBonus:
    def test_unaffected_crop_gets_bonus(self):
        c = _score(active_issues=[make_issue("hornworms")])
        assert c.resistance_bonus == 20
        assert c.unclamped == 110
        assert c.total == 100

    def test_no_bonus_without_active_issues(self):
        assert _score(active_issues=[]).resistance_bonus == 0


class TestSoilPoints:
    def test_soil_match(self):
        crop = make_crop(soil_types=("loam", "sandy"))
        c = _score(crop=crop, soil_type="Sandy Loam")
        assert c.soil_points == 10
        assert c.total == 100

    def test_no_soil_type(self):
        crop = make_crop(soil_types=("loam",))
        assert _score(crop=crop, soil_type=None).soil_points == 0

    def test_no_match(self):
        crop = make_crop(soil_types=("clay",))
        assert _score(crop=crop, soil_type="Sandy Loam").soil_points == 0


class TestClamping:
    def test_total_never_below_zero(self):
        issues = [make_issue("aphids"), make_issue("blight", type="disease")]
        c = _score(field_ph=3.0, recently_planted=True, active_issues=issues)
        # 50 - 20 - 15 - 30 = -15
        assert c.unclamped == -15
        assert c.total == 0

    def test_total_never_above_100(self):
        crop = make_crop(soil_types=("loam",))
        c = _score(crop=crop, soil_type="loam", active_issues=[make_issue("thrips")])
        assert c.unclamped == 120
        assert c.total == 100
