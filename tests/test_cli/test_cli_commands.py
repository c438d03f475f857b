"""
Tests for the crop-planner CLI (crop_planner/cli.py).

What we test
------------
- validate-config succeeds with the packaged config and fails on a missing path.
- list-crops filters by category.
- recommend prints ranked crops, honours --top, and writes report files.
- avoid and alternatives print their results or the empty-case message.
- Bad inputs (missing file, bad --as-of, unwritable --output-dir) exit with
  code 1 and an [ERROR] line.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from crop_planner.cli import app

runner = CliRunner()

CATALOG = [
    {"id": "bush-beans", "name": "Bush Beans", "category": "vegetable", "phMin": 6.0, "phMax": 7.0,
     "commonPests": ["aphids"]},
    {"id": "tomato", "name": "Tomato", "category": "vegetable", "phMin": 6.0, "phMax": 6.8,
     "commonPests": ["hornworms"]},
    {"id": "blueberry", "name": "Blueberry", "category": "fruit", "phMin": 4.5, "phMax": 5.5},
]


@pytest.fixture
def inputs(tmp_path: Path) -> dict[str, Path]:
    field = {
        "id": "north-bed",
        "currentPH": 6.5,
        "soilType": "Loam",
        "pestDiseaseHistory": [
            {"type": "pest", "name": "hornworms", "severity": "high", "date": "2025-05-01"}
        ],
    }
    clean_field = {"id": "south-bed", "currentPH": 6.5}
    plantings = [
        {"id": "p1", "cropId": "bush-beans", "fieldId": "north-bed", "plantDate": "2025-03-01"}
    ]
    paths = {
        "field": tmp_path / "field.json",
        "clean_field": tmp_path / "clean_field.json",
        "plantings": tmp_path / "plantings.json",
        "catalog": tmp_path / "crops.json",
    }
    paths["field"].write_text(json.dumps(field))
    paths["clean_field"].write_text(json.dumps(clean_field))
    paths["plantings"].write_text(json.dumps(plantings))
    paths["catalog"].write_text(json.dumps(CATALOG))
    return paths


def _args(inputs, *extra: str) -> list[str]:
    return ["--field", str(inputs["field"]), "--catalog", str(inputs["catalog"]), *extra]


class TestValidateConfig:
    def test_packaged_config(self):
        result = runner.invoke(app, ["validate-config"])
        assert result.exit_code == 0
        assert "[OK] Config valid." in result.output

    def test_missing_config(self, tmp_path: Path):
        result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "nope.toml")])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output


class TestListCrops:
    def test_category_filter(self, inputs):
        result = runner.invoke(
            app, ["list-crops", "--catalog", str(inputs["catalog"]), "--category", "fruit"]
        )
        assert result.exit_code == 0
        assert "blueberry" in result.output
        assert "tomato" not in result.output
        assert "1 crop(s)." in result.output


class TestRecommend:
    def test_ranked_output(self, inputs):
        result = runner.invoke(
            app,
            ["recommend", *_args(inputs, "--plantings", str(inputs["plantings"]),
                                 "--as-of", "2025-06-01")],
        )
        assert result.exit_code == 0, result.output
        assert "Recommendations for field north-bed (pH 6.5):" in result.output
        lines = [l for l in result.output.splitlines() if l.strip().startswith(("1.", "2.", "3."))]
        assert len(lines) == 3
        assert "Recently planted 3 months ago - may deplete soil" in result.output
        assert "Susceptible to active pest: hornworms (high severity)" in result.output

    def test_top_limits_rows(self, inputs):
        result = runner.invoke(app, ["recommend", *_args(inputs, "--top", "1")])
        assert result.exit_code == 0
        assert "  1. " in result.output
        assert "  2. " not in result.output

    def test_writes_reports(self, inputs, tmp_path: Path):
        out = tmp_path / "reports"
        result = runner.invoke(
            app, ["recommend", *_args(inputs, "--as-of", "2025-06-01", "--output-dir", str(out))]
        )
        assert result.exit_code == 0
        assert (out / "recommendations_north-bed_2025-06-01.csv").exists()
        assert (out / "recommendations_north-bed_2025-06-01.json").exists()

    def test_bad_as_of(self, inputs):
        result = runner.invoke(app, ["recommend", *_args(inputs, "--as-of", "June 1st")])
        assert result.exit_code == 1
        assert "[ERROR] Invalid --as-of date" in result.output

    def test_missing_field_file(self, inputs, tmp_path: Path):
        result = runner.invoke(
            app,
            ["recommend", "--field", str(tmp_path / "missing.json"),
             "--catalog", str(inputs["catalog"])],
        )
        assert result.exit_code == 1
        assert "[ERROR] File not found" in result.output


class TestAvoid:
    def test_flags_high_and_ph(self, inputs):
        result = runner.invoke(app, ["avoid", *_args(inputs, "--as-of", "2025-06-01")])
        assert result.exit_code == 0
        assert "[HIGH  ] Tomato" in result.output
        assert "[MEDIUM] Blueberry" in result.output
        assert "pH 6.5 is outside acceptable range (4.5-5.5)" in result.output

    def test_nothing_to_avoid(self, inputs, tmp_path: Path):
        catalog = tmp_path / "one.json"
        catalog.write_text(json.dumps(CATALOG[:1]))
        result = runner.invoke(
            app, ["avoid", "--field", str(inputs["clean_field"]), "--catalog", str(catalog)]
        )
        assert result.exit_code == 0
        assert "No crops to avoid for field south-bed." in result.output


class TestAlternatives:
    def test_resistant_crops_listed(self, inputs):
        result = runner.invoke(app, ["alternatives", *_args(inputs)])
        assert result.exit_code == 0
        assert "Bush Beans" in result.output
        assert "Blueberry" in result.output
        assert "Tomato" not in result.output
        assert "Not susceptible to hornworms" in result.output

    def test_no_active_issues(self, inputs):
        result = runner.invoke(
            app,
            ["alternatives", "--field", str(inputs["clean_field"]),
             "--catalog", str(inputs["catalog"])],
        )
        assert result.exit_code == 0
        assert "Field south-bed has no active pest/disease issues." in result.output


class TestReportWriteErrors:
    @pytest.mark.parametrize("command", ["recommend", "avoid"])
    def test_unwritable_output_dir(self, command, inputs, tmp_path: Path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("occupied")

        result = runner.invoke(
            app, [command, *_args(inputs, "--as-of", "2025-06-01", "--output-dir", str(blocker))]
        )

        assert result.exit_code == 1
        assert "[ERROR] Could not write report" in result.output
        assert not isinstance(result.exception, OSError)
