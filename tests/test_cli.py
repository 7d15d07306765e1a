"""Tests for the rating command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from src.cli import build_parser, main

EXAMPLE_MEAL = Path(__file__).resolve().parent.parent / "data" / "meals" / "chicken_rice_lunch.json"


@pytest.fixture
def profile_path(tmp_path):
    path = tmp_path / "health_profile.yaml"
    path.write_text(yaml.dump({
        "health_profile": {
            "height_cm": 170,
            "weight_kg": 70,
            "activity_level": "light",
            "goal": "lose-weight",
        }
    }))
    return path


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["--meal", "meal.json"])
        assert args.profile == "config/health_profile.yaml"
        assert args.output == "markdown"
        assert args.output_file is None
        assert args.log_level == "WARNING"

    def test_meal_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_rejects_unknown_output(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--meal", "m.json", "--output", "html"])


class TestMain:
    def test_markdown_to_stdout(self, profile_path, capsys):
        code = main(["--profile", str(profile_path), "--meal", str(EXAMPLE_MEAL)])
        assert code == 0
        out = capsys.readouterr().out
        assert "# Health Rating" in out
        assert "**Foods:** 海南鸡饭 (1 plate), Iced Milo" in out

    def test_json_to_stdout(self, profile_path, capsys):
        code = main(["--profile", str(profile_path), "--meal", str(EXAMPLE_MEAL), "--output", "json"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["overall"] in ("green", "yellow", "red")
        assert [f["name"] for f in data["factors"]] == [
            "Calories", "Sodium", "Fat", "Balance", "Nutri-Grade", "GI Level",
        ]
        assert len(data["suggestions"]) <= 4

    def test_both_to_files(self, profile_path, tmp_path):
        output_file = tmp_path / "rating"
        code = main([
            "--profile", str(profile_path),
            "--meal", str(EXAMPLE_MEAL),
            "--output", "both",
            "--output-file", str(output_file),
        ])
        assert code == 0
        assert "# Health Rating" in (tmp_path / "rating.md").read_text(encoding="utf-8")
        data = json.loads((tmp_path / "rating.json").read_text(encoding="utf-8"))
        assert 0 <= data["score"] <= 100

    def test_missing_profile(self, tmp_path, capsys):
        code = main(["--profile", str(tmp_path / "nope.yaml"), "--meal", str(EXAMPLE_MEAL)])
        assert code == 1
        assert "Health profile file not found" in capsys.readouterr().err

    def test_missing_meal(self, profile_path, tmp_path, capsys):
        code = main(["--profile", str(profile_path), "--meal", str(tmp_path / "nope.json")])
        assert code == 1
        assert "Meal file not found" in capsys.readouterr().err

    def test_invalid_meal(self, profile_path, tmp_path, capsys):
        meal_path = tmp_path / "meal.json"
        meal_path.write_text(json.dumps({"meal_context": "brunch"}))
        code = main(["--profile", str(profile_path), "--meal", str(meal_path)])
        assert code == 2
        assert "brunch" in capsys.readouterr().err

    def test_unparseable_meal_file(self, profile_path, tmp_path, capsys):
        meal_path = tmp_path / "meal.json"
        meal_path.write_text("{not json")
        code = main(["--profile", str(profile_path), "--meal", str(meal_path)])
        assert code == 2
        assert "Invalid JSON" in capsys.readouterr().err

    def test_profile_not_a_mapping(self, tmp_path, capsys):
        bad_profile = tmp_path / "profile.yaml"
        bad_profile.write_text("- a\n- b\n")
        code = main(["--profile", str(bad_profile), "--meal", str(EXAMPLE_MEAL)])
        assert code == 2
        assert "must be a mapping" in capsys.readouterr().err
