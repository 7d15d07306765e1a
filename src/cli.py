#!/usr/bin/env python3
"""Command-line interface for the meal health rating engine."""

import argparse
import logging
import sys
from pathlib import Path

from src.data_layer.exceptions import RatingInputError
from src.data_layer.health_profile import HealthProfileLoader
from src.data_layer.meal_input import MealInputLoader
from src.nutrition.calculator import bmi_category, calculate_bmi
from src.output.formatters import format_rating_json_string, format_rating_markdown
from src.scoring.rating_engine import RatingEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rate a recognized meal against a personal health profile"
    )
    parser.add_argument(
        "--profile",
        type=str,
        default="config/health_profile.yaml",
        help="Path to health profile YAML file (default: config/health_profile.yaml)"
    )
    parser.add_argument(
        "--meal",
        type=str,
        required=True,
        help="Path to recognized meal JSON file"
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json", "both"],
        default="markdown",
        help="Output format: markdown (default), json, or both"
    )
    parser.add_argument(
        "--output-file",
        type=str,
        help="Optional file path to save output (default: print to stdout)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level for stderr diagnostics (default: WARNING)"
    )
    return parser


def main(argv=None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    profile_path = Path(args.profile)
    if not profile_path.exists():
        print(f"Error: Health profile file not found: {profile_path}", file=sys.stderr)
        print(f"Hint: Copy config/health_profile.yaml.example to {profile_path} and customize it", file=sys.stderr)
        return 1

    meal_path = Path(args.meal)
    if not meal_path.exists():
        print(f"Error: Meal file not found: {meal_path}", file=sys.stderr)
        return 1

    try:
        profile = HealthProfileLoader(str(profile_path)).load()
        meal = MealInputLoader(str(meal_path)).load()
        rating = RatingEngine().evaluate(meal, profile)
    except RatingInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    bmi = calculate_bmi(profile.height_cm, profile.weight_kg)
    logger.info("Profile BMI category: %s", bmi_category(bmi))

    outputs = []
    if args.output in ["markdown", "both"]:
        outputs.append((".md", format_rating_markdown(rating, meal)))
    if args.output in ["json", "both"]:
        outputs.append((".json", format_rating_json_string(rating, indent=2)))

    for suffix, text in outputs:
        if args.output_file:
            output_path = Path(args.output_file)
            if args.output == "both":
                output_path = output_path.with_suffix(suffix)
            output_path.write_text(text, encoding="utf-8")
            print(f"Output saved to {output_path}", file=sys.stderr)
        else:
            print(text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
