"""Health profile loader for reading a user's body profile from YAML."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from src.data_layer.exceptions import InvalidProfileError
from src.data_layer.models import HealthProfile

logger = logging.getLogger(__name__)

HEIGHT_CM_RANGE = (100, 250)
WEIGHT_KG_RANGE = (30, 300)
AGE_RANGE = (10, 120)


def validate_health_profile(
    height_cm: Optional[float] = None,
    weight_kg: Optional[float] = None,
    age: Optional[float] = None,
) -> List[str]:
    """Check body measurements against plausible human ranges.

    Args:
        height_cm: Height in cm (skipped when None)
        weight_kg: Weight in kg (skipped when None)
        age: Age in years (skipped when None)

    Returns:
        List of error messages; empty when every given value is in range
    """
    errors = []
    if height_cm is not None and not HEIGHT_CM_RANGE[0] <= height_cm <= HEIGHT_CM_RANGE[1]:
        errors.append(f"Height must be between {HEIGHT_CM_RANGE[0]} and {HEIGHT_CM_RANGE[1]} cm")
    if weight_kg is not None and not WEIGHT_KG_RANGE[0] <= weight_kg <= WEIGHT_KG_RANGE[1]:
        errors.append(f"Weight must be between {WEIGHT_KG_RANGE[0]} and {WEIGHT_KG_RANGE[1]} kg")
    if age is not None and not AGE_RANGE[0] <= age <= AGE_RANGE[1]:
        errors.append(f"Age must be between {AGE_RANGE[0]} and {AGE_RANGE[1]} years")
    return errors


def _parse_age(value: Any) -> Optional[int]:
    """Age in whole years; fractional values are rejected."""
    if value is None:
        return None
    try:
        years = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidProfileError("age", value, f"Non-numeric age: {exc}") from exc
    if not years.is_integer():
        raise InvalidProfileError("age", value, "Age must be a whole number of years")
    return int(years)


def parse_health_profile(data: Dict[str, Any]) -> HealthProfile:
    """Build a HealthProfile from a plain mapping and range-check it.

    Args:
        data: Mapping with height_cm, weight_kg, activity_level, goal and
            optional age and gender

    Returns:
        HealthProfile

    Raises:
        InvalidProfileError: If a field is missing, unknown or out of range
    """
    for key in ("height_cm", "weight_kg", "activity_level", "goal"):
        if data.get(key) is None:
            raise InvalidProfileError(key, None, f"Health profile is missing required field '{key}'")

    try:
        height_cm = float(data["height_cm"])
        weight_kg = float(data["weight_kg"])
    except (TypeError, ValueError) as exc:
        raise InvalidProfileError("health_profile", data, f"Non-numeric body measurement: {exc}") from exc
    age = _parse_age(data.get("age"))

    errors = validate_health_profile(height_cm, weight_kg, age)
    if errors:
        raise InvalidProfileError("health_profile", data, "; ".join(errors))

    return HealthProfile(
        height_cm=height_cm,
        weight_kg=weight_kg,
        activity_level=data["activity_level"],
        goal=data["goal"],
        age=age,
        gender=data.get("gender"),
    )


class HealthProfileLoader:
    """Loader for health profile configuration from YAML."""

    def __init__(self, yaml_path: str):
        """Initialize health profile loader from YAML file.

        Args:
            yaml_path: Path to YAML file containing a health_profile mapping
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> HealthProfile:
        """Load health profile from YAML file.

        Returns:
            HealthProfile object

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            InvalidProfileError: If the profile is missing, malformed or out of range
        """
        with open(self.yaml_path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise InvalidProfileError(
                    "health_profile", str(self.yaml_path), f"Invalid YAML: {exc}"
                ) from exc

        if not isinstance(data, dict):
            raise InvalidProfileError(
                "health_profile", data, f"Top level of {self.yaml_path} must be a mapping"
            )
        profile_data = data.get("health_profile")
        if not isinstance(profile_data, dict):
            raise InvalidProfileError(
                "health_profile", profile_data, f"No health_profile mapping in {self.yaml_path}"
            )

        profile = parse_health_profile(profile_data)
        logger.debug("Loaded health profile from %s (goal=%s)", self.yaml_path, profile.goal.value)
        return profile
