"""Output formatting for health ratings."""

from src.output.formatters import (
    format_rating_json,
    format_rating_json_string,
    format_rating_markdown,
    format_daily_target_json,
    format_factor_line
)

__all__ = [
    "format_rating_json",
    "format_rating_json_string",
    "format_rating_markdown",
    "format_daily_target_json",
    "format_factor_line"
]
