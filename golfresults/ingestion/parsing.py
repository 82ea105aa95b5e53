"""
Stored Array Parsing

Scores, pars, stroke indexes, points templates and tee ratings arrive from
storage as JSON text. Non-critical fields are tolerated: a malformed score
or par array is logged and replaced by an empty fallback (pars then resolve
to a neutral par-72 layout). The stroke index has no safe default, so a
missing or malformed one is an error.

Usage:
    from golfresults.ingestion.parsing import parse_score, parse_pars, parse_stroke_index
    pars = parse_pars(course_row['pars'])
"""

import json

from golfresults.errors import MissingStrokeIndexError, ValidationError
from golfresults.scoring.handicap import TeeRatings, require_stroke_index, select_tee_ratings
from golfresults.utils import setup_logging, validate_points_template

# --- Module Logger ---
logger = setup_logging(__name__)


def safe_parse_json(text, field_name):
    """
    Parse JSON text with a descriptive error.

    Raises:
        ValidationError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {field_name} format: {e}") from e


def parse_or_passthrough(value, field_name):
    """Parse JSON text; values already decoded (lists, dicts) are returned as-is."""
    if isinstance(value, (str, bytes, bytearray)):
        return safe_parse_json(value, field_name)
    return value


def safe_parse_json_with_default(text, default):
    """Parse JSON text, returning default for empty or malformed input."""
    if not text:
        return default
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        logger.warning(f"Malformed JSON {text!r}, using default {default!r}")
        return default


def _tolerant_int_array(value, field_name):
    if value is None or value == "":
        return []
    try:
        parsed = parse_or_passthrough(value, field_name)
    except ValidationError as e:
        logger.warning(f"{e}; treating {field_name} as empty")
        return []

    if not isinstance(parsed, (list, tuple)):
        logger.warning(f"{field_name} must be an array, got {type(parsed).__name__}; treating as empty")
        return []
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in parsed):
        logger.warning(f"{field_name} contains non-integer values; treating as empty")
        return []
    return list(parsed)


def parse_score(value):
    """Per-hole score list; empty when missing or malformed."""
    return _tolerant_int_array(value, "score")


def parse_pars(value):
    """Per-hole pars; empty when missing or malformed (callers fall back to par 72)."""
    return _tolerant_int_array(value, "pars")


def parse_stroke_index(value):
    """
    Stroke index for net scoring.

    Raises:
        MissingStrokeIndexError: If the value is missing or empty
        ValidationError: If it is malformed or not a permutation of 1-18
    """
    if value is None or value == "":
        raise MissingStrokeIndexError("Course stroke index is required for net scoring but is not set")
    parsed = parse_or_passthrough(value, "stroke index")
    if not isinstance(parsed, (list, tuple)):
        raise ValidationError(f"Stroke index must be an array, got {type(parsed).__name__}")
    return require_stroke_index(parsed)


def parse_points_template(value):
    """
    Points template mapping, or None when no template is configured.

    Raises:
        ValidationError: If the template is malformed
    """
    if value is None or value == "":
        return None
    structure = parse_or_passthrough(value, "points template")
    validate_points_template(structure)
    return structure


def parse_tee_ratings(value, course_rating=None, slope_rating=None) -> TeeRatings:
    """
    Course and slope rating for a tee from its gendered ratings list.

    Malformed ratings are ignored in favour of the tee's legacy columns.
    """
    if value is None:
        ratings = []
    elif isinstance(value, str):
        ratings = safe_parse_json_with_default(value, [])
    else:
        ratings = value
    if not isinstance(ratings, list):
        logger.warning(f"Tee ratings must be a list, got {type(ratings).__name__}; ignoring")
        ratings = []
    ratings = [r for r in ratings if isinstance(r, dict)]
    return select_tee_ratings(ratings, course_rating, slope_rating)
