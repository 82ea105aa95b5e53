"""
Shared helpers for the Golf Results engine: logging, CSV persistence,
the single rounding rule and input validation.
"""

import logging
import numbers
import shutil
import tempfile
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path

from golfresults.config import (
    ALLOWED_SCORING_MODES,
    HOLES_PER_ROUND,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_COURSE_RATING,
    MAX_HANDICAP_INDEX,
    MAX_PAR,
    MAX_SLOPE_RATING,
    MIN_COURSE_RATING,
    MIN_HANDICAP_INDEX,
    MIN_PAR,
    MIN_SLOPE_RATING,
    TEMPLATE_DEFAULT_KEY,
)
from golfresults.errors import ValidationError


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = LOG_LEVEL) -> logging.Logger:
    """
    Module logger for the scoring engine.

    A stream handler with LOG_FORMAT is attached once per logger name, so
    repeated imports of a module never duplicate log lines.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- Module Logger ---
logger = setup_logging(__name__)


# --- File Operations ---
def atomic_write_csv(df, path: Path, **kwargs) -> None:
    """
    Save finalized result rows as CSV in one step.

    Rows go to a temporary file beside `path` and replace it with a single
    move, so readers see either the previous results or the new ones.
    Extra keyword arguments are passed to DataFrame.to_csv.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            delete=False,
            suffix='.csv',
            dir=path.parent  # Same filesystem for atomic move
        ) as tmp:
            tmp_path = Path(tmp.name)
        df.to_csv(tmp_path, **kwargs)

        shutil.move(str(tmp_path), str(path))
        logger.debug(f"Saved {len(df)} result rows to {path}")

    except Exception:
        if 'tmp_path' in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise


# --- Rounding ---
def round_half_away(value) -> int:
    """
    Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3).

    Used for course handicaps and for every points value so the engine has a
    single rounding rule. The float is read through its shortest repr, not
    its exact binary expansion.
    """
    return int(Decimal(repr(float(value))).quantize(Decimal(1), rounding=ROUND_HALF_UP))


# --- Validation ---
def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_pars(pars) -> None:
    """
    Validate an 18-hole par array.

    Raises:
        ValidationError: If the array is not 18 integers each in [3, 6]
    """
    if pars is None or len(pars) != HOLES_PER_ROUND:
        raise ValidationError(
            f"Pars must have exactly {HOLES_PER_ROUND} values, "
            f"got {0 if pars is None else len(pars)}"
        )
    bad = [(hole, par) for hole, par in enumerate(pars, start=1)
           if not isinstance(par, int) or isinstance(par, bool) or not MIN_PAR <= par <= MAX_PAR]
    if bad:
        raise ValidationError(
            f"Par out of range [{MIN_PAR}, {MAX_PAR}] on holes: "
            + ", ".join(f"{hole}={par!r}" for hole, par in bad)
        )


def validate_handicap_index(handicap_index) -> None:
    """
    Validate a handicap index.

    Raises:
        ValidationError: If the value is not a number in [-10, 54]
    """
    if not _is_number(handicap_index):
        raise ValidationError(f"Handicap index must be a number, got {handicap_index!r}")
    if not MIN_HANDICAP_INDEX <= handicap_index <= MAX_HANDICAP_INDEX:
        raise ValidationError(
            f"Handicap index {handicap_index} out of range "
            f"[{MIN_HANDICAP_INDEX}, {MAX_HANDICAP_INDEX}]"
        )


def validate_ratings(course_rating, slope_rating) -> None:
    """
    Validate a tee's course and slope rating.

    Raises:
        ValidationError: If either rating is outside its WHS range
    """
    if not _is_number(course_rating) or not MIN_COURSE_RATING <= course_rating <= MAX_COURSE_RATING:
        raise ValidationError(
            f"Course rating {course_rating!r} out of range [{MIN_COURSE_RATING}, {MAX_COURSE_RATING}]"
        )
    if not _is_number(slope_rating) or not MIN_SLOPE_RATING <= slope_rating <= MAX_SLOPE_RATING:
        raise ValidationError(
            f"Slope rating {slope_rating!r} out of range [{MIN_SLOPE_RATING}, {MAX_SLOPE_RATING}]"
        )


def validate_scoring_mode(scoring_mode: str) -> None:
    """
    Validate that a scoring mode is allowed.

    Raises:
        ValidationError: If scoring mode is not in ALLOWED_SCORING_MODES
    """
    if scoring_mode not in ALLOWED_SCORING_MODES:
        raise ValidationError(
            f"Invalid scoring mode: '{scoring_mode}'. "
            f"Allowed values: {', '.join(sorted(ALLOWED_SCORING_MODES))}"
        )


def validate_points_template(structure) -> None:
    """
    Validate a points template mapping.

    Keys must be positive position numbers as strings or "default";
    values must be non-negative numbers.

    Raises:
        ValidationError: If the template is malformed
    """
    if not isinstance(structure, dict):
        raise ValidationError(f"Points template must be a mapping, got {type(structure).__name__}")

    for key, value in structure.items():
        if key != TEMPLATE_DEFAULT_KEY:
            if not isinstance(key, str) or not key.isdigit() or int(key) < 1:
                raise ValidationError(
                    f"Invalid points template key {key!r}: "
                    f"expected a position like '1' or '{TEMPLATE_DEFAULT_KEY}'"
                )
        if not _is_number(value) or value < 0:
            raise ValidationError(f"Invalid points for key {key!r}: {value!r}")


__all__ = [
    # Logging
    'setup_logging',
    # File operations
    'atomic_write_csv',
    # Rounding
    'round_half_away',
    # Validation
    'validate_pars',
    'validate_handicap_index',
    'validate_ratings',
    'validate_scoring_mode',
    'validate_points_template',
]
