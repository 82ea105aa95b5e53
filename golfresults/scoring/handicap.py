"""
Handicap Calculations (World Handicap System)

Key formulas:
- Course Handicap = round(Handicap Index x Slope Rating / 113 + (Course Rating - Par))
- Per-hole: Net = Gross - handicap strokes received on that hole
- Net Total = Gross Total - Course Handicap (complete rounds only)

Course handicaps may be negative ("plus" players); those players give
strokes back on the easiest holes instead of receiving them on the hardest.
"""

from typing import NamedTuple, Optional

from golfresults.config import (
    DEFAULT_STROKE_INDEX,
    HOLES_PER_ROUND,
    PREFERRED_RATING_GENDER,
    STANDARD_COURSE_RATING,
    STANDARD_SLOPE_RATING,
)
from golfresults.errors import MissingStrokeIndexError, ValidationError
from golfresults.scoring.metrics import gross_score, has_invalid_hole, holes_played
from golfresults.utils import round_half_away


class NetScore(NamedTuple):
    net_per_hole: list
    net_total: int
    net_relative_to_par: int


class NetResult(NamedTuple):
    """Net figures for a round; None means withheld, never zero."""
    net_total: Optional[int]
    net_relative_to_par: Optional[int]


class FullHandicap(NamedTuple):
    handicap_index: float
    course_handicap: int
    strokes_per_hole: list
    gross_scores: Optional[list] = None
    net_scores: Optional[list] = None
    gross_total: Optional[int] = None
    net_total: Optional[int] = None


class TeeRatings(NamedTuple):
    course_rating: float
    slope_rating: float


def course_handicap(handicap_index, slope_rating, course_rating, par):
    """
    Calculate Course Handicap using the WHS formula.

    Example: course_handicap(15.4, 128, 72.3, 72) -> 18
    (15.4 x 128 / 113 + 0.3 = 17.74 -> 18)
    """
    raw = handicap_index * slope_rating / STANDARD_SLOPE_RATING + (course_rating - par)
    return round_half_away(raw)


def validate_stroke_index(stroke_index) -> bool:
    """Stroke index must contain each number from 1-18 exactly once."""
    if not stroke_index or len(stroke_index) != HOLES_PER_ROUND:
        return False
    return sorted(stroke_index) == list(range(1, HOLES_PER_ROUND + 1))


def require_stroke_index(stroke_index):
    """
    Return the stroke index as a list, refusing anything net scoring cannot use.

    Raises:
        MissingStrokeIndexError: If no stroke index is configured
        ValidationError: If the stroke index is not a permutation of 1-18
    """
    if not stroke_index:
        raise MissingStrokeIndexError(
            "Course stroke index is required for net scoring but is not set"
        )
    if not validate_stroke_index(stroke_index):
        raise ValidationError(
            f"Invalid stroke index: must be a permutation of 1-{HOLES_PER_ROUND}, got {list(stroke_index)}"
        )
    return list(stroke_index)


def default_stroke_index():
    """Common hardest-to-easiest pattern for courses without their own index."""
    return list(DEFAULT_STROKE_INDEX)


def _distribute_by_hole_order(handicap):
    sign = -1 if handicap < 0 else 1
    base, extra = divmod(abs(handicap), HOLES_PER_ROUND)
    return [sign * (base + (1 if hole < extra else 0)) for hole in range(HOLES_PER_ROUND)]


def distribute_handicap_strokes(handicap, stroke_index=None):
    """
    Distribute course handicap strokes to holes.

    Non-negative handicaps: every hole gets handicap // 18 strokes, then the
    remaining handicap % 18 strokes go to the hardest holes (stroke index 1, 2, ...).

    Negative handicaps mirror this: every hole gives back |handicap| // 18
    strokes, then the remainder is given back on the easiest holes
    (stroke index 18, 17, ...).

    Without a stroke index the strokes are spread by hole order instead.

    Args:
        handicap: Course handicap (integer, may be negative)
        stroke_index: Per-hole difficulty ranks, a permutation of 1-18

    Returns:
        List of 18 per-hole stroke adjustments

    Raises:
        ValidationError: If a stroke index is given but is not a valid permutation
    """
    if not stroke_index:
        return _distribute_by_hole_order(handicap)

    if not validate_stroke_index(stroke_index):
        raise ValidationError(
            f"Stroke index must be a permutation of 1-{HOLES_PER_ROUND}, got {list(stroke_index)}"
        )

    hole_for_rank = {rank: hole for hole, rank in enumerate(stroke_index)}

    if handicap < 0:
        full_passes, partial = divmod(-handicap, HOLES_PER_ROUND)
        strokes = [-full_passes] * HOLES_PER_ROUND
        for i in range(partial):
            strokes[hole_for_rank[HOLES_PER_ROUND - i]] -= 1
        return strokes

    full_passes, partial = divmod(handicap, HOLES_PER_ROUND)
    strokes = [full_passes] * HOLES_PER_ROUND
    for rank in range(1, partial + 1):
        strokes[hole_for_rank[rank]] += 1
    return strokes


def net_scores_per_hole(gross_scores, strokes_per_hole):
    """
    Per-hole net scores. Unplayed (0) and unreported (-1) holes are kept as-is.

    Raises:
        ValidationError: If the arrays differ in length
    """
    if len(gross_scores) != len(strokes_per_hole):
        raise ValidationError("Gross scores and handicap strokes must have same length")
    return [gross - strokes if gross > 0 else gross
            for gross, strokes in zip(gross_scores, strokes_per_hole)]


def net_score(gross_scores, strokes_per_hole, pars) -> NetScore:
    """
    Net per hole plus net total and net relative to par over played holes.

    Only holes with a positive gross score are adjusted and accumulated.
    """
    net_per_hole = net_scores_per_hole(gross_scores, strokes_per_hole)
    total = 0
    par_played = 0
    for gross, net, par in zip(gross_scores, net_per_hole, pars):
        if gross > 0:
            total += net
            par_played += par
    return NetScore(net_per_hole, total, total - par_played)


def net_total(gross_total, handicap):
    """Net total from gross total: 90 gross with an 18 handicap is 72 net."""
    return gross_total - handicap


def calculate_net_result(score, pars, handicap, strokes_per_hole) -> NetResult:
    """
    Net total and net relative to par for a hole-by-hole round.

    Both are withheld for rounds with no holes or with an unreported hole.
    Net relative to par is available for partial rounds; net total needs
    all 18 holes.
    """
    played = holes_played(score)
    if played == 0 or has_invalid_hole(score):
        return NetResult(None, None)

    net = net_score(score, strokes_per_hole, pars)
    total = net_total(gross_score(score), handicap) if played == HOLES_PER_ROUND else None
    return NetResult(total, net.net_relative_to_par)


def full_handicap(handicap_index, course_rating, slope_rating, par, stroke_index,
                  gross_scores=None) -> FullHandicap:
    """Calculate full handicap details for a player in a competition."""
    handicap = course_handicap(handicap_index, slope_rating, course_rating, par)
    strokes = distribute_handicap_strokes(handicap, stroke_index)

    if gross_scores is None or len(gross_scores) != HOLES_PER_ROUND:
        return FullHandicap(handicap_index, handicap, strokes)

    total = gross_score(gross_scores)
    return FullHandicap(
        handicap_index=handicap_index,
        course_handicap=handicap,
        strokes_per_hole=strokes,
        gross_scores=list(gross_scores),
        net_scores=net_scores_per_hole(gross_scores, strokes),
        gross_total=total,
        net_total=net_total(total, handicap),
    )


def select_tee_ratings(ratings=None, course_rating=None, slope_rating=None) -> TeeRatings:
    """
    Pick the course/slope rating pair for a tee.

    Gendered ratings win over the tee's legacy columns: the men's entry is
    preferred, else the first listed entry. Missing values fall back to the
    WHS-neutral 72 / 113.

    Args:
        ratings: List of dicts with gender, course_rating and slope_rating
        course_rating: Legacy course rating stored on the tee
        slope_rating: Legacy slope rating stored on the tee
    """
    chosen_course = course_rating or STANDARD_COURSE_RATING
    chosen_slope = slope_rating or STANDARD_SLOPE_RATING

    if ratings:
        preferred = next((r for r in ratings if r.get('gender') == PREFERRED_RATING_GENDER), ratings[0])
        chosen_course = preferred.get('course_rating') or chosen_course
        chosen_slope = preferred.get('slope_rating') or chosen_slope

    return TeeRatings(chosen_course, chosen_slope)


def format_course_handicap(handicap):
    """Positive handicaps shown as-is, plus handicaps with a + prefix."""
    if handicap > 0:
        return str(handicap)
    if handicap < 0:
        return f"+{abs(handicap)}"
    return "0"


def format_handicap_index(handicap_index):
    """One decimal place; plus handicaps with a + prefix."""
    if handicap_index < 0:
        return f"+{abs(handicap_index):.1f}"
    return f"{handicap_index:.1f}"
