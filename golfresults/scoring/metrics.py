"""
Score Metrics

Pure functions over one player's 18-hole score array. A hole counts as
played when it holds a positive score or the unreported marker (-1); only
positive scores count toward totals.
"""

from typing import NamedTuple

from golfresults.config import DEFAULT_TOTAL_PAR, HOLES_PER_ROUND, NEUTRAL_HOLE_PAR, UNREPORTED_HOLE


class ScoreMetrics(NamedTuple):
    holes_played: int
    gross_score: int
    relative_to_par: int
    has_invalid_hole: bool


def holes_played(score):
    """Count holes with a positive score or an unreported marker."""
    return sum(1 for s in score if s > 0 or s == UNREPORTED_HOLE)


def gross_score(score):
    """Sum of strictly positive hole scores."""
    return sum(s for s in score if s > 0)


def relative_to_par(score, pars):
    """
    Score relative to par over played holes only.

    Unplayed (0) and unreported (-1) holes are skipped, so a partial
    round reports its standing through the holes actually completed.
    """
    return sum(s - par for s, par in zip(score, pars) if s > 0)


def has_invalid_hole(score):
    """True if any hole carries the unreported marker."""
    return UNREPORTED_HOLE in score


def total_par(pars):
    """Total par for the course, or the neutral 72 when pars are missing."""
    return sum(pars) if pars else DEFAULT_TOTAL_PAR


def resolve_pars(pars):
    """Course pars, or a neutral par-4 layout (total 72) when pars are missing."""
    return tuple(pars) if pars else (NEUTRAL_HOLE_PAR,) * HOLES_PER_ROUND


def calculate_score_metrics(score, pars) -> ScoreMetrics:
    """Calculate all score metrics at once."""
    return ScoreMetrics(
        holes_played=holes_played(score),
        gross_score=gross_score(score),
        relative_to_par=relative_to_par(score, pars),
        has_invalid_hole=has_invalid_hole(score),
    )
