"""
Input and output models for the scoring engine.

Inputs are narrow snapshots supplied by the surrounding system: the engine
never reads storage rows directly. Optional values (handicap index, manual
total, category tee) are explicit None; the score sentinels 0 (unplayed)
and -1 (unreported) are part of the domain and kept as-is.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Optional

import pandas as pd

from golfresults.config import (
    DEFAULT_POINTS_MULTIPLIER,
    HOLES_PER_ROUND,
    SCORING_BOTH,
    SCORING_GROSS,
    SCORING_NET,
    SCORING_TYPES,
    STANDARD_COURSE_RATING,
    STANDARD_SLOPE_RATING,
    UNPLAYED_HOLE,
)
from golfresults.errors import ValidationError
from golfresults.scoring.handicap import validate_stroke_index
from golfresults.utils import (
    validate_handicap_index,
    validate_pars,
    validate_points_template,
    validate_ratings,
    validate_scoring_mode,
)


# --- Inputs ---


def _default_ratings(tee):
    # Unrated tees play as a neutral 72 / 113 course
    if tee.course_rating is None:
        object.__setattr__(tee, 'course_rating', STANDARD_COURSE_RATING)
    if tee.slope_rating is None:
        object.__setattr__(tee, 'slope_rating', STANDARD_SLOPE_RATING)


@dataclass(frozen=True)
class Participant:
    """One player's entry in a competition."""

    participant_id: int
    name: str
    score: tuple = ()
    is_locked: bool = False
    is_dq: bool = False
    manual_total: Optional[int] = None
    handicap_index: Optional[float] = None
    player_id: Optional[int] = None
    team_id: Optional[int] = None
    team_name: Optional[str] = None
    start_time: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    enrollment_handicap_index: Optional[float] = None

    def __post_init__(self):
        score = tuple(self.score)
        if len(score) > HOLES_PER_ROUND:
            raise ValidationError(
                f"Participant {self.participant_id}: score has {len(score)} holes, "
                f"expected at most {HOLES_PER_ROUND}"
            )
        # Holes not yet entered are unplayed
        object.__setattr__(self, 'score', score + (UNPLAYED_HOLE,) * (HOLES_PER_ROUND - len(score)))
        if self.handicap_index is not None:
            validate_handicap_index(self.handicap_index)
        if self.enrollment_handicap_index is not None:
            validate_handicap_index(self.enrollment_handicap_index)

    @property
    def effective_handicap_index(self):
        """Snapshot handicap taken at registration, else the tour enrollment handicap."""
        if self.handicap_index is not None:
            return self.handicap_index
        return self.enrollment_handicap_index


@dataclass(frozen=True)
class CategoryTee:
    """Tee assigned to a player category; overrides ratings but not stroke index."""

    category_id: int
    tee_id: int
    tee_name: str
    course_rating: float = STANDARD_COURSE_RATING
    slope_rating: float = STANDARD_SLOPE_RATING
    category_name: Optional[str] = None

    def __post_init__(self):
        _default_ratings(self)
        validate_ratings(self.course_rating, self.slope_rating)


@dataclass(frozen=True)
class Competition:
    """Competition snapshot with everything needed to score it."""

    competition_id: int
    pars: tuple = ()
    participants: tuple = ()
    stroke_index: Optional[tuple] = None
    scoring_mode: str = SCORING_GROSS
    points_template: Optional[dict] = None
    points_multiplier: float = DEFAULT_POINTS_MULTIPLIER
    is_window_closed: bool = False
    course_rating: float = STANDARD_COURSE_RATING
    slope_rating: float = STANDARD_SLOPE_RATING
    category_tees: tuple = ()
    enrollment_count: Optional[int] = None
    tour_id: Optional[int] = None
    name: Optional[str] = None
    date: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'pars', tuple(self.pars))
        object.__setattr__(self, 'participants', tuple(self.participants))
        object.__setattr__(self, 'category_tees', tuple(self.category_tees))

        # Missing pars are tolerated (relative-to-par falls back to par 72);
        # present pars must be valid.
        if self.pars:
            validate_pars(self.pars)
        if self.stroke_index:
            object.__setattr__(self, 'stroke_index', tuple(self.stroke_index))
            if not validate_stroke_index(self.stroke_index):
                raise ValidationError(
                    f"Competition {self.competition_id}: stroke index must be a "
                    f"permutation of 1-{HOLES_PER_ROUND}"
                )
        _default_ratings(self)
        validate_ratings(self.course_rating, self.slope_rating)
        validate_scoring_mode(self.scoring_mode)
        if self.points_template is not None:
            validate_points_template(self.points_template)
        if self.points_multiplier is None:
            object.__setattr__(self, 'points_multiplier', DEFAULT_POINTS_MULTIPLIER)

    @property
    def includes_net(self):
        return self.scoring_mode in (SCORING_NET, SCORING_BOTH)

    def category_tee_for(self, category_id):
        if category_id is None:
            return None
        return next((t for t in self.category_tees if t.category_id == category_id), None)


# --- Per-participant Result ---


@dataclass
class ParticipantResult:
    """Computed standing of one participant. Position 0 means unranked."""

    participant_id: int
    name: str
    gross_total: int
    relative_to_par: int
    holes_played: int
    is_finished: bool = False
    is_dq: bool = False
    is_dnf: bool = False
    is_locked: bool = False
    has_invalid_hole: bool = False
    net_total: Optional[int] = None
    net_relative_to_par: Optional[int] = None
    course_handicap: Optional[int] = None
    handicap_index: Optional[float] = None
    player_id: Optional[int] = None
    team_id: Optional[int] = None
    team_name: Optional[str] = None
    start_time: Optional[str] = None
    category_id: Optional[int] = None
    position: int = 0
    points: int = 0
    net_position: Optional[int] = None
    net_points: Optional[int] = None
    is_projected: bool = True

    @property
    def has_net(self):
        return self.net_total is not None and self.net_relative_to_par is not None


# --- Stored Results ---


@dataclass(frozen=True)
class CompetitionResult:
    """One persisted result row per (participant, scoring type)."""

    competition_id: int
    participant_id: int
    scoring_type: str
    position: int
    points: int
    gross_score: Optional[int]
    net_score: Optional[int]
    relative_to_par: Optional[int]
    player_id: Optional[int] = None
    player_name: Optional[str] = None

    def __post_init__(self):
        if self.scoring_type not in SCORING_TYPES:
            raise ValidationError(f"Invalid scoring type: {self.scoring_type!r}")


RESULT_COLUMNS = [f.name for f in fields(CompetitionResult)]


@dataclass(frozen=True)
class ResultSet:
    """Rows produced by one finalize run, ordered by position per scoring type."""

    competition_id: int
    gross: tuple = ()
    net: tuple = ()
    finalized_at: Optional[datetime] = None

    @property
    def rows(self):
        return tuple(self.gross) + tuple(self.net)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(r) for r in self.rows], columns=RESULT_COLUMNS)


# --- Leaderboard View ---


@dataclass(frozen=True)
class Leaderboard:
    """Live or finalized leaderboard for one competition."""

    competition_id: int
    entries: tuple
    scoring_mode: str
    is_results_final: bool
    category_tees: tuple = field(default_factory=tuple)

    def to_frame(self) -> pd.DataFrame:
        columns = [
            'participant_id', 'name', 'position', 'points', 'holes_played',
            'gross_total', 'relative_to_par', 'net_total', 'net_relative_to_par',
            'net_position', 'net_points', 'course_handicap',
            'is_finished', 'is_dnf', 'is_dq', 'is_projected',
        ]
        return pd.DataFrame([asdict(e) for e in self.entries], columns=columns)


@dataclass(frozen=True)
class TeamStanding:
    """One team's line on the team leaderboard."""

    team_id: int
    team_name: Optional[str]
    status: str
    display_progress: str
    total_relative_score: Optional[int]
    total_shots: Optional[int]
    start_time: Optional[str] = None
    position: Optional[int] = None
    team_points: Optional[int] = None
