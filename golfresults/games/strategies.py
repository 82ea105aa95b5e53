"""
Game Type Strategies

Casual games share the competition scoring math but rank their members
through a game type. Each game type is a row in GAME_TYPES bundling its
settings validation, result calculation, default settings and per-hole
score validation. Stroke play is the only registered type; adding one means
adding a row, not touching callers.

Usage:
    game_type = get_game_type("stroke_play")
    game_type.validate_settings(settings)
    results = game_type.calculate_results(scores, handicaps, context)
"""

from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from golfresults.config import (
    DEFAULT_GAME_TYPE,
    HOLES_PER_ROUND,
    SCORING_GROSS,
    SCORING_NET,
    STANDARD_COURSE_RATING,
    STANDARD_SLOPE_RATING,
    UNPLAYED_HOLE,
    UNREPORTED_HOLE,
)
from golfresults.errors import ValidationError
from golfresults.ranking.engine import assign_positions_with_ties
from golfresults.scoring.handicap import course_handicap, distribute_handicap_strokes, net_score
from golfresults.scoring.metrics import gross_score, holes_played, relative_to_par, resolve_pars
from golfresults.utils import setup_logging, validate_scoring_mode

# --- Module Logger ---
logger = setup_logging(__name__)


class GameContext(NamedTuple):
    game_id: int
    pars: tuple
    stroke_index: tuple = ()
    scoring_mode: str = SCORING_GROSS
    settings: Optional[dict] = None


@dataclass
class GameScoreResult:
    member_id: int
    gross_total: int
    relative_to_par: int
    holes_played: int
    net_total: Optional[int] = None
    net_relative_to_par: Optional[int] = None
    position: int = 0
    member_name: str = ""


class GameType(NamedTuple):
    type_name: str
    display_name: str
    validate_settings: Callable
    calculate_results: Callable
    default_settings: Callable
    validate_score: Callable


# --- Shared Behaviour ---


def validate_hole_score(hole, shots, par=None):
    """
    Accept the unreported marker (-1), a cleared hole (0) or a positive score.

    Raises:
        ValidationError: For any other value
    """
    if isinstance(shots, bool) or not isinstance(shots, int):
        raise ValidationError(f"Hole {hole}: score must be an integer, got {shots!r}")
    if shots not in (UNREPORTED_HOLE, UNPLAYED_HOLE) and shots < 1:
        raise ValidationError(f"Hole {hole}: invalid score value {shots}")


def no_settings():
    return {}


# --- Stroke Play ---


def validate_stroke_play_settings(settings):
    """Stroke play has no settings of its own; any mapping is accepted."""
    if settings is not None and not isinstance(settings, dict):
        raise ValidationError(f"Game settings must be a mapping, got {type(settings).__name__}")


def _stroke_play_score(result, scoring_mode):
    if scoring_mode == SCORING_NET and result.net_relative_to_par is not None:
        return result.net_relative_to_par
    return result.relative_to_par


def calculate_stroke_play_results(scores, handicaps, context: GameContext):
    """
    Rank game members by total shots relative to par.

    Members without a hole played are left out. Net figures are added for
    the net and both modes when the member has a handicap index; the course
    handicap uses WHS-neutral ratings. Net mode ranks by net, falling back
    to gross for members without one; gross and both modes rank by gross.

    Args:
        scores: Mapping of member id -> 18-hole score list
        handicaps: Mapping of member id -> handicap index
        context: GameContext for the game

    Returns:
        List of GameScoreResult ordered by position
    """
    validate_scoring_mode(context.scoring_mode)
    pars = resolve_pars(context.pars)
    total_par = sum(pars)

    results = []
    for member_id, score in scores.items():
        score = list(score) + [UNPLAYED_HOLE] * (HOLES_PER_ROUND - len(score))
        played = holes_played(score)
        if played == 0:
            continue

        result = GameScoreResult(
            member_id=member_id,
            gross_total=gross_score(score),
            relative_to_par=relative_to_par(score, pars),
            holes_played=played,
        )

        if context.scoring_mode != SCORING_GROSS and handicaps.get(member_id) is not None:
            handicap = course_handicap(
                handicaps[member_id], STANDARD_SLOPE_RATING, STANDARD_COURSE_RATING, total_par
            )
            strokes = distribute_handicap_strokes(handicap, context.stroke_index)
            net = net_score(score, strokes, pars)
            result.net_total = net.net_total
            result.net_relative_to_par = net.net_relative_to_par

        results.append(result)

    mode = context.scoring_mode
    ordered = sorted(results, key=lambda r: _stroke_play_score(r, mode))
    for result, position in assign_positions_with_ties(ordered, lambda r: _stroke_play_score(r, mode)):
        result.position = position

    logger.debug(f"Game {context.game_id}: ranked {len(ordered)} of {len(scores)} members")
    return ordered


# --- Registry ---

GAME_TYPES = {
    "stroke_play": GameType(
        type_name="stroke_play",
        display_name="Stroke Play",
        validate_settings=validate_stroke_play_settings,
        calculate_results=calculate_stroke_play_results,
        default_settings=no_settings,
        validate_score=validate_hole_score,
    ),
}


def list_game_types():
    """Registered game type names."""
    return list(GAME_TYPES)


def get_game_type(type_name=DEFAULT_GAME_TYPE) -> GameType:
    """
    Look up a game type by name.

    Raises:
        ValidationError: If the name is not registered
    """
    game_type = GAME_TYPES.get(type_name)
    if game_type is None:
        raise ValidationError(
            f"Unknown game type: {type_name}. Available types: {', '.join(list_game_types())}"
        )
    return game_type
