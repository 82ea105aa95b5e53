"""
Participant Result Builder

Turns one participant snapshot into a ParticipantResult: gross figures,
course handicap (with category tee overrides), net figures, and the
finished / DNF flags used by ranking.
"""

from typing import NamedTuple, Optional

from golfresults.config import DEFAULT_TOTAL_PAR, HOLES_PER_ROUND
from golfresults.models import Competition, Participant, ParticipantResult
from golfresults.ranking.engine import is_dnf, is_finished
from golfresults.scoring.handicap import (
    calculate_net_result,
    course_handicap,
    distribute_handicap_strokes,
    net_total,
    require_stroke_index,
)
from golfresults.scoring.metrics import calculate_score_metrics, resolve_pars
from golfresults.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class ScoringContext(NamedTuple):
    """Per-competition values shared by every participant."""
    competition: Competition
    pars: tuple
    total_par: int
    stroke_index: Optional[list]
    net_enabled: bool


def build_context(competition: Competition) -> ScoringContext:
    """
    Resolve pars and stroke index once per competition.

    Raises:
        MissingStrokeIndexError: If net scoring is requested without a stroke index
    """
    if not competition.pars:
        logger.warning(
            f"Competition {competition.competition_id} has no pars, using neutral par "
            f"{DEFAULT_TOTAL_PAR}"
        )
    pars = resolve_pars(competition.pars)

    stroke_index = None
    if competition.includes_net:
        stroke_index = require_stroke_index(competition.stroke_index)

    return ScoringContext(
        competition=competition,
        pars=pars,
        total_par=sum(pars),
        stroke_index=stroke_index,
        net_enabled=competition.includes_net,
    )


def participant_ratings(participant: Participant, competition: Competition):
    """Course and slope rating for a player, honouring their category's tee."""
    category_tee = competition.category_tee_for(participant.category_id)
    if category_tee is not None:
        return category_tee.course_rating, category_tee.slope_rating
    return competition.course_rating, competition.slope_rating


def build_participant_result(participant: Participant, context: ScoringContext) -> ParticipantResult:
    """Compute every per-participant figure ranking and points need."""
    competition = context.competition

    handicap_index = participant.effective_handicap_index
    handicap = None
    strokes = None
    if context.net_enabled and handicap_index is not None:
        rating, slope = participant_ratings(participant, competition)
        handicap = course_handicap(handicap_index, slope, rating, context.total_par)
        strokes = distribute_handicap_strokes(handicap, context.stroke_index)

    if participant.manual_total is not None:
        gross = participant.manual_total
        played = HOLES_PER_ROUND
        relative = gross - context.total_par
        invalid = False
        net, net_relative = None, None
        if handicap is not None:
            net = net_total(gross, handicap)
            net_relative = net - context.total_par
        dnf = False
    else:
        metrics = calculate_score_metrics(participant.score, context.pars)
        gross = metrics.gross_score
        played = metrics.holes_played
        relative = metrics.relative_to_par
        invalid = metrics.has_invalid_hole
        net, net_relative = None, None
        if handicap is not None:
            net, net_relative = calculate_net_result(participant.score, context.pars, handicap, strokes)
        dnf = is_dnf(participant.is_dq, played, competition.is_window_closed)

    finished = is_finished(
        participant.is_dq,
        played,
        invalid,
        participant.is_locked,
        competition.is_window_closed,
        has_manual_total=participant.manual_total is not None,
    )

    return ParticipantResult(
        participant_id=participant.participant_id,
        name=participant.name,
        gross_total=gross,
        relative_to_par=relative,
        holes_played=played,
        is_finished=finished,
        is_dq=participant.is_dq,
        is_dnf=dnf,
        is_locked=participant.is_locked,
        has_invalid_hole=invalid,
        net_total=net,
        net_relative_to_par=net_relative,
        course_handicap=handicap,
        handicap_index=handicap_index,
        player_id=participant.player_id,
        team_id=participant.team_id,
        team_name=participant.team_name,
        start_time=participant.start_time,
        category_id=participant.category_id,
    )


def build_participant_results(competition: Competition):
    """Build results for the whole field, in participant order."""
    context = build_context(competition)
    results = [build_participant_result(p, context) for p in competition.participants]
    logger.debug(
        f"Competition {competition.competition_id}: built {len(results)} participant results, "
        f"{sum(r.is_finished for r in results)} finished"
    )
    return results
