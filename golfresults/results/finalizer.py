"""
Competition Results Finalizer

Computes the official results of a competition once play has closed:
1. Build a result per participant (gross, course handicap, net, status)
2. Rank the finished players by gross relative to par and award points
3. When the scoring mode includes net, independently rank the finished
   players with a usable net score by net relative to par
4. Replace every stored row of the competition with the fresh set
5. Mark the competition finalized

Unfinished, DNF and disqualified players are never stored. Recalculating
is the same operation and yields identical rows for identical inputs.

Usage:
    from golfresults.results.finalizer import ResultsFinalizer
    finalizer = ResultsFinalizer(store, competitions)
    result_set = finalizer.finalize(competition_id)
"""

from datetime import datetime

from golfresults.config import SCORING_GROSS, SCORING_NET
from golfresults.errors import CompetitionNotFoundError
from golfresults.models import Competition, CompetitionResult, ResultSet
from golfresults.ranking.points import rank_and_assign_points
from golfresults.results.builder import build_participant_results
from golfresults.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def _to_rows(competition_id, ranked, scoring_type):
    rows = []
    for entry, position, points in ranked:
        if scoring_type == SCORING_NET:
            relative = entry.net_relative_to_par
        else:
            relative = entry.relative_to_par
        rows.append(CompetitionResult(
            competition_id=competition_id,
            participant_id=entry.participant_id,
            scoring_type=scoring_type,
            position=position,
            points=points,
            gross_score=entry.gross_total,
            net_score=entry.net_total,
            relative_to_par=relative,
            player_id=entry.player_id,
            player_name=entry.name,
        ))
    return rows


def compute_results(competition: Competition, finalized_at=None) -> ResultSet:
    """
    Compute the result rows for a competition without storing them.

    Gross rows are always produced; net rows are added for the net and
    both modes. The field size for points is the enrollment count
    when one is given, otherwise the number of ranked players.

    Raises:
        MissingStrokeIndexError: If net scoring is requested without a stroke index
    """
    results = build_participant_results(competition)
    finished = [r for r in results if r.is_finished]
    template = competition.points_template
    multiplier = competition.points_multiplier

    field_size = competition.enrollment_count or len(finished)
    ranked = rank_and_assign_points(
        finished, lambda r: r.relative_to_par, field_size, template, multiplier
    )
    gross_rows = _to_rows(competition.competition_id, ranked, SCORING_GROSS)

    net_rows = []
    if competition.includes_net:
        with_net = [r for r in finished if r.has_net]
        field_size = competition.enrollment_count or len(with_net)
        ranked = rank_and_assign_points(
            with_net, lambda r: r.net_relative_to_par, field_size, template, multiplier
        )
        net_rows = _to_rows(competition.competition_id, ranked, SCORING_NET)

    logger.info(
        f"Competition {competition.competition_id}: {len(results)} participants, "
        f"{len(finished)} finished, {len(gross_rows)} gross / {len(net_rows)} net results"
    )

    return ResultSet(
        competition_id=competition.competition_id,
        gross=tuple(gross_rows),
        net=tuple(net_rows),
        finalized_at=finalized_at,
    )


class ResultsFinalizer:
    """
    Finalizes competitions into a ResultStore.

    Args:
        store: ResultStore receiving the rows
        competitions: Mapping of competition id -> Competition snapshot
        clock: Callable returning the finalize timestamp (default: datetime.now)
    """

    def __init__(self, store, competitions, clock=datetime.now):
        self.store = store
        self.competitions = competitions
        self.clock = clock

    def _load(self, competition_id) -> Competition:
        competition = self.competitions.get(competition_id)
        if competition is None:
            raise CompetitionNotFoundError(f"Competition {competition_id} not found")
        return competition

    def finalize(self, competition_id) -> ResultSet:
        """
        Calculate and store results for a competition.

        Every check and computation runs before the store is touched, so a
        failure leaves the previously stored rows in place.

        Raises:
            CompetitionNotFoundError: If the competition id is unknown
            MissingStrokeIndexError: If net scoring is requested without a stroke index
        """
        competition = self._load(competition_id)
        result_set = compute_results(competition, finalized_at=self.clock())

        self.store.replace_competition_results(
            result_set,
            tour_id=competition.tour_id,
            name=competition.name,
            date=competition.date,
        )
        logger.info(f"Competition {competition_id} finalized at {result_set.finalized_at}")
        return result_set

    def recalculate(self, competition_id) -> ResultSet:
        """Recalculate results for a competition (e.g. after a score edit)."""
        return self.finalize(competition_id)

    def is_finalized(self, competition_id) -> bool:
        return self.store.is_finalized(competition_id)
