"""
Live Leaderboard Projection

Builds the always-current leaderboard of a competition without finalizing
it. While a competition is open, positions and points are projected from
the players who have currently finished (the field size is that count
unless an enrollment count is supplied). Once the competition has been
finalized, the stored positions and points are served instead and entries
are flagged as not projected.

Players in a category with its own tee get that tee's course and slope
rating for their course handicap; stroke index stays the course's.

Usage:
    projector = LeaderboardProjector(store)
    board = projector.leaderboard(competition)
    teams = projector.team_leaderboard(competition)
"""

from golfresults.config import SCORING_GROSS, SCORING_NET
from golfresults.models import Competition, Leaderboard
from golfresults.ranking.engine import sort_leaderboard
from golfresults.ranking.points import rank_and_assign_points
from golfresults.results.builder import build_participant_results
from golfresults.results.teams import build_team_leaderboard
from golfresults.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def add_projected_points(entries, competition: Competition):
    """Project gross (and, for net modes, net) positions and points onto entries."""
    template = competition.points_template
    multiplier = competition.points_multiplier

    finished = [e for e in entries if e.is_finished]
    field_size = competition.enrollment_count or len(finished)
    for entry, position, points in rank_and_assign_points(
        finished, lambda e: e.relative_to_par, field_size, template, multiplier
    ):
        entry.position = position
        entry.points = points

    if competition.includes_net:
        with_net = [e for e in finished if e.has_net]
        field_size = competition.enrollment_count or len(with_net)
        for entry, position, points in rank_and_assign_points(
            with_net, lambda e: e.net_relative_to_par, field_size, template, multiplier
        ):
            entry.net_position = position
            entry.net_points = points

    for entry in entries:
        entry.is_projected = True
    return entries


def add_stored_points(entries, store, competition_id):
    """Copy finalized positions and points from the store onto entries."""
    gross = {r.participant_id: r for r in store.get_competition_results(competition_id, SCORING_GROSS)}
    net = {r.participant_id: r for r in store.get_competition_results(competition_id, SCORING_NET)}

    for entry in entries:
        gross_row = gross.get(entry.participant_id)
        net_row = net.get(entry.participant_id)
        entry.position = gross_row.position if gross_row else 0
        entry.points = gross_row.points if gross_row else 0
        entry.net_position = net_row.position if net_row else None
        entry.net_points = net_row.points if net_row else None
        entry.is_projected = False
    return entries


def applied_category_tees(competition: Competition):
    """Category tee overrides that at least one participant actually plays from."""
    if not competition.includes_net:
        return ()
    used = {p.category_id for p in competition.participants if p.category_id is not None}
    return tuple(t for t in competition.category_tees if t.category_id in used)


class LeaderboardProjector:
    """
    Serves live leaderboards.

    Args:
        store: Optional ResultStore; finalized competitions found there are
            served from stored results
    """

    def __init__(self, store=None):
        self.store = store

    def _is_final(self, competition_id):
        return self.store is not None and self.store.is_finalized(competition_id)

    def entries(self, competition: Competition):
        """Sorted leaderboard entries with positions and points attached."""
        entries = sort_leaderboard(build_participant_results(competition))

        if self._is_final(competition.competition_id):
            add_stored_points(entries, self.store, competition.competition_id)
        else:
            add_projected_points(entries, competition)
        return entries

    def leaderboard(self, competition: Competition) -> Leaderboard:
        """
        Full leaderboard for a competition.

        Raises:
            MissingStrokeIndexError: If net scoring is requested without a stroke index
        """
        entries = self.entries(competition)
        is_final = self._is_final(competition.competition_id)

        logger.info(
            f"Leaderboard for competition {competition.competition_id}: {len(entries)} entries, "
            f"{'stored' if is_final else 'projected'} points"
        )

        return Leaderboard(
            competition_id=competition.competition_id,
            entries=tuple(entries),
            scoring_mode=competition.scoring_mode,
            is_results_final=is_final,
            category_tees=applied_category_tees(competition),
        )

    def team_leaderboard(self, competition: Competition):
        """Team standings built from the competition's leaderboard entries."""
        return build_team_leaderboard(self.entries(competition), competition.points_multiplier)
