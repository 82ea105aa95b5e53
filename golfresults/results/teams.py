"""
Team Aggregation

Groups individual leaderboard entries by team and orders the teams:
1. Status: FINISHED, then IN_PROGRESS, then NOT_STARTED
2. Summed relative to par of members who have started with a clean card
3. Countback over those members' individual scores, best first

A team runs out of comparable players before its opponent loses the
countback. Teams that have not started are listed by first appearance and
receive no position or points; the others are paid by the default points
formula with the number of started teams as the field size.
"""

from collections import defaultdict
from functools import cmp_to_key

from golfresults.config import (
    DEFAULT_POINTS_MULTIPLIER,
    TEAM_FINISHED,
    TEAM_IN_PROGRESS,
    TEAM_NOT_STARTED,
    TEAM_STATUS_ORDER,
)
from golfresults.models import TeamStanding
from golfresults.ranking.points import tie_averaged_points
from golfresults.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def _has_started(entry):
    return entry.holes_played > 0


def _is_comparable(entry):
    return _has_started(entry) and not entry.has_invalid_hole


def team_status(members):
    """NOT_STARTED until any member has played, FINISHED once every card is locked and clean."""
    if not any(_has_started(m) for m in members):
        return TEAM_NOT_STARTED
    if all(m.is_locked and not m.has_invalid_hole for m in members):
        return TEAM_FINISHED
    return TEAM_IN_PROGRESS


def countback_scores(members):
    """Ascending relative-to-par of the members that count toward the team total."""
    return sorted(m.relative_to_par for m in members if _is_comparable(m))


def countback_compare(scores_a, scores_b):
    """
    Compare two countback lists position by position.

    Returns a negative number when a ranks better, positive when b does,
    0 when they are identical.
    """
    for i in range(max(len(scores_a), len(scores_b))):
        if i >= len(scores_a):
            return 1
        if i >= len(scores_b):
            return -1
        if scores_a[i] != scores_b[i]:
            return scores_a[i] - scores_b[i]
    return 0


class _TeamGroup:
    def __init__(self, team_id, team_name):
        self.team_id = team_id
        self.team_name = team_name
        self.members = []

    @property
    def status(self):
        return team_status(self.members)

    @property
    def total_relative_score(self):
        return sum(m.relative_to_par for m in self.members if _is_comparable(m))

    @property
    def total_shots(self):
        return sum(m.gross_total for m in self.members if _is_comparable(m))

    @property
    def max_holes_completed(self):
        return max((m.holes_played for m in self.members), default=0)

    @property
    def start_time(self):
        times = [m.start_time for m in self.members if m.start_time]
        return min(times) if times else None

    @property
    def countback(self):
        return countback_scores(self.members)

    def display_progress(self, status):
        if status == TEAM_NOT_STARTED:
            return f"Starts {self.start_time}" if self.start_time else "Starts TBD"
        if status == TEAM_FINISHED:
            return "F"
        return f"Thru {self.max_holes_completed}"


def _compare_groups(a, b):
    status_a, status_b = a.status, b.status
    if status_a != status_b:
        return TEAM_STATUS_ORDER[status_a] - TEAM_STATUS_ORDER[status_b]
    if status_a == TEAM_NOT_STARTED:
        return 0
    if a.total_relative_score != b.total_relative_score:
        return a.total_relative_score - b.total_relative_score
    return countback_compare(a.countback, b.countback)


def group_by_team(entries):
    """Group entries with a team id, keeping the order teams first appear in."""
    groups = {}
    for entry in entries:
        if entry.team_id is None:
            continue
        if entry.team_id not in groups:
            groups[entry.team_id] = _TeamGroup(entry.team_id, entry.team_name)
        groups[entry.team_id].members.append(entry)
    return list(groups.values())


def build_team_leaderboard(entries, points_multiplier=DEFAULT_POINTS_MULTIPLIER):
    """
    Build team standings from individual leaderboard entries.

    Args:
        entries: ParticipantResult-like objects with team_id and team_name
        points_multiplier: Competition points multiplier

    Returns:
        List of TeamStanding, best team first
    """
    groups = sorted(group_by_team(entries), key=cmp_to_key(_compare_groups))
    started = [g for g in groups if g.status != TEAM_NOT_STARTED]
    field_size = len(started)

    # Teams still equal after countback share a position and average the points
    placements = {}
    ties = defaultdict(list)
    for group in started:
        ties[(group.status, group.total_relative_score, tuple(group.countback))].append(group)

    position = 1
    for group in started:
        if group.team_id in placements:
            continue
        tied = ties[(group.status, group.total_relative_score, tuple(group.countback))]
        points = tie_averaged_points(position, len(tied), field_size, multiplier=points_multiplier)
        for member in tied:
            placements[member.team_id] = (position, points)
        position += len(tied)

    standings = []
    for group in groups:
        status = group.status
        has_started = status != TEAM_NOT_STARTED
        team_position, points = placements.get(group.team_id, (None, None))
        standings.append(TeamStanding(
            team_id=group.team_id,
            team_name=group.team_name,
            status=status,
            display_progress=group.display_progress(status),
            total_relative_score=group.total_relative_score if has_started else None,
            total_shots=group.total_shots if has_started else None,
            start_time=group.start_time,
            position=team_position,
            team_points=points,
        ))

    logger.debug(f"Team leaderboard: {len(standings)} teams, {field_size} started")
    return standings
