"""
Points Allocation

The default formula awards points by position in a field of N:
- 1st place: N + 2
- 2nd place: N
- 3rd and below: N - (position - 1), never below 0

A points template replaces the formula with a position -> points lookup
(falling back to its "default" key). The competition multiplier applies on
top of either source, and rounding happens last.

Tied players share the average of the points their positions would earn
individually, so a tie group is paid the same total as if the tie had been
broken (up to rounding).
"""

from typing import NamedTuple

from golfresults.config import DEFAULT_POINTS_MULTIPLIER, FIRST_PLACE_BONUS, TEMPLATE_DEFAULT_KEY
from golfresults.ranking.engine import group_ties
from golfresults.utils import round_half_away


class RankedEntry(NamedTuple):
    entry: object
    position: int
    points: int


def base_default_points(position, field_size):
    """Unscaled default-formula points for one position."""
    if position <= 0:
        return 0
    if position == 1:
        return field_size + FIRST_PLACE_BONUS
    if position == 2:
        return field_size
    return max(0, field_size - (position - 1))


def default_points(position, field_size, multiplier=DEFAULT_POINTS_MULTIPLIER):
    """
    Default-formula points for a position, scaled and rounded.

    Args:
        position: Finishing position (1-based)
        field_size: Number of participants in the field
        multiplier: Competition points multiplier

    Returns:
        Points awarded for the position
    """
    return round_half_away(base_default_points(position, field_size) * multiplier)


def template_points(structure, position):
    """Points for a position from a template, its default, or 0."""
    if position <= 0:
        return 0
    key = str(position)
    if key in structure:
        return structure[key]
    return structure.get(TEMPLATE_DEFAULT_KEY, 0)


def points_for_position(position, field_size, template=None):
    """Unscaled points for one position from the template or the default formula."""
    if template is not None:
        return template_points(template, position)
    return base_default_points(position, field_size)


def tie_averaged_points(start_position, group_size, field_size, template=None,
                        multiplier=DEFAULT_POINTS_MULTIPLIER):
    """
    Points for each member of a tie group occupying consecutive positions.

    Example: 5 players, three tied from 2nd -> (5 + 3 + 2) / 3 = 3.33 -> 3 each
    """
    positions = range(start_position, start_position + group_size)
    total = sum(points_for_position(p, field_size, template) for p in positions)
    return round_half_away(total / group_size * multiplier)


def rank_and_assign_points(entries, score_getter, field_size, template=None,
                           multiplier=DEFAULT_POINTS_MULTIPLIER):
    """
    Rank entries by score and award tie-averaged points.

    Entries are sorted by score, then by name and participant id so a rerun
    on the same field always yields the same order.

    Args:
        entries: Objects with name and participant_id
        score_getter: Callable returning the ranking score (lower is better)
        field_size: N used by the default formula
        template: Optional points template mapping
        multiplier: Competition points multiplier

    Returns:
        List of RankedEntry in finishing order
    """
    ordered = sorted(
        entries,
        key=lambda e: (score_getter(e), (e.name or "").casefold(), e.participant_id),
    )

    ranked = []
    position = 1
    for group in group_ties(ordered, score_getter):
        points = tie_averaged_points(position, len(group), field_size, template, multiplier)
        ranked.extend(RankedEntry(entry, position, points) for entry in group)
        position += len(group)
    return ranked
