"""
Ranking Engine

Decides who has finished, orders a competition field and groups ties:
- Disqualified entries sort last, alphabetically by name
- Did-not-finish entries sort above DQ, more holes played first
- Everyone else sorts by relative to par, lower first, stable on ties

Tie groups take as many consecutive position slots as they have members,
so three players tied for 2nd are followed by the player in 5th.
"""

from golfresults.config import HOLES_PER_ROUND


def is_finished(is_dq, holes_played, has_invalid_hole, is_locked, is_window_closed,
                has_manual_total=False):
    """
    Completion rule for ranking.

    A manual total always counts as finished unless disqualified. A
    hole-by-hole round needs all 18 holes with no unreported hole, and while
    the competition window is still open the player must also have locked
    the card.
    """
    if is_dq:
        return False
    if has_manual_total:
        return True
    if holes_played != HOLES_PER_ROUND or has_invalid_hole:
        return False
    return bool(is_window_closed or is_locked)


def is_dnf(is_dq, holes_played, is_window_closed):
    """Window closed with fewer than 18 holes played (DQ takes precedence)."""
    return bool(is_window_closed and not is_dq and holes_played < HOLES_PER_ROUND)


def _sort_key(entry):
    if entry.is_dq:
        return (2, (entry.name or "").casefold())
    if entry.is_dnf:
        return (1, -entry.holes_played)
    return (0, entry.relative_to_par)


def sort_leaderboard(entries):
    """
    Order all participants of a competition for display.

    Entries need is_dq, is_dnf, name, holes_played and relative_to_par.
    Equal relative-to-par entries keep their incoming order; ties are
    resolved later by grouping.
    """
    return sorted(entries, key=_sort_key)


def group_ties(sorted_items, score_getter):
    """
    Split a pre-sorted sequence into runs of equal score.

    Returns:
        List of lists, one per tie group, in the original order
    """
    groups = []
    previous = object()
    for item in sorted_items:
        score = score_getter(item)
        if groups and score == previous:
            groups[-1].append(item)
        else:
            groups.append([item])
        previous = score
    return groups


def assign_positions_with_ties(sorted_items, score_getter):
    """
    Assign positions to a pre-sorted sequence; equal scores share a position.

    Example: scores [-2, 0, 0, 0, 5] -> positions [1, 2, 2, 2, 5]

    Returns:
        List of (item, position) tuples
    """
    ranked = []
    position = 1
    for group in group_ties(sorted_items, score_getter):
        ranked.extend((item, position) for item in group)
        position += len(group)
    return ranked
