"""
Ranking and Points

Modules:
- engine: Completion rule, leaderboard ordering and tie grouping
- points: Default formula, template lookup and tie-averaged points
"""


def __getattr__(name):
    """Lazy imports to keep subpackage import cheap."""
    if name == "sort_leaderboard":
        from golfresults.ranking.engine import sort_leaderboard
        return sort_leaderboard
    if name == "rank_and_assign_points":
        from golfresults.ranking.points import rank_and_assign_points
        return rank_and_assign_points
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
