"""
Competition Results

Modules:
- builder: Per-participant gross, handicap, net and status figures
- finalizer: Official results computed and stored once play closes
- projector: Live leaderboards with projected or stored points
- teams: Team standings with status and countback
- store: DataFrame-backed result rows with per-competition replace
- standings: Tour standings and player history over stored results
"""


def __getattr__(name):
    """Lazy imports to keep subpackage import cheap."""
    if name == "ResultsFinalizer":
        from golfresults.results.finalizer import ResultsFinalizer
        return ResultsFinalizer
    if name == "LeaderboardProjector":
        from golfresults.results.projector import LeaderboardProjector
        return LeaderboardProjector
    if name == "ResultStore":
        from golfresults.results.store import ResultStore
        return ResultStore
    if name == "build_team_leaderboard":
        from golfresults.results.teams import build_team_leaderboard
        return build_team_leaderboard
    if name == "get_tour_standings":
        from golfresults.results.standings import get_tour_standings
        return get_tour_standings
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
