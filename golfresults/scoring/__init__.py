"""
Score and Handicap Math

Modules:
- metrics: Holes played, gross total, relative-to-par, invalid-hole checks
- handicap: WHS course handicap, stroke distribution and net scores
"""


def __getattr__(name):
    """Lazy imports to keep subpackage import cheap."""
    if name == "calculate_score_metrics":
        from golfresults.scoring.metrics import calculate_score_metrics
        return calculate_score_metrics
    if name == "course_handicap":
        from golfresults.scoring.handicap import course_handicap
        return course_handicap
    if name == "distribute_handicap_strokes":
        from golfresults.scoring.handicap import distribute_handicap_strokes
        return distribute_handicap_strokes
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
