"""
Input Ingestion

Modules:
- parsing: Tolerant JSON parsing of stored scores, pars, stroke indexes,
  points templates and tee ratings
"""


def __getattr__(name):
    """Lazy imports to keep subpackage import cheap."""
    if name == "parse_score":
        from golfresults.ingestion.parsing import parse_score
        return parse_score
    if name == "parse_pars":
        from golfresults.ingestion.parsing import parse_pars
        return parse_pars
    if name == "parse_stroke_index":
        from golfresults.ingestion.parsing import parse_stroke_index
        return parse_stroke_index
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
