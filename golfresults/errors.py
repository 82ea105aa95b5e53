"""
Exception types raised by the scoring engine.

Expected player states (disqualified, did not finish, still playing) are
result states, not errors, and never raise.
"""


class ScoringError(Exception):
    """Base exception for scoring engine errors"""
    pass


class ValidationError(ScoringError, ValueError):
    """Raised when input data is rejected before any computation"""
    pass


class MissingStrokeIndexError(ScoringError):
    """Raised when net scoring is requested for a course without a stroke index"""
    pass


class CompetitionNotFoundError(ScoringError, LookupError):
    """Raised when a competition or its course cannot be found"""
    pass
