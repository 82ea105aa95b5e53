"""
Shared builders for scoring tests.
"""

import pytest

from golfresults.models import Competition, Participant

PARS_72 = (4,) * 18
STROKE_INDEX = tuple(range(1, 19))


def score_relative(relative, pars=PARS_72):
    """A complete 18-hole round finishing `relative` strokes over par."""
    score = list(pars)
    step = 1 if relative > 0 else -1
    hole = 0
    for _ in range(abs(relative)):
        score[hole % 18] += step
        hole += 1
    return tuple(score)


@pytest.fixture
def pars():
    return PARS_72


@pytest.fixture
def make_player():
    """Build a locked, complete Participant at a given relative to par."""
    def _make(participant_id, name, relative=0, **kwargs):
        kwargs.setdefault('score', score_relative(relative))
        kwargs.setdefault('is_locked', True)
        kwargs.setdefault('player_id', participant_id)
        return Participant(participant_id=participant_id, name=name, **kwargs)
    return _make


@pytest.fixture
def make_competition():
    """Build a Competition on a par-72 course with a 1-18 stroke index."""
    def _make(participants, competition_id=1, **kwargs):
        kwargs.setdefault('pars', PARS_72)
        kwargs.setdefault('stroke_index', STROKE_INDEX)
        return Competition(competition_id=competition_id, participants=participants, **kwargs)
    return _make
