"""
Tests for live leaderboard projection.
"""

import pytest

from golfresults.errors import MissingStrokeIndexError
from golfresults.models import CategoryTee
from golfresults.results.finalizer import ResultsFinalizer
from golfresults.results.projector import LeaderboardProjector
from golfresults.results.store import ResultStore


class TestProjectedLeaderboard:
    """Tests for leaderboards of competitions still in play."""

    def test_order_and_projected_points(self, make_player, make_competition):
        competition = make_competition([
            make_player(1, "Dee", 5, is_dq=True),
            make_player(2, "Bob", 2),
            make_player(3, "Ann", -1),
            make_player(4, "Cid", -3, score=(3,) * 9 + (0,) * 9, is_locked=False),
        ])
        board = LeaderboardProjector().leaderboard(competition)
        names = [e.name for e in board.entries]
        assert names == ["Cid", "Ann", "Bob", "Dee"]
        assert board.is_results_final is False

        by_name = {e.name: e for e in board.entries}
        # field is the two finished players
        assert (by_name["Ann"].position, by_name["Ann"].points) == (1, 4)
        assert (by_name["Bob"].position, by_name["Bob"].points) == (2, 2)
        assert by_name["Cid"].position == 0
        assert by_name["Dee"].position == 0
        assert all(e.is_projected for e in board.entries)

    def test_dnf_after_window_closes(self, make_player, make_competition):
        competition = make_competition([
            make_player(1, "Ann", 0),
            make_player(2, "Short", score=(4,) * 12 + (0,) * 6),
            make_player(3, "Shorter", score=(4,) * 6 + (0,) * 12),
        ], is_window_closed=True)
        entries = LeaderboardProjector().leaderboard(competition).entries
        assert [e.name for e in entries] == ["Ann", "Short", "Shorter"]
        assert [e.is_dnf for e in entries] == [False, True, True]

    def test_tied_players_share_points(self, make_player, make_competition):
        competition = make_competition([
            make_player(1, "Ann", 0),
            make_player(2, "Bob", 0),
            make_player(3, "Cid", 4),
        ])
        entries = LeaderboardProjector().leaderboard(competition).entries
        # N=3: (5 + 3) / 2 = 4 each, then 3 - 2 = 1
        assert [(e.position, e.points) for e in entries] == [(1, 4), (1, 4), (3, 1)]

    def test_net_columns(self, make_player, make_competition):
        competition = make_competition([
            make_player(1, "Ann", 0, handicap_index=0.0),
            make_player(2, "Bob", 4, handicap_index=9.0),
        ], scoring_mode="both")
        by_name = {e.name: e for e in LeaderboardProjector().leaderboard(competition).entries}
        assert by_name["Ann"].position == 1
        assert by_name["Bob"].net_position == 1
        assert by_name["Bob"].net_relative_to_par == -5
        assert by_name["Ann"].net_points == 2

    def test_net_requires_stroke_index(self, make_player, make_competition):
        competition = make_competition(
            [make_player(1, "Ann", 0, handicap_index=4.0)], scoring_mode="net", stroke_index=None
        )
        with pytest.raises(MissingStrokeIndexError):
            LeaderboardProjector().leaderboard(competition)

    def test_reports_used_category_tees(self, make_player, make_competition):
        used = CategoryTee(category_id=1, tee_id=3, tee_name="Yellow", course_rating=70, slope_rating=118)
        unused = CategoryTee(category_id=2, tee_id=4, tee_name="Red", course_rating=68, slope_rating=110)
        competition = make_competition(
            [make_player(1, "Ann", 0, handicap_index=4.0, category_id=1)],
            scoring_mode="net",
            category_tees=(used, unused),
        )
        assert LeaderboardProjector().leaderboard(competition).category_tees == (used,)

    def test_to_frame(self, make_player, make_competition):
        competition = make_competition([make_player(1, "Ann", 0), make_player(2, "Bob", 1)])
        df = LeaderboardProjector().leaderboard(competition).to_frame()
        assert list(df['name']) == ["Ann", "Bob"]
        assert list(df['position']) == [1, 2]


class TestFinalizedLeaderboard:
    """Tests for leaderboards served from stored results."""

    def test_uses_stored_points(self, make_player, make_competition):
        store = ResultStore()
        competition = make_competition(
            [make_player(1, "Ann", 0), make_player(2, "Bob", 2)], enrollment_count=10
        )
        ResultsFinalizer(store, {1: competition}).finalize(1)

        board = LeaderboardProjector(store).leaderboard(competition)
        assert board.is_results_final is True
        assert [(e.position, e.points) for e in board.entries] == [(1, 12), (2, 10)]
        assert not any(e.is_projected for e in board.entries)

    def test_players_without_stored_row(self, make_player, make_competition):
        store = ResultStore()
        finalized = make_competition([make_player(1, "Ann", 0)])
        ResultsFinalizer(store, {1: finalized}).finalize(1)

        # A late card that was never finalized carries no points
        current = make_competition([make_player(1, "Ann", 0), make_player(2, "Late", 1)])
        by_name = {e.name: e for e in LeaderboardProjector(store).leaderboard(current).entries}
        assert (by_name["Late"].position, by_name["Late"].points) == (0, 0)
        assert by_name["Ann"].points == 3
