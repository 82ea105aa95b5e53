"""
Tests for finalizing competition results.
"""

import logging
from datetime import datetime

import pandas as pd
import pytest

from golfresults.errors import CompetitionNotFoundError, MissingStrokeIndexError
from golfresults.models import CategoryTee, Participant
from golfresults.results.finalizer import ResultsFinalizer, compute_results
from golfresults.results.store import ResultStore

FIXED_TIME = datetime(2026, 5, 1, 18, 0)


def finalizer_for(competition, store=None):
    store = store if store is not None else ResultStore()
    return ResultsFinalizer(store, {competition.competition_id: competition}, clock=lambda: FIXED_TIME)


class TestComputeResults:
    """Tests for compute_results."""

    def test_gross_positions_and_points(self, make_player, make_competition):
        competition = make_competition([
            make_player(1, "Ann", -2),
            make_player(2, "Bob", 1),
            make_player(3, "Cid", 1),
            make_player(4, "Dee", 4),
        ])
        result = compute_results(competition)
        rows = {r.participant_id: r for r in result.gross}
        assert [rows[i].position for i in (1, 2, 3, 4)] == [1, 2, 2, 4]
        # N=4: 6, (4 + 2) / 2, 1
        assert [rows[i].points for i in (1, 2, 3, 4)] == [6, 3, 3, 1]
        assert rows[1].gross_score == 70
        assert rows[1].relative_to_par == -2
        assert result.net == ()

    def test_missing_pars_use_neutral_par(self, make_player, make_competition, caplog):
        competition = make_competition([make_player(1, "Ann", -2)], pars=())
        with caplog.at_level(logging.WARNING):
            result = compute_results(competition)
        assert "using neutral par 72" in caplog.text
        assert result.gross[0].relative_to_par == -2

    def test_unfinished_players_not_stored(self, make_player, make_competition):
        invalid = list(make_player(0, "x").score)
        invalid[6] = -1
        competition = make_competition([
            make_player(1, "Ann", 0),
            make_player(2, "Gave Up", score=tuple(invalid)),
            make_player(3, "Disqualified", -5, is_dq=True),
            make_player(4, "Unlocked", 0, is_locked=False),
            make_player(5, "Partial", score=(4,) * 9 + (0,) * 9),
        ])
        result = compute_results(competition)
        assert [r.participant_id for r in result.gross] == [1]
        assert result.gross[0].points == 3

    def test_window_closed_counts_unlocked_cards(self, make_player, make_competition):
        competition = make_competition(
            [make_player(1, "Ann", 0, is_locked=False), make_player(2, "Bob", 2)],
            is_window_closed=True,
        )
        assert len(compute_results(competition).gross) == 2

    def test_manual_total(self, make_player, make_competition):
        competition = make_competition([
            make_player(1, "Paper Card", score=(), manual_total=75, is_locked=False),
            make_player(2, "Bob", 1),
        ])
        rows = compute_results(competition).gross
        assert rows[0].participant_id == 2
        assert rows[1].participant_id == 1
        assert rows[1].relative_to_par == 3
        assert rows[1].gross_score == 75

    def test_enrollment_count_sets_field_size(self, make_player, make_competition):
        competition = make_competition([make_player(1, "Ann", 0)], enrollment_count=20)
        assert compute_results(competition).gross[0].points == 22

    def test_template_and_multiplier(self, make_player, make_competition):
        competition = make_competition(
            [make_player(1, "Ann", 0), make_player(2, "Bob", 1), make_player(3, "Cid", 2)],
            points_template={"1": 50, "2": 30, "default": 5},
            points_multiplier=2.0,
        )
        assert [r.points for r in compute_results(competition).gross] == [100, 60, 10]


class TestNetResults:
    """Tests for net rows."""

    def test_scenario_net_total(self, make_competition):
        player = Participant(1, "Ann", score=(5,) * 18, is_locked=True, handicap_index=10.0)
        competition = make_competition(
            [player], scoring_mode="net", course_rating=70, slope_rating=120
        )
        result = compute_results(competition)
        assert len(result.gross) == 1
        assert result.net[0].net_score == 81
        assert result.net[0].relative_to_par == 9

    def test_net_ranking_independent_of_gross(self, make_player, make_competition):
        competition = make_competition([
            make_player(1, "Scratch", 2, handicap_index=0.0),
            make_player(2, "Bogey", 10, handicap_index=18.0),
        ], scoring_mode="both")
        result = compute_results(competition)
        assert [r.participant_id for r in result.gross] == [1, 2]
        assert [r.participant_id for r in result.net] == [2, 1]
        assert result.net[0].relative_to_par == -8

    def test_player_without_handicap_has_no_net_row(self, make_player, make_competition):
        competition = make_competition([
            make_player(1, "Ann", 0, handicap_index=5.0),
            make_player(2, "Guest", -1),
        ], scoring_mode="both")
        result = compute_results(competition)
        assert len(result.gross) == 2
        assert [r.participant_id for r in result.net] == [1]
        # net field is the net-ranked subset
        assert result.net[0].points == 3

    def test_enrollment_handicap_fallback(self, make_player, make_competition):
        competition = make_competition(
            [make_player(1, "Ann", 0, enrollment_handicap_index=18.0)], scoring_mode="net"
        )
        assert compute_results(competition).net[0].net_score == 54

    def test_category_tee_override(self, make_player, make_competition):
        tee = CategoryTee(category_id=7, tee_id=2, tee_name="Red", course_rating=72, slope_rating=140)
        competition = make_competition([
            make_player(1, "Ann", 0, handicap_index=10.0, category_id=7),
            make_player(2, "Bob", 0, handicap_index=10.0),
        ], scoring_mode="net", category_tees=(tee,))
        net = {r.participant_id: r.net_score for r in compute_results(competition).net}
        # 10 * 140 / 113 = 12.39 vs 10
        assert net[1] == 72 - 12
        assert net[2] == 72 - 10

    def test_manual_total_net(self, make_player, make_competition):
        competition = make_competition(
            [make_player(1, "Paper Card", score=(), manual_total=90, handicap_index=18.0)],
            scoring_mode="net",
        )
        row = compute_results(competition).net[0]
        assert row.net_score == 72
        assert row.relative_to_par == 0

    def test_missing_stroke_index(self, make_player, make_competition):
        competition = make_competition(
            [make_player(1, "Ann", 0, handicap_index=5.0)], scoring_mode="net", stroke_index=None
        )
        with pytest.raises(MissingStrokeIndexError):
            compute_results(competition)

    def test_gross_mode_needs_no_stroke_index(self, make_player, make_competition):
        competition = make_competition([make_player(1, "Ann", 0)], stroke_index=None)
        assert len(compute_results(competition).gross) == 1


class TestResultsFinalizer:
    """Tests for ResultsFinalizer."""

    def test_finalize_stores_rows(self, make_player, make_competition):
        competition = make_competition([make_player(1, "Ann", 0), make_player(2, "Bob", 3)])
        finalizer = finalizer_for(competition)
        result = finalizer.finalize(1)

        assert finalizer.is_finalized(1)
        assert result.finalized_at == FIXED_TIME
        stored = finalizer.store.get_competition_results(1)
        assert [(r.participant_id, r.position, r.points) for r in stored] == [(1, 1, 4), (2, 2, 2)]

    def test_recalculate_is_idempotent(self, make_player, make_competition):
        competition = make_competition([
            make_player(1, "Ann", 0, handicap_index=4.2),
            make_player(2, "Bob", 0, handicap_index=12.0),
            make_player(3, "Cid", 5, handicap_index=20.1),
        ], scoring_mode="both")
        finalizer = finalizer_for(competition)
        finalizer.finalize(1)
        first = finalizer.store.results
        finalizer.recalculate(1)
        pd.testing.assert_frame_equal(first, finalizer.store.results)

    def test_recalculate_replaces_rows(self, make_player, make_competition):
        store = ResultStore()
        before = make_competition([make_player(1, "Ann", 0), make_player(2, "Bob", 3)])
        finalizer_for(before, store).finalize(1)

        after = make_competition([make_player(1, "Ann", 0), make_player(2, "Bob", 3, is_dq=True)])
        finalizer_for(after, store).recalculate(1)
        assert [r.participant_id for r in store.get_competition_results(1)] == [1]

    def test_unknown_competition(self, make_player, make_competition):
        store = ResultStore()
        finalizer = ResultsFinalizer(store, {})
        with pytest.raises(CompetitionNotFoundError):
            finalizer.finalize(99)
        assert not store.is_finalized(99)

    def test_failure_keeps_previous_rows(self, make_player, make_competition):
        store = ResultStore()
        good = make_competition([make_player(1, "Ann", 0, handicap_index=3.0)], scoring_mode="net")
        finalizer_for(good, store).finalize(1)

        broken = make_competition(
            [make_player(1, "Ann", 0, handicap_index=3.0)], scoring_mode="net", stroke_index=None
        )
        with pytest.raises(MissingStrokeIndexError):
            finalizer_for(broken, store).recalculate(1)
        assert len(store.get_competition_results(1, "net")) == 1
