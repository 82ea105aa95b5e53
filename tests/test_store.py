"""
Tests for the competition result store.
"""

from datetime import datetime

from golfresults.models import CompetitionResult, ResultSet
from golfresults.results.store import COMPETITIONS_FILE, RESULTS_FILE, ResultStore


def row(competition_id, participant_id, position, points, scoring_type="gross", net_score=None):
    return CompetitionResult(
        competition_id=competition_id,
        participant_id=participant_id,
        scoring_type=scoring_type,
        position=position,
        points=points,
        gross_score=72 + position,
        net_score=net_score,
        relative_to_par=position,
        player_id=participant_id * 10,
        player_name=f"Player {participant_id}",
    )


def result_set(competition_id, gross, net=()):
    return ResultSet(
        competition_id=competition_id,
        gross=tuple(gross),
        net=tuple(net),
        finalized_at=datetime(2026, 6, 1, 12, 0),
    )


class TestReplaceCompetitionResults:
    """Tests for replace_competition_results."""

    def test_insert_and_read(self):
        store = ResultStore()
        store.replace_competition_results(result_set(1, [row(1, 2, 2, 3), row(1, 1, 1, 5)]), tour_id=4)

        rows = store.get_competition_results(1)
        assert [r.participant_id for r in rows] == [1, 2]
        assert rows[0] == row(1, 1, 1, 5)
        assert store.is_finalized(1)
        assert store.finalized_at(1) == datetime(2026, 6, 1, 12, 0)

    def test_replace_drops_old_rows(self):
        store = ResultStore()
        store.replace_competition_results(result_set(1, [row(1, 1, 1, 5), row(1, 2, 2, 3)]))
        store.replace_competition_results(result_set(1, [row(1, 3, 1, 3)]))

        assert [r.participant_id for r in store.get_competition_results(1)] == [3]
        assert len(store.competitions) == 1

    def test_other_competitions_untouched(self):
        store = ResultStore()
        store.replace_competition_results(result_set(1, [row(1, 1, 1, 5)]))
        store.replace_competition_results(result_set(2, [row(2, 1, 1, 3)]))
        store.replace_competition_results(result_set(2, [row(2, 2, 1, 3)]))

        assert [r.participant_id for r in store.get_competition_results(1)] == [1]
        assert [r.participant_id for r in store.get_competition_results(2)] == [2]

    def test_empty_result_set_still_finalizes(self):
        store = ResultStore()
        store.replace_competition_results(result_set(1, []))
        assert store.is_finalized(1)
        assert store.get_competition_results(1) == []

    def test_scoring_types_kept_apart(self):
        store = ResultStore()
        store.replace_competition_results(result_set(
            1, [row(1, 1, 1, 5)], [row(1, 1, 1, 5, scoring_type="net", net_score=70)]
        ))
        net = store.get_competition_results(1, "net")
        assert len(net) == 1
        assert net[0].net_score == 70
        assert store.get_competition_results(1, "gross")[0].net_score is None

    def test_unknown_competition(self):
        store = ResultStore()
        assert store.is_finalized(5) is False
        assert store.finalized_at(5) is None
        assert store.get_competition_results(5) == []


class TestCsvPersistence:
    """Tests for save_csv / load_csv."""

    def test_round_trip(self, tmp_path):
        store = ResultStore()
        store.replace_competition_results(result_set(
            1, [row(1, 1, 1, 5), row(1, 2, 2, 3)], [row(1, 1, 1, 5, scoring_type="net", net_score=68)]
        ), tour_id=9, name="Spring Open", date="2026-05-30")
        store.save_csv(tmp_path)

        assert (tmp_path / RESULTS_FILE).exists()
        assert (tmp_path / COMPETITIONS_FILE).exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == sorted([RESULTS_FILE, COMPETITIONS_FILE])

        loaded = ResultStore.load_csv(tmp_path)
        assert loaded.get_competition_results(1) == store.get_competition_results(1)
        assert loaded.get_competition_results(1, "net") == store.get_competition_results(1, "net")
        assert loaded.is_finalized(1)
