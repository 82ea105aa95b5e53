"""
Competition Result Store

Holds the persisted CompetitionResult rows in a pandas DataFrame. A
competition's rows are only ever replaced as a whole: every finalize or
recalculate drops the previous rows and inserts the fresh set in a single
swap, so readers never see a half-written competition.

Callers must serialize finalize runs per competition; the store does not
lock.

Usage:
    store = ResultStore()
    store.replace_competition_results(result_set, tour_id=3)
    store.save_csv(folder)
    store = ResultStore.load_csv(folder)
"""

from datetime import datetime
from pathlib import Path

import pandas as pd

from golfresults.config import SCORING_GROSS
from golfresults.models import CompetitionResult, RESULT_COLUMNS, ResultSet
from golfresults.utils import atomic_write_csv, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

COMPETITION_COLUMNS = ['competition_id', 'tour_id', 'name', 'date', 'finalized_at']

RESULTS_FILE = "competition_results.csv"
COMPETITIONS_FILE = "finalized_competitions.csv"

_INT_FIELDS = ('competition_id', 'participant_id', 'position', 'points',
               'gross_score', 'net_score', 'relative_to_par', 'player_id')


def _clean(value):
    return None if pd.isna(value) else value


def _row_to_result(row) -> CompetitionResult:
    values = {col: _clean(row[col]) for col in RESULT_COLUMNS}
    for col in _INT_FIELDS:
        if values[col] is not None:
            values[col] = int(values[col])
    return CompetitionResult(**values)


class ResultStore:
    """In-memory CompetitionResult table with per-competition atomic replace."""

    def __init__(self, results: pd.DataFrame | None = None, competitions: pd.DataFrame | None = None):
        self._results = results if results is not None else pd.DataFrame(columns=RESULT_COLUMNS)
        self._competitions = (
            competitions if competitions is not None else pd.DataFrame(columns=COMPETITION_COLUMNS)
        )

    # --- Writes ---

    def replace_competition_results(self, result_set: ResultSet, tour_id=None, name=None, date=None):
        """
        Delete all rows for the competition and insert the new set.

        The new tables are built first and swapped in together, so a failure
        while building leaves the previous rows untouched.
        """
        competition_id = result_set.competition_id
        finalized_at = result_set.finalized_at or datetime.now()

        kept = self._results[self._results['competition_id'] != competition_id]
        fresh = result_set.to_frame()
        if kept.empty:
            results = fresh.reset_index(drop=True)
        elif fresh.empty:
            results = kept.reset_index(drop=True)
        else:
            results = pd.concat([kept, fresh], ignore_index=True)

        kept_meta = self._competitions[self._competitions['competition_id'] != competition_id]
        meta = pd.DataFrame(
            [{
                'competition_id': competition_id,
                'tour_id': tour_id,
                'name': name,
                'date': date,
                'finalized_at': finalized_at,
            }],
            columns=COMPETITION_COLUMNS,
        )
        competitions = meta if kept_meta.empty else pd.concat([kept_meta, meta], ignore_index=True)

        replaced = len(self._results) - len(kept)
        self._results, self._competitions = results, competitions
        logger.info(
            f"Stored {len(fresh)} result rows for competition {competition_id} "
            f"(replaced {replaced})"
        )

    # --- Reads ---

    def get_competition_results(self, competition_id, scoring_type=SCORING_GROSS):
        """Stored rows for one competition and scoring type, ordered by position."""
        df = self._results
        subset = df[(df['competition_id'] == competition_id) & (df['scoring_type'] == scoring_type)]
        subset = subset.sort_values(['position', 'participant_id'], kind='stable')
        return [_row_to_result(row) for _, row in subset.iterrows()]

    def is_finalized(self, competition_id) -> bool:
        return bool((self._competitions['competition_id'] == competition_id).any())

    def finalized_at(self, competition_id):
        match = self._competitions[self._competitions['competition_id'] == competition_id]
        if match.empty:
            return None
        return _clean(match.iloc[0]['finalized_at'])

    @property
    def results(self) -> pd.DataFrame:
        return self._results.copy()

    @property
    def competitions(self) -> pd.DataFrame:
        return self._competitions.copy()

    # --- CSV Persistence ---

    def save_csv(self, folder: Path) -> None:
        """Write both tables to folder atomically."""
        folder = Path(folder)
        atomic_write_csv(self._results, folder / RESULTS_FILE, index=False)
        atomic_write_csv(self._competitions, folder / COMPETITIONS_FILE, index=False)
        logger.info(f"Saved {len(self._results)} result rows to {folder}")

    @classmethod
    def load_csv(cls, folder: Path) -> "ResultStore":
        """Load a store previously written by save_csv."""
        folder = Path(folder)
        results = pd.read_csv(folder / RESULTS_FILE)
        competitions = pd.read_csv(folder / COMPETITIONS_FILE, parse_dates=['finalized_at'])
        logger.info(f"Loaded {len(results)} result rows from {folder}")
        return cls(results, competitions)
