"""
Tour Standings and Player History

Read models over the finalized rows held in a ResultStore. Only
competitions that have been finalized contribute, and points are taken as
stored (the multiplier and tie averaging were applied at finalize time).

Standings are ordered by total points, then by competitions played.
Players equal on points share the best position (1, 1, 3).

Usage:
    from golfresults.results.standings import get_tour_standings
    standings = get_tour_standings(store, tour_id=3)
"""

import numpy as np
import pandas as pd

from golfresults.config import SCORING_GROSS
from golfresults.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

STANDINGS_COLUMNS = [
    'position', 'player_id', 'player_name', 'total_points',
    'competitions_played', 'average_position',
]


def _results_with_competitions(store, scoring_type):
    results = store.results
    results = results[results['scoring_type'] == scoring_type]
    return results.merge(store.competitions, on='competition_id', how='inner')


def get_player_results(store, player_id, scoring_type=SCORING_GROSS) -> pd.DataFrame:
    """
    A player's stored results across competitions, newest first.

    Returns:
        DataFrame with the result columns plus the competition's tour_id,
        name and date
    """
    df = _results_with_competitions(store, scoring_type)
    df = df[df['player_id'] == player_id]
    return df.sort_values(['date', 'competition_id'], ascending=False, kind='stable').reset_index(drop=True)


def get_player_tour_points(store, player_id, tour_id, scoring_type=SCORING_GROSS):
    """
    Total points and competitions played for one player in one tour.

    Returns:
        Tuple (total_points, competitions_played)
    """
    df = _results_with_competitions(store, scoring_type)
    df = df[(df['player_id'] == player_id) & (df['tour_id'] == tour_id)]
    return int(df['points'].sum()), int(df['competition_id'].nunique())


def assign_standing_positions(df: pd.DataFrame) -> pd.Series:
    """
    Standard competition positions for a frame already in standings order.

    A row starts a new position when its points differ from the row above;
    otherwise it shares that row's position. Competitions played only
    orders players level on points.
    """
    if df.empty:
        return pd.Series(dtype=int)
    changed = df['total_points'] != df['total_points'].shift()
    slots = np.arange(1, len(df) + 1)
    positions = pd.Series(np.where(changed, slots, np.nan), index=df.index)
    return positions.ffill().astype(int)


def get_tour_standings(store, tour_id, scoring_type=SCORING_GROSS) -> pd.DataFrame:
    """
    Aggregate finalized results of a tour into player standings.

    Rows without a player id (guests) are left out.

    Returns:
        DataFrame with STANDINGS_COLUMNS, best player first
    """
    df = _results_with_competitions(store, scoring_type)
    df = df[(df['tour_id'] == tour_id) & df['player_id'].notna()]

    if df.empty:
        logger.info(f"Tour {tour_id}: no finalized {scoring_type} results")
        return pd.DataFrame(columns=STANDINGS_COLUMNS)

    standings = df.groupby('player_id').agg(
        player_name=('player_name', 'last'),
        total_points=('points', 'sum'),
        competitions_played=('competition_id', 'nunique'),
        average_position=('position', lambda s: round(float(np.mean(s)), 2)),
    ).reset_index()

    standings['player_id'] = standings['player_id'].astype(int)
    standings['total_points'] = standings['total_points'].astype(int)
    standings = standings.sort_values(
        ['total_points', 'competitions_played', 'player_id'],
        ascending=[False, False, True],
        kind='stable',
    ).reset_index(drop=True)
    standings['position'] = assign_standing_positions(standings)

    logger.info(
        f"Tour {tour_id}: {len(standings)} players over "
        f"{df['competition_id'].nunique()} finalized competitions"
    )
    return standings[STANDINGS_COLUMNS]
