"""
Golf Results - Core Package

This package contains the core modules for:
- Score and handicap math (golfresults.scoring)
- Ranking and points allocation (golfresults.ranking)
- Finalized results, live leaderboards and team standings (golfresults.results)
- Game-type strategies (golfresults.games)
- Parsing of stored score data (golfresults.ingestion)
- Shared configuration and utilities
"""

from golfresults.config import *
