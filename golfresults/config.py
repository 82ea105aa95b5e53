"""
Central configuration for the Golf Results engine.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

import logging

# --- Round Structure ---
HOLES_PER_ROUND = 18

# --- WHS Standard Values ---
STANDARD_SLOPE_RATING = 113  # Neutral slope, used when a tee has no rating
STANDARD_COURSE_RATING = 72  # Used when a tee has no course rating
DEFAULT_TOTAL_PAR = 72  # Fallback when course pars are missing or unreadable
NEUTRAL_HOLE_PAR = DEFAULT_TOTAL_PAR // 18

# --- Validation Ranges ---
MIN_PAR = 3
MAX_PAR = 6
MIN_COURSE_RATING = 50
MAX_COURSE_RATING = 90
MIN_SLOPE_RATING = 55
MAX_SLOPE_RATING = 155
MIN_HANDICAP_INDEX = -10
MAX_HANDICAP_INDEX = 54

# --- Score Markers ---
UNPLAYED_HOLE = 0
UNREPORTED_HOLE = -1  # Player gave up on the hole

# Hardest-to-easiest pattern used when a course has no stroke index of its own
DEFAULT_STROKE_INDEX = (7, 15, 3, 11, 1, 9, 5, 17, 13, 8, 16, 4, 12, 2, 10, 6, 18, 14)

# --- Scoring Modes ---
SCORING_GROSS = "gross"
SCORING_NET = "net"
SCORING_BOTH = "both"
ALLOWED_SCORING_MODES = frozenset({SCORING_GROSS, SCORING_NET, SCORING_BOTH})

# Result rows are stored once per scoring type
SCORING_TYPES = (SCORING_GROSS, SCORING_NET)

# --- Points Configuration ---
DEFAULT_POINTS_MULTIPLIER = 1.0
FIRST_PLACE_BONUS = 2  # 1st place earns field size + 2
TEMPLATE_DEFAULT_KEY = "default"

# --- Team Statuses ---
TEAM_FINISHED = "FINISHED"
TEAM_IN_PROGRESS = "IN_PROGRESS"
TEAM_NOT_STARTED = "NOT_STARTED"
TEAM_STATUS_ORDER = {TEAM_FINISHED: 0, TEAM_IN_PROGRESS: 1, TEAM_NOT_STARTED: 2}

# --- Tee Ratings ---
PREFERRED_RATING_GENDER = "men"

# --- Game Types ---
DEFAULT_GAME_TYPE = "stroke_play"

# --- Logging ---
LOG_LEVEL = logging.INFO
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
