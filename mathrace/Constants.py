"""
CONSTANTS.PY - Every tunable number in one place
Screen, colors, speeds, scoring and where the high scores live
"""

import os
from pathlib import Path

# Display
WIDTH, HEIGHT = 800, 600
DISPLAY_SIZE = (WIDTH, HEIGHT)
FPS = 60
FONT = None          # pygame default font
MENUFONT = None
CAPTION = 'Math Racer'

DEBUG_MODE = os.environ.get('MATHRACE_DEBUG', '') == '1'
TOUCH_MODE = os.environ.get('MATHRACE_TOUCH', '') == '1'

# Colors
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (231, 76, 60)
GREEN = (46, 204, 113)
GOLD = (241, 196, 15)
ORANGE = (255, 107, 53)
BLUE = (52, 152, 219)
PURPLE = (155, 89, 182)
GREY = (189, 195, 199)
DARK_GREY = (149, 165, 166)
BACKGROUND = (44, 62, 80)
GRASS = (39, 119, 64)
ROAD = (70, 70, 76)
BARRIER_RED = (200, 40, 40)

COLORS = {
    "title": ORANGE,
    "selected": GOLD,
    "option": WHITE,
    "panel": (44, 62, 80, 230),
    "border": ORANGE,
    "rank1": GOLD,
    "rank2": (192, 57, 43),
    "rank3": (230, 126, 34),
}

# Answer car body colors, one per lane
ANSWER_CAR_COLORS = [(139, 0, 0), (184, 134, 11), (0, 100, 0)]
PLAYER_CAR_COLOR = BLUE
CAR_SIZE = (46, 80)

# Road layout
ROAD_WIDTH = min(420, int(WIDTH * 0.38))
ROAD_X = (WIDTH - ROAD_WIDTH) // 2
BARRIER_WIDTH = 25
LANE_COUNT = 3
LANE_WIDTH = ROAD_WIDTH / LANE_COUNT
LANES = [ROAD_X + LANE_WIDTH * (i + 0.5) for i in range(LANE_COUNT)]
PLAYER_Y = HEIGHT - 100
ANSWER_CAR_START_Y = 100
LANE_SWITCH_TIME = 0.2      # seconds to slide into a new lane

# Difficulty
MAX_MULT_MIN, MAX_MULT_MAX, MAX_MULT_DEFAULT = 2, 12, 10
SPEED_NAMES = ['Very Slow', 'Slow', 'Normal', 'Fast', 'Very Fast']
SPEED_DEFAULT = 2
SPEED_MAP = {0: 15, 1: 25, 2: 50, 3: 100, 4: 150}
SCROLL_FACTOR = 3           # answer cars move game_speed * 3 px per second

# Rules
START_LIVES = 3
POINTS_PER_FACTOR = 10      # correct answer = 10 * max multiplier
NEXT_ROUND_DELAY = 1.0      # after a collision
MISSED_ROUND_DELAY = 0.5    # after the cars drive off screen
FEEDBACK_TIME = 0.8

# Round generator
MIN_WRONG_SPREAD = 5
WRONG_ANSWER_ATTEMPTS = 1000

# High scores
TOP_SCORES = 5
MIN_HIGH_SCORE = 50
MAX_NAME_LENGTH = 15
DEFAULT_PLAYER_NAME = 'Anonymous'
STORAGE_KEY = 'mathRacingHighScores'


def user_data_path():
    """Folder for the high score file - created by the first save"""
    override = os.environ.get('MATHRACE_HOME')
    if override:
        path = Path(override)
    elif os.environ.get('LOCALAPPDATA'):
        path = Path(os.environ['LOCALAPPDATA']) / 'MathRacer'
    else:
        path = Path.home() / '.mathracer'
    return path


HIGH_SCORES_FILE = 'highscores.json'
