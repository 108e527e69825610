"""
GAMEMANAGER.PY - Tracks what screen the game is in
plus the settings picked in the menu
"""

from mathrace.Constants import (
    MAX_MULT_MIN, MAX_MULT_MAX, MAX_MULT_DEFAULT, SPEED_NAMES, SPEED_DEFAULT
)


class GameStateManager:
    def __init__(self):
        # Current screen: 'menu' or 'game'
        self.state = 'menu'
        self.previous_state = None

        # Menu settings
        self.max_mult = MAX_MULT_DEFAULT
        self.game_speed = SPEED_DEFAULT          # score tier 0-4
        self.high_scores_speed = SPEED_DEFAULT   # which table the menu shows

    def setState(self, new_state):
        """Switch to a different screen"""
        self.previous_state = self.state
        self.state = new_state

    def getState(self):
        return self.state

    def change_max_mult(self, step):
        self.max_mult = max(MAX_MULT_MIN, min(MAX_MULT_MAX, self.max_mult + step))

    def change_game_speed(self, step):
        self.game_speed = max(0, min(len(SPEED_NAMES) - 1, self.game_speed + step))

    def change_high_scores_speed(self, step):
        self.high_scores_speed = max(0, min(len(SPEED_NAMES) - 1, self.high_scores_speed + step))
