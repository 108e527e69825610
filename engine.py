"""
ENGINE.PY - The heart of the game
Controls which screen is shown and keeps the game running
Owns the one high score table and hands it to every screen
"""

import argparse
import pygame
from mathrace.Constants import (
    DISPLAY_SIZE, FPS, CAPTION, DEBUG_MODE, TOUCH_MODE, HIGH_SCORES_FILE, user_data_path
)
from mathrace.Game import Game
from mathrace.menu import MainMenu
from mathrace.GameManager import GameStateManager
from mathrace.InputManager import InputManager, TouchControls
from mathrace.highscores import HighScores
from mathrace.storage import JsonScoreStorage, MemoryScoreStorage
from mathrace.utils import draw_fps


class Engine:
    def __init__(self, scores_path=None, touch=False, save_scores=True):
        # Initialize pygame and create window
        pygame.init()
        pygame.display.set_caption(CAPTION)
        self.display = pygame.display.set_mode(DISPLAY_SIZE)
        self.clock = pygame.time.Clock()

        self.state_manager = GameStateManager()
        self.inputs = InputManager(TouchControls(DISPLAY_SIZE) if touch else None)

        if save_scores:
            scores_path = scores_path or user_data_path() / HIGH_SCORES_FILE
            self.high_scores = HighScores(JsonScoreStorage(scores_path))
            print(f"High scores: {scores_path}")
        else:
            self.high_scores = HighScores(MemoryScoreStorage())
            print("High scores: not saved (--no-save)")

        # Screens (only one is active at a time)
        self.game = Game(self.display, self.clock, self.inputs, self.state_manager, self.high_scores)
        self.main_menu = MainMenu(self.display, self.inputs, self.state_manager, self.high_scores)

    def run(self):
        """Main loop - runs forever until game closes"""
        previous_state = None

        while True:
            current_state = self.state_manager.getState()

            # When switching states, initialize the new screen
            if previous_state != current_state and current_state == 'game':
                self.game.initialize_environment()

            dt = self.clock.tick(FPS) / 1000.0

            if current_state == 'menu':
                self.main_menu.run()
            elif current_state == 'game':
                self.game.run(dt)

            if DEBUG_MODE:
                draw_fps(self.display, self.clock)

            previous_state = current_state
            pygame.display.flip()  # Update screen


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Math Racer - steer into the right answer")
    parser.add_argument('--touch', action='store_true', default=TOUCH_MODE,
                        help="show on-screen touch controls")
    parser.add_argument('--scores', metavar='PATH', default=None,
                        help="high score file (default: user data folder)")
    parser.add_argument('--no-save', action='store_true',
                        help="keep high scores in memory only")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    Engine(scores_path=args.scores, touch=args.touch, save_scores=not args.no_save).run()


if __name__ == '__main__':
    main()
