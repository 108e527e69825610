"""
ENVIRONMENT.PY - The rules of one race, no drawing
Spawns answer cars, checks which one the player hit, keeps score
and lives, and runs the pause / game over menus
"""

import numpy as np
from mathrace.Constants import (
    SPEED_MAP, START_LIVES, POINTS_PER_FACTOR, NEXT_ROUND_DELAY, MISSED_ROUND_DELAY,
    FEEDBACK_TIME, HEIGHT, DEFAULT_PLAYER_NAME, DEBUG_MODE
)
from mathrace.Car import PlayerCar, AnswerCar
from mathrace.NameInput import NameInput
from mathrace.questions import generate_round
from mathrace.highscores import as_tier, clean_player_name
from mathrace.errors import InvalidArgumentError, StorageUnavailableError

PAUSE_OPTIONS = ['Resume Game', 'Main Menu']
GAME_OVER_OPTIONS = ['Race Again', 'Main Menu']


class RaceEnvironment:
    def __init__(self, high_scores, max_mult, speed_tier, rng=None):
        if max_mult < 1:
            raise InvalidArgumentError(f"max_mult must be >= 1, got {max_mult}")
        self.high_scores = high_scores
        self.max_mult = max_mult
        self.speed_tier = as_tier(speed_tier)
        self.game_speed = SPEED_MAP[int(self.speed_tier)]
        self.rng = rng if rng is not None else np.random.default_rng()
        self.player = PlayerCar()
        self.restart_game()

    def restart_game(self):
        """Fresh race with the same settings"""
        self.lives = START_LIVES
        self.score = 0
        self.player.reset()
        self.cars = []
        self.question = None
        self.timers = []            # [seconds_left, callback]
        self.feedback = None        # ('correct' | 'wrong', seconds_left)

        self.game_state = "running"     # running / paused / game_over
        self.menu_selection = 0

        # Game over
        self.game_over_state = None     # name_input / options
        self.is_new_high_score = False
        self.score_rank = None
        self.name_input = None
        self.player_name = DEFAULT_PLAYER_NAME
        self.save_failed = False

        self.next_question()

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def next_question(self):
        self.question, choices = generate_round(self.max_mult, self.rng)
        self.cars = [AnswerCar(choice) for choice in choices]
        if DEBUG_MODE:
            print(f"Question: {self.question} -> {[c.value for c in choices]}")

    def schedule(self, delay, callback):
        self.timers.append([delay, callback])

    def _tick_timers(self, dt):
        due = []
        for timer in self.timers:
            timer[0] -= dt
            if timer[0] <= 0:
                due.append(timer)
        for timer in due:
            self.timers.remove(timer)
            timer[1]()

    def resolve_collision(self, car):
        """Player drove into an answer car"""
        self.cars = []
        if car.correct:
            self.score += POINTS_PER_FACTOR * self.max_mult
            self.feedback = ('correct', FEEDBACK_TIME)
        else:
            self.lives -= 1
            self.feedback = ('wrong', FEEDBACK_TIME)
            if self.lives <= 0:
                self.game_over()
                return
        self.schedule(NEXT_ROUND_DELAY, self.next_question)

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------

    def update(self, dt):
        if self.game_state != "running":
            return

        self.player.update(dt)
        if self.feedback:
            left = self.feedback[1] - dt
            self.feedback = (self.feedback[0], left) if left > 0 else None

        for car in self.cars:
            car.update(dt, self.game_speed)

        player_rect = self.player.rect
        for car in self.cars:
            if car.rect.colliderect(player_rect):
                self.resolve_collision(car)
                break

        # Nobody hit - the cars drove past, next question without a penalty
        if self.cars and any(car.is_off_screen(HEIGHT) for car in self.cars):
            self.cars = []
            self.schedule(MISSED_ROUND_DELAY, self.next_question)

        self._tick_timers(dt)

    def handle_input(self, inputs):
        """Returns 'menu' or 'restart' when the player leaves the race, else None"""
        if self.game_state == "running":
            if inputs.is_just_pressed('escape'):
                self.toggle_pause()
            elif inputs.is_just_pressed('left'):
                self.player.steer(-1)
            elif inputs.is_just_pressed('right'):
                self.player.steer(1)
            return None

        if self.game_state == "paused":
            if inputs.is_just_pressed('escape'):
                self.toggle_pause()
                return None
            choice = self._menu_choice(inputs, PAUSE_OPTIONS)
            if choice == 'Resume Game':
                self.toggle_pause()
            elif choice == 'Main Menu':
                return 'menu'
            return None

        if self.game_state == "game_over" and self.game_over_state == "options":
            choice = self._menu_choice(inputs, GAME_OVER_OPTIONS)
            if choice == 'Race Again':
                return 'restart'
            if choice == 'Main Menu':
                return 'menu'
        return None

    def _menu_choice(self, inputs, options):
        if inputs.is_just_pressed('up'):
            self.menu_selection = max(0, self.menu_selection - 1)
        elif inputs.is_just_pressed('down'):
            self.menu_selection = min(len(options) - 1, self.menu_selection + 1)
        elif inputs.is_just_pressed('enter'):
            return options[self.menu_selection]
        return None

    def toggle_pause(self):
        if self.game_state == "running":
            self.game_state = "paused"
            self.menu_selection = 0
        elif self.game_state == "paused":
            self.game_state = "running"

    # ------------------------------------------------------------------
    # Game over / high scores
    # ------------------------------------------------------------------

    def game_over(self):
        self.game_state = "game_over"
        self.timers = []
        self.menu_selection = 0
        self.is_new_high_score = self.high_scores.is_high_score(self.score, self.speed_tier)
        self.score_rank = self.high_scores.get_rank(self.score, self.speed_tier)
        if self.is_new_high_score:
            self.game_over_state = "name_input"
            self.name_input = NameInput()
        else:
            self.game_over_state = "options"
            self.player_name = DEFAULT_PLAYER_NAME

    def handle_name_event(self, event):
        if self.game_over_state != "name_input":
            return
        self.name_input.handle_event(event)
        if self.name_input.done:
            self.submit_name(self.name_input.submitted)

    def confirm_name(self):
        """Submit what was typed so far"""
        if self.game_over_state == "name_input":
            self.submit_name(clean_player_name(self.name_input.text))

    def submit_name(self, name):
        self.player_name = name
        try:
            self.high_scores.add_score(name, self.score, self.speed_tier)
        except StorageUnavailableError as e:
            # Score stays in the table for this session, only the file is out of date
            print(f"Warning: could not save high score ({e})")
            self.save_failed = True
        self.game_over_state = "options"
        self.menu_selection = 0
