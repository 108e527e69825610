"""
GAME.PY - The race screen
Feeds keyboard/touch input into the race, draws the road,
the cars, the HUD and the pause / game over overlays
"""

import sys
import pygame
from mathrace.Constants import SCROLL_FACTOR
from mathrace.Environment import RaceEnvironment, PAUSE_OPTIONS, GAME_OVER_OPTIONS
from mathrace.utils import (
    font_scale, draw_road, draw_ui, draw_feedback, draw_pause_menu, draw_game_over
)


class Game:
    def __init__(self, display, clock, inputs, state_manager, high_scores):
        self.display = display
        self.clock = clock
        self.inputs = inputs
        self.state_manager = state_manager
        self.high_scores = high_scores
        self.environment = None
        self.scroll = 0.0
        self.text_input_active = False

    def initialize_environment(self):
        """New race with the settings chosen in the menu"""
        self.environment = RaceEnvironment(
            self.high_scores,
            max_mult=self.state_manager.max_mult,
            speed_tier=self.state_manager.game_speed,
        )
        self.scroll = 0.0
        # Text input only while typing a name
        self.text_input_active = True
        self._set_text_input(False)

    def run(self, dt):
        """Called every frame during gameplay"""
        if self.state_manager.getState() != 'game':
            return
        if not self.environment:
            self.initialize_environment()
        env = self.environment

        typing = env.game_over_state == "name_input"
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit()
                sys.exit()
            if self.inputs.handle_event(event):
                continue
            if typing:
                env.handle_name_event(event)
        self.inputs.update()

        # No keyboard on a touch screen - OK keeps whatever was typed
        if (typing and env.game_over_state == "name_input"
                and self.inputs.uses_touch_layout() and self.inputs.is_just_pressed('enter')):
            env.confirm_name()

        # The ENTER that submitted the name must not also pick "Race Again"
        if not typing:
            action = env.handle_input(self.inputs)
            if action == 'menu':
                self.state_manager.setState('menu')
                return
            if action == 'restart':
                env.restart_game()
                self.scroll = 0.0

        if env.game_state == "running":
            self.scroll += env.game_speed * SCROLL_FACTOR * dt / 15
        env.update(dt)
        self._sync_text_input()
        self.draw()

    def _sync_text_input(self):
        self._set_text_input(self.environment.game_over_state == "name_input")

    def _set_text_input(self, enabled):
        if enabled == self.text_input_active:
            return
        if enabled:
            pygame.key.start_text_input()
        else:
            pygame.key.stop_text_input()
        self.text_input_active = enabled

    def draw(self):
        env = self.environment
        touch = self.inputs.uses_touch_layout()

        draw_road(self.display, self.scroll)
        answer_font = font_scale(34)
        for car in env.cars:
            car.draw(self.display, answer_font)
        env.player.draw(self.display)
        draw_ui(self.display, env, touch)
        draw_feedback(self.display, env)

        if env.game_state == "paused":
            draw_pause_menu(self.display, env, PAUSE_OPTIONS, touch)
        elif env.game_state == "game_over":
            draw_game_over(self.display, env, GAME_OVER_OPTIONS, touch)

        if touch:
            self.inputs.touch_controls.draw(self.display, font_scale(30))
