import numpy as np
import pygame
import pytest

from mathrace.Game import Game
from mathrace.GameManager import GameStateManager
from mathrace.InputManager import InputManager, TouchControls
from mathrace.menu import MainMenu
from mathrace.Environment import RaceEnvironment
from mathrace.utils import draw_high_scores_table, draw_road
from helpers import keys


@pytest.fixture
def display():
    return pygame.display.set_mode((800, 600))


def press(menu, key):
    menu.inputs.update(keys())
    menu.inputs.update(keys(key))
    menu.handle_keys()


def test_menu_adjusts_settings(display, ledger):
    gsm = GameStateManager()
    menu = MainMenu(display, InputManager(), gsm, ledger)

    press(menu, pygame.K_DOWN)
    press(menu, pygame.K_RIGHT)
    assert gsm.max_mult == 11
    assert menu.mult_btn.text == "Max Multiplier: 11"

    press(menu, pygame.K_DOWN)
    press(menu, pygame.K_LEFT)
    assert gsm.game_speed == 1
    assert gsm.high_scores_speed == 1
    assert menu.speed_btn.text == "Game Speed: Slow"


def test_menu_start(display, ledger):
    gsm = GameStateManager()
    menu = MainMenu(display, InputManager(), gsm, ledger)
    press(menu, pygame.K_RETURN)
    assert gsm.getState() == 'game'


def test_menu_wraps_selection(display, ledger):
    menu = MainMenu(display, InputManager(), GameStateManager(), ledger)
    press(menu, pygame.K_UP)
    assert menu.buttons[menu.selection] is menu.quit_btn


def test_menu_draws_with_scores(display, ledger):
    ledger.add_score("Ada", 120, 2)
    menu = MainMenu(display, InputManager(TouchControls((800, 600))), GameStateManager(), ledger)
    menu.draw()


def make_game(display, ledger, touch=False):
    gsm = GameStateManager()
    gsm.setState('game')
    inputs = InputManager(TouchControls((800, 600)) if touch else None)
    game = Game(display, pygame.time.Clock(), inputs, gsm, ledger)
    game.initialize_environment()
    game.environment.rng = np.random.default_rng(5)
    return game


def test_game_frame_runs(display, ledger):
    game = make_game(display, ledger)
    y = game.environment.cars[0].position.y
    game.run(1 / 60)
    assert game.environment.cars[0].position.y > y


@pytest.mark.parametrize("touch", [False, True])
def test_game_draws_every_state(display, ledger, touch):
    game = make_game(display, ledger, touch)
    env = game.environment
    game.draw()

    env.feedback = ('wrong', 0.5)
    game.draw()

    env.toggle_pause()
    game.draw()
    env.toggle_pause()

    env.score = 100
    env.game_over()
    assert env.game_over_state == "name_input"
    game.draw()

    env.submit_name("Ada")
    env.save_failed = True
    game.draw()


def test_game_uses_menu_settings(display, ledger):
    game = make_game(display, ledger)
    game.state_manager.max_mult = 3
    game.state_manager.game_speed = 4
    game.initialize_environment()
    assert isinstance(game.environment, RaceEnvironment)
    assert game.environment.max_mult == 3
    assert game.environment.game_speed == 150


def test_table_and_road_draw(display, ledger):
    draw_road(display, 123.4)
    draw_high_scores_table(display, ledger, 0, 300)
    ledger.add_score("Abcdefghijklmno", 999999, 0)
    draw_high_scores_table(display, ledger, 0, 300, title="Best")


def tap(inputs, action):
    pos = inputs.touch_controls.buttons[action].center
    inputs.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos))
    inputs.update(keys())


def test_touch_pause_button_does_not_quit_from_menu(display, ledger):
    inputs = InputManager(TouchControls((800, 600)))
    menu = MainMenu(display, inputs, GameStateManager(), ledger)
    quits = []
    menu._quit = lambda: quits.append(True)

    inputs.update(keys())
    tap(inputs, 'escape')
    assert inputs.is_just_pressed('escape')
    menu.handle_keys()
    assert quits == []


def test_escape_key_quits_from_menu(display, ledger):
    menu = MainMenu(display, InputManager(), GameStateManager(), ledger)
    quits = []
    menu._quit = lambda: quits.append(True)
    press(menu, pygame.K_ESCAPE)
    assert quits == [True]
