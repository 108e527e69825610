import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from mathrace.highscores import HighScores
from mathrace.storage import MemoryScoreStorage


@pytest.fixture
def storage():
    return MemoryScoreStorage()


@pytest.fixture
def ledger(storage):
    return HighScores(storage, today=lambda: "10/17/2026")


@pytest.fixture(scope="session", autouse=True)
def _pygame():
    pygame.init()
    yield
    pygame.quit()
