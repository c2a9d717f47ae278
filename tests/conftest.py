import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from archery.session import new_session, start_game
from archery.storage import BestScoreStore

WIDTH = 400
HEIGHT = 400


@pytest.fixture
def store(tmp_path):
    return BestScoreStore(tmp_path / "best.json")


@pytest.fixture
def session():
    return new_session(WIDTH, HEIGHT)


@pytest.fixture
def playing(session, store):
    return start_game(session, store)
