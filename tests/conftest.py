import itertools
import random

import pytest

from tetris_config import CONFIG
from tetris_engine import TetrisEngine
from tetris_rng import PieceSpawner


@pytest.fixture
def spawner():
    ids = itertools.count(1)
    return PieceSpawner(random.Random(1234), make_id=lambda: f"p{next(ids)}")


@pytest.fixture
def engine(spawner):
    e = TetrisEngine(spawner, tick_ms=1200)
    e.start(0)
    return e


@pytest.fixture
def restore_config():
    saved = dict(CONFIG)
    yield CONFIG
    CONFIG.clear()
    CONFIG.update(saved)
