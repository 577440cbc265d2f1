"""Piece spawner: uniform shape draw plus a fresh identity per instance"""
import random
import uuid
from typing import Callable, Optional

from tetris_config import CONFIG
from tetris_piece import PIECES, ActivePiece


def new_piece_id() -> str:
    return str(uuid.uuid4())


class PieceSpawner:
    """Produces ActivePiece instances at the origin with rotation 0.

    ``spawn(False)`` gives the canonical placeholder (shape 0, empty id) that
    the engine holds before real randomness is wanted; ``spawn(True)`` draws
    one of the seven shapes uniformly and tags it with ``make_id()``.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 make_id: Optional[Callable[[], str]] = None):
        if rng is None:
            rng = random.Random(CONFIG["SEED"])
        self.rng = rng
        self.make_id = make_id or new_piece_id

    def next_index(self) -> int:
        return self.rng.randrange(len(PIECES))

    def spawn(self, randomize: bool = True) -> ActivePiece:
        if not randomize:
            return ActivePiece(PIECES[0])
        return ActivePiece(PIECES[self.next_index()], piece_id=self.make_id())


_default: Optional[PieceSpawner] = None


def spawn_piece(randomize: bool = True) -> ActivePiece:
    global _default
    if _default is None:
        _default = PieceSpawner()
    return _default.spawn(randomize)
