"""
Game-state engine: owns the board plus the active and lookahead pieces.

Everything that changes state goes through a validated transition:

  * manual moves (left, right, down, debug up, rotate) are checked with
    ``validate`` and either committed whole or dropped without a trace;
  * a gravity tick asks ``can_descend`` first; if the piece can go one row
    lower it descends, otherwise it locks where it is and the lookahead
    piece takes over.

Hosts drive the engine through a small event queue. Key presses are
``post``-ed as they arrive, and ``pump(now)`` drains them one by one and then
fires gravity if the ``GravityTimer`` deadline has passed. The timer carries
a generation counter so an expiry scheduled against an older piece state is
discarded instead of acted on.

The direct mutators (moves, ``handle_key``, ``tick``) take the same re-entrant
lock as ``pump``, so a host calling them from another thread is serialized
with the queue.
"""
from __future__ import annotations
import functools
import logging
import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Union

from tetris_board import Board, empty_board, paint, sweep, validate, full_rows
from tetris_config import CONFIG
from tetris_piece import ActivePiece
from tetris_projection import PaintInfo, board_snapshot, cell_at, preview_tiles
from tetris_rng import PieceSpawner

log = logging.getLogger(__name__)


class Key(Enum):
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    UP = "up"          # debug: lift the piece one row
    ROTATE = "rotate"


class Phase(Enum):
    FALLING = "falling"
    LOCKING = "locking"
    SPAWNING = "spawning"


class TickResult(Enum):
    DESCENDED = "descended"
    LOCKED = "locked"


@dataclass(frozen=True)
class KeyEvent:
    key: Key


@dataclass(frozen=True)
class TimerExpired:
    generation: int


Event = Union[KeyEvent, TimerExpired]


class GravityTimer:
    """One-shot, restartable deadline measured in host milliseconds."""

    def __init__(self, interval_ms: int):
        self.interval_ms = interval_ms
        self.generation = 0
        self.deadline: Optional[int] = None

    def restart(self, now: int):
        self.generation += 1
        self.deadline = now + self.interval_ms

    def cancel(self):
        self.generation += 1
        self.deadline = None

    def poll(self, now: int) -> Optional[TimerExpired]:
        if self.deadline is None or now < self.deadline:
            return None
        self.deadline = None
        return TimerExpired(self.generation)

    def is_current(self, event: TimerExpired) -> bool:
        return event.generation == self.generation


def serialized(method):
    """Run an engine method under the engine lock (re-entrant, so pump can call it)."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class TetrisEngine:
    def __init__(self, spawner: Optional[PieceSpawner] = None,
                 tick_ms: Optional[int] = None):
        self.spawner = spawner or PieceSpawner()
        self.timer = GravityTimer(int(tick_ms if tick_ms is not None else CONFIG["TICK_MS"]))
        self.board: Board = empty_board()
        # placeholders until start(); randomness is deferred to the host
        self.piece: ActivePiece = self.spawner.spawn(False)
        self.next_piece: ActivePiece = self.spawner.spawn(False)
        self.phase = Phase.FALLING
        self.now = 0
        self._events: Deque[Event] = deque()
        self._lock = threading.RLock()

    # ---------- lifecycle ----------
    def start(self, now: int = 0):
        with self._lock:
            self.now = now
            self.board = empty_board()
            self.piece = self.spawner.spawn(True)
            self.next_piece = self.spawner.spawn(True)
            self.phase = Phase.FALLING
            self._events.clear()
            self._repaint()
            self.timer.restart(now)
        log.info("started with %s, next %s", self.piece.name, self.next_piece.name)

    # ---------- event queue ----------
    def post(self, event: Event):
        self._events.append(event)

    def post_key(self, key: Key):
        self.post(KeyEvent(key))

    def pump(self, now: int) -> int:
        """Process queued events, then gravity if due. Returns events handled."""
        handled = 0
        with self._lock:
            self.now = now
            while self._events:
                self._dispatch(self._events.popleft())
                handled += 1
            expired = self.timer.poll(now)
            if expired is not None:
                self._dispatch(expired)
                handled += 1
        return handled

    def _dispatch(self, event: Event):
        if isinstance(event, KeyEvent):
            self.handle_key(event.key)
        elif self.timer.is_current(event):
            self.tick()
        else:
            log.debug("dropping stale timer generation %d", event.generation)

    # ---------- moves ----------
    def _try(self, candidate: ActivePiece) -> bool:
        if not validate(self.board, candidate):
            return False
        self.piece = candidate
        self._repaint()
        self.timer.restart(self.now)
        log.debug("%s -> (%d,%d) r%d", candidate.name, candidate.x_offset,
                  candidate.y_offset, candidate.rotate_position)
        return True

    @serialized
    def move_left(self) -> bool:
        return self._try(self.piece.moved(dx=-1))

    @serialized
    def move_right(self) -> bool:
        return self._try(self.piece.moved(dx=1))

    @serialized
    def move_down(self) -> bool:
        if not self.can_descend():
            return False
        return self._try(self.piece.moved(dy=1))

    @serialized
    def move_up(self) -> bool:
        return self._try(self.piece.moved(dy=-1))

    @serialized
    def rotate(self) -> bool:
        return self._try(self.piece.moved(drot=1))

    @serialized
    def handle_key(self, key: Key) -> bool:
        action = {
            Key.LEFT: self.move_left,
            Key.RIGHT: self.move_right,
            Key.DOWN: self.move_down,
            Key.UP: self.move_up,
            Key.ROTATE: self.rotate,
        }[key]
        return action()

    # ---------- gravity ----------
    def can_descend(self) -> bool:
        return validate(self.board, self.piece.moved(dy=1))

    @serialized
    def tick(self) -> TickResult:
        if self.can_descend():
            self._try(self.piece.moved(dy=1))
            return TickResult.DESCENDED
        self._lock_piece()
        return TickResult.LOCKED

    def _lock_piece(self):
        self.phase = Phase.LOCKING
        cleared = full_rows(self.board)
        self.board = sweep(self.board)
        log.info("locked %s at (%d,%d)", self.piece.name, self.piece.x_offset,
                 self.piece.y_offset)
        if cleared:
            log.info("cleared rows %s", cleared)

        self.phase = Phase.SPAWNING
        self.piece = self.next_piece
        self.next_piece = self.spawner.spawn(True)
        self._repaint()
        log.info("spawned %s, next %s", self.piece.name, self.next_piece.name)

        self.phase = Phase.FALLING
        self.timer.restart(self.now)

    def _repaint(self):
        self.board = sweep(paint(self.board, self.piece), ignore_id=self.piece.piece_id)

    # ---------- projection ----------
    def paint_piece(self, col: int, row: int) -> PaintInfo:
        return cell_at(self.piece, col, row)

    def next_piece_tiles(self) -> List[str]:
        return preview_tiles(self.next_piece)

    def snapshot(self) -> list:
        return board_snapshot(self.board)
