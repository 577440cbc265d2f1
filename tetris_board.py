"""Board helpers: validate, paint, sweep"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from tetris_piece import ActivePiece, COLS, ROWS


@dataclass(frozen=True)
class SettledCell:
    color: str
    piece_id: str


Cell = Optional[SettledCell]
Board = Tuple[Cell, ...]


def empty_board() -> Board:
    return (None,) * (COLS * ROWS)


def index_of(col: int, row: int) -> int:
    return row * COLS + col


def in_bounds(col: int, row: int) -> bool:
    return 0 <= col < COLS and 0 <= row < ROWS


def validate(board: Board, piece: ActivePiece) -> bool:
    """True if every cell of ``piece`` is on the board and either empty or
    already owned by the same piece id (a piece may move through itself)."""
    for col, row in piece.cells():
        if not in_bounds(col, row):
            return False
        cell = board[index_of(col, row)]
        if cell is not None and cell.piece_id != piece.piece_id:
            return False
    return True


def paint(board: Board, piece: ActivePiece) -> Board:
    # erase the old footprint, then fill only empty cells
    out: List[Cell] = [None if c is not None and c.piece_id == piece.piece_id else c
                       for c in board]
    for col, row in piece.cells():
        if not in_bounds(col, row):
            continue
        i = index_of(col, row)
        if out[i] is None:
            out[i] = SettledCell(piece.color, piece.piece_id)
    return tuple(out)


def rows_of(board: Board) -> List[Tuple[Cell, ...]]:
    return [board[r * COLS:(r + 1) * COLS] for r in range(ROWS)]


def is_full(row: Tuple[Cell, ...], ignore_id: Optional[str] = None) -> bool:
    for c in row:
        if c is None:
            return False
        if ignore_id is not None and c.piece_id == ignore_id:
            return False
    return True


def full_rows(board: Board, ignore_id: Optional[str] = None) -> List[int]:
    return [y for y, row in enumerate(rows_of(board)) if is_full(row, ignore_id)]


def sweep(board: Board, ignore_id: Optional[str] = None) -> Board:
    """Drop every full row in a single pass and pad the top with empty rows.

    Rows holding a cell of ``ignore_id`` never count as full, which keeps a
    piece that is still falling from completing a row mid-flight.
    """
    kept: List[Cell] = []
    cleared = 0
    for row in rows_of(board):
        if is_full(row, ignore_id):
            cleared += 1
        else:
            kept.extend(row)
    if not cleared:
        return board
    return (None,) * (cleared * COLS) + tuple(kept)
