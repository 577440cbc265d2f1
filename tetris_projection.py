"""Read-only views of engine state: per-cell paint, preview window, board snapshot"""
from dataclasses import dataclass
from typing import List, Optional

from tetris_config import CONFIG
from tetris_piece import ActivePiece


@dataclass(frozen=True)
class PaintInfo:
    paint: bool
    color: str
    piece_id: str


def cell_at(piece: ActivePiece, col: int, row: int) -> PaintInfo:
    return PaintInfo((col, row) in piece.cells(), piece.color, piece.piece_id)


def preview_tiles(piece: ActivePiece, size: Optional[int] = None) -> List[str]:
    """Colours for a size x size window over the piece's local origin, row-major."""
    if size is None:
        size = int(CONFIG["PREVIEW_CELLS"])
    tiles = []
    for i in range(size * size):
        info = cell_at(piece, i % size, i // size)
        tiles.append(info.color if info.paint else "")
    return tiles


def board_snapshot(board) -> list:
    return list(board)
