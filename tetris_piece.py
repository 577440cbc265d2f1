"""Piece model: shape catalog and enumerated rotation variants"""
from dataclasses import dataclass, replace
from typing import List, Tuple

COLS, ROWS = 10, 20

Offset = Tuple[int, int]          # (col, row)
Variant = Tuple[Offset, ...]


@dataclass(frozen=True)
class Piece:
    name: str
    color: str
    positions: Tuple[Variant, ...]


# Variants are listed by hand, including the lopsided ones; no rotation math.
PIECES: Tuple[Piece, ...] = (
    Piece("line", "cyan", (
        ((0,0),(0,1),(0,2),(0,3)),
        ((0,0),(1,0),(2,0),(3,0)),
    )),
    Piece("mirrored L", "blue", (
        ((1,0),(1,1),(0,2),(1,2)),
        ((0,0),(0,1),(1,1),(2,1)),
        ((0,0),(0,1),(0,2),(1,0)),
        ((0,0),(1,0),(2,0),(2,1)),
    )),
    Piece("L", "orange", (
        ((0,0),(0,1),(0,2),(1,2)),
        ((0,0),(0,1),(1,0),(2,0)),
        ((0,0),(1,0),(1,1),(1,2)),
        ((0,1),(1,1),(2,1),(2,0)),
    )),
    Piece("square", "yellow", (
        ((0,0),(0,1),(1,0),(1,1)),
    )),
    Piece("s", "green", (
        ((1,0),(0,1),(1,1),(2,0)),
        ((0,0),(0,1),(1,1),(1,2)),
    )),
    Piece("triangle", "violet", (
        ((0,0),(1,0),(1,1),(2,0)),
        ((1,0),(1,1),(0,1),(1,2)),
        ((0,1),(1,0),(1,1),(2,1)),
        ((0,0),(0,1),(1,1),(0,2)),
    )),
    Piece("red", "red", (
        ((0,0),(1,0),(1,1),(2,1)),
        ((1,0),(1,1),(0,1),(0,2)),
    )),
)


@dataclass(frozen=True)
class ActivePiece:
    """A placed instance of a catalog piece.

    ``piece_id`` tells this instantiation apart from every other one, even a
    later spawn of the same shape. ``rotate_position`` is never normalised;
    the variant is picked modulo the variant count.
    """
    piece: Piece
    x_offset: int = 0
    y_offset: int = 0
    rotate_position: int = 0
    piece_id: str = ""

    @property
    def name(self) -> str:
        return self.piece.name

    @property
    def color(self) -> str:
        return self.piece.color

    @property
    def variant(self) -> Variant:
        positions = self.piece.positions
        return positions[self.rotate_position % len(positions)]

    def cells(self) -> List[Offset]:
        return [(c + self.x_offset, r + self.y_offset) for c, r in self.variant]

    def moved(self, dx: int = 0, dy: int = 0, drot: int = 0) -> "ActivePiece":
        return replace(self,
                       x_offset=self.x_offset + dx,
                       y_offset=self.y_offset + dy,
                       rotate_position=self.rotate_position + drot)
