"""
Rendering for the Tetris engine.

Caches pygame Surfaces for the host window; the per-cell paint data it draws
comes from tetris_projection:
- Pre-render one block sprite per colour and blit it.
- Pre-render the static background (grid + panel frame).
- Cache a BOARD SURFACE with all settled blocks; rebuild it only when the
  board tuple changes.
"""
from __future__ import annotations
import pygame
from typing import Dict, List, Tuple
from tetris_config import CONFIG
from tetris_layout import Dims
from tetris_piece import COLS, ROWS

# Piece colour names to RGB
COLORS: Dict[str, Tuple[int,int,int]] = {
    "cyan": (34,211,238),
    "blue": (29,78,216),
    "orange": (249,115,22),
    "yellow": (250,204,21),
    "green": (74,222,128),
    "violet": (109,40,217),
    "red": (153,27,27),
}


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self._make_static()
        self._make_cells()
        self.next_label = font.render("Next:", True, (200,210,240))
        # Board surface cache (only settled blocks)
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_key = None

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(COLS+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(ROWS+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        # Next preview frame
        n = int(CONFIG["PREVIEW_CELLS"])
        self.pv_x = d.panel_x + 12
        self.pv_y = d.panel_y + 44
        frame = pygame.Rect(self.pv_x-6, self.pv_y-6, d.preview_cell*n+12, d.preview_cell*n+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    # ---------- Cell sprites ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.preview_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        p = self.dims.preview_cell
        for name, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[name] = s
            s = pygame.Surface((p-2, p-2))
            s.fill(col)
            self.preview_surf[name] = s

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, board):
        """Rebuilds the settled-blocks surface if the board changed."""
        if board is self._board_key:
            return
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for i, cell in enumerate(board):
            if cell is not None:
                x, y = i % COLS, i // COLS
                self.board_surface.blit(self.cell_surf[cell.color], (x*c + 1, y*c + 1))
        self._board_key = board

    # ---------- Frame ----------
    def draw(self, screen: pygame.Surface, board, next_tiles: List[str]):
        d = self.dims
        screen.blit(self.bg, (0,0))
        self.rebuild_board_surface(board)
        screen.blit(self.board_surface, (d.board_x, d.board_y))
        screen.blit(self.next_label, (d.panel_x + 12, d.panel_y + 12))
        n = int(CONFIG["PREVIEW_CELLS"])
        for i, color in enumerate(next_tiles):
            if color:
                rx = self.pv_x + (i % n) * d.preview_cell + 1
                ry = self.pv_y + (i // n) * d.preview_cell + 1
                screen.blit(self.preview_surf[color], (rx, ry))
