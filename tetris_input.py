"""Keyboard mapping: pygame key codes to engine keys"""
from typing import Optional

import pygame

from tetris_engine import Key

KEYMAP = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_UP: Key.UP,
    pygame.K_SPACE: Key.ROTATE,
}


def key_for(code: int) -> Optional[Key]:
    return KEYMAP.get(code)
