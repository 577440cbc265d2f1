
CONFIG = {
    "TICK_MS": 1200,
    "SEED": None,
    "CELL_SIZE": 32,
    "PREVIEW_CELLS": 4,
    "FPS": 60,
    "LOG_LEVEL": "INFO",
}
