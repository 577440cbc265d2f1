import argparse
import logging
import random
import sys

import pygame

from tetris_config import CONFIG
from tetris_engine import TetrisEngine
from tetris_input import key_for
from tetris_layout import compute_dims
from tetris_render import RenderAssets
from tetris_rng import PieceSpawner

log = logging.getLogger("tetris")


def parse_args(argv=None):
    parser = argparse.ArgumentParser("tetris")
    parser.add_argument("--seed", type=int, default=None, help="Seed for piece selection.")
    parser.add_argument("--tick-ms", type=int, default=None, help="Gravity interval in milliseconds.")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...).")
    parser.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                        help="Override a CONFIG entry; may be repeated.")
    args = parser.parse_args(argv)

    for item in args.set:
        key, sep, value = item.partition("=")
        if not sep or key not in CONFIG:
            parser.error(f"unknown config override: {item}")
        current = CONFIG[key]
        try:
            CONFIG[key] = type(current)(value) if current is not None else int(value)
        except ValueError:
            parser.error(f"bad value for {key}: {value}")
    if args.seed is not None:
        CONFIG["SEED"] = args.seed
    if args.tick_ms is not None:
        CONFIG["TICK_MS"] = args.tick_ms
    if args.log_level is not None:
        CONFIG["LOG_LEVEL"] = args.log_level
    level = str(CONFIG["LOG_LEVEL"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        parser.error(f"unknown log level: {CONFIG['LOG_LEVEL']}")
    CONFIG["LOG_LEVEL"] = level
    return args


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main(argv=None):
    parse_args(argv)
    logging.basicConfig(level=CONFIG["LOG_LEVEL"],
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])

    dims = compute_dims()
    try:
        screen = recreate_window(dims)
    except pygame.error as e:
        log.error("cannot open window: %s", e)
        pygame.quit()
        return 1
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    render = RenderAssets(dims, font)
    clock = pygame.time.Clock()

    engine = TetrisEngine(PieceSpawner(random.Random(CONFIG["SEED"])))
    engine.start(pygame.time.get_ticks())

    while True:
        clock.tick(int(CONFIG["FPS"]))
        for e in pygame.event.get():
            if e.type == pygame.QUIT or (e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE):
                pygame.quit()
                return 0
            if e.type == pygame.KEYDOWN:
                key = key_for(e.key)
                if key is not None:
                    engine.post_key(key)

        engine.pump(pygame.time.get_ticks())
        render.draw(screen, engine.board, engine.next_piece_tiles())
        pygame.display.flip()


if __name__ == '__main__':
    sys.exit(main())
