# main.py
from typing import List, Optional, Tuple
import argparse
import logging
import random

import pygame  # type: ignore

from .config import (
    CANVAS_SIZE, CELL_SIZE, TICK_MS, HUD_HEIGHT, FPS,
    BG, GRID_LINE, SNAKE_BODY, SNAKE_HEAD, FOOD, TEXT, OVERLAY, OVERLAY_TEXT,
    Config,
)
from .game import BODY, HEAD, Direction, GameStatus, Snapshot, SnakeEngine, TickResult, is_opposite, step_cell
from .session import SnakeSession

logger = logging.getLogger(__name__)

KEY_TO_DIRECTION = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}
START_KEYS = (pygame.K_SPACE, pygame.K_RETURN)
RESTART_KEYS = (pygame.K_r, pygame.K_SPACE, pygame.K_RETURN)


# ---------- Draw ----------
def draw_cell(screen: pygame.Surface, cell: Tuple[int, int], size: int, color) -> None:
    radius = size // 2
    pygame.draw.circle(screen, color, (cell[0] + radius, cell[1] + radius), radius - 1)


def draw_game(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot, cfg: Config) -> None:
    screen.fill(BG)
    size = cfg.cell_size
    for i in range(0, cfg.canvas_size + 1, size):
        pygame.draw.line(screen, GRID_LINE, (i, 0), (i, cfg.canvas_size))
        pygame.draw.line(screen, GRID_LINE, (0, i), (cfg.canvas_size, i))

    if snap.food is not None:
        draw_cell(screen, snap.food, size, FOOD)
    for i, cell in enumerate(snap.body):
        draw_cell(screen, cell, size, SNAKE_HEAD if i == 0 else SNAKE_BODY)

    txt = font.render(f"Score: {snap.score}", True, TEXT)
    screen.blit(txt, txt.get_rect(center=(cfg.canvas_size // 2, cfg.canvas_size + HUD_HEIGHT // 2)))


def draw_overlay(screen: pygame.Surface, font: pygame.font.Font, lines, cfg: Config) -> None:
    # Dim the board only, keep the score bar readable
    overlay = pygame.Surface((cfg.canvas_size, cfg.canvas_size), pygame.SRCALPHA)
    overlay.fill(OVERLAY)
    screen.blit(overlay, (0, 0))

    mid = cfg.canvas_size // 2
    top = mid - 16 * (len(lines) - 1)
    for i, line in enumerate(lines):
        surf = font.render(line, True, OVERLAY_TEXT)
        screen.blit(surf, surf.get_rect(center=(mid, top + 32 * i)))


# ---------- Headless driver ----------
def safe_directions(engine: SnakeEngine) -> List[Direction]:
    """Turns the engine would accept whose next cell is on the board and off the body."""
    grid = engine.occupancy()
    state = engine.state
    size = engine.cell_size
    safe = []
    for d in Direction:
        if is_opposite(d, state.direction) or is_opposite(d, state.heading):
            continue
        x, y = step_cell(engine.head, d, size)
        if not engine.in_bounds((x, y)):
            continue
        if grid[y // size, x // size] in (BODY, HEAD):
            continue
        safe.append(d)
    return safe


# ---------- Loops ----------
def run_window(cfg: Config) -> None:
    pygame.init()
    font = pygame.font.SysFont(None, 28)
    screen = pygame.display.set_mode((cfg.canvas_size, cfg.canvas_size + HUD_HEIGHT))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    session = SnakeSession(cfg)
    running = True

    while running:
        # 1) input
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                status = session.status
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in KEY_TO_DIRECTION:
                    session.set_direction(KEY_TO_DIRECTION[event.key])
                elif status is GameStatus.NOT_STARTED and event.key in START_KEYS:
                    session.start(pygame.time.get_ticks())
                elif status is GameStatus.OVER and event.key in RESTART_KEYS:
                    session.start(pygame.time.get_ticks())

        # 2) update
        session.update(pygame.time.get_ticks())

        # 3) render
        snap = session.snapshot
        draw_game(screen, font, snap, cfg)
        if snap.status is GameStatus.NOT_STARTED:
            draw_overlay(screen, font, ["SNAKE", "Press SPACE to start"], cfg)
        elif snap.is_over:
            draw_overlay(screen, font, ["GAME OVER", f"Score: {snap.score}", "Press R to play again"], cfg)
        pygame.display.flip()
        clock.tick(FPS)  # high FPS; movement gated by the scheduler

    pygame.quit()


def run_headless(cfg: Config, max_ticks: int = 10_000, rng: Optional[random.Random] = None) -> Snapshot:
    """
    Play one game without a window: a random safe turn before every tick,
    driven by a fake millisecond clock. Returns the final snapshot.
    """
    rng = rng or random.Random(cfg.seed)
    food_seed = None if cfg.seed is None else cfg.seed + 1
    session = SnakeSession(cfg, rng=random.Random(food_seed))
    now = 0
    session.start(now)

    ticks = 0
    result: Optional[TickResult] = None
    while session.status is GameStatus.RUNNING and ticks < max_ticks:
        session.set_direction(rng.choice(safe_directions(session.engine) or list(Direction)))
        now += cfg.tick_ms
        result = session.update(now)
        if result is not None:
            ticks += 1

    snap = session.snapshot
    logger.info(
        "Headless run finished: ticks=%d, score=%d, status=%s, last=%s",
        ticks, snap.score, snap.status.value, result.value if result else None,
    )
    return snap


# ---------- CLI ----------
def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Snake on a square grid.")
    parser.add_argument("--canvas-size", type=int, default=CANVAS_SIZE, help="board size in pixels")
    parser.add_argument("--cell-size", type=int, default=CELL_SIZE, help="cell size in pixels")
    parser.add_argument("--tick-ms", type=int, default=TICK_MS, help="milliseconds between moves")
    parser.add_argument("--seed", type=int, default=None, help="seed for food placement")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="If set, play one random game without opening a window.",
    )
    parser.add_argument("--max-ticks", type=int, default=10_000, help="tick cap for --headless")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    cfg = Config(
        canvas_size=args.canvas_size,
        cell_size=args.cell_size,
        tick_ms=args.tick_ms,
        seed=args.seed,
    ).validate()

    if args.headless:
        run_headless(cfg, max_ticks=args.max_ticks)
        return

    run_window(cfg)


if __name__ == "__main__":
    main()
