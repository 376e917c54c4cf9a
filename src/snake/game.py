# game.py
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Optional, Tuple, Union
import logging
import random

import numpy as np  # type: ignore

from .config import CANVAS_SIZE, CELL_SIZE, Config, check_bounds

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

# Occupancy grid codes
EMPTY, BODY, FOOD, HEAD = 0, 1, 2, 3


# ---------- Enums ----------
class Direction(Enum):
    """Cardinal heading; the value is the unit step (dx, dy), y grows downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {value!r}") from None


class GameStatus(Enum):
    NOT_STARTED = "NOT_STARTED"
    RUNNING = "RUNNING"
    OVER = "OVER"


class TickResult(Enum):
    IDLE = "idle"              # game not running, nothing happened
    MOVED = "moved"
    ATE = "ate"
    HIT_WALL = "hit_wall"
    HIT_SELF = "hit_self"
    BOARD_FULL = "board_full"  # ate the last free cell, no room for food


# ---------- Helpers ----------
def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b


def step_cell(cell: Cell, direction: Direction, cell_size: int) -> Cell:
    dx, dy = direction.value
    return (cell[0] + dx * cell_size, cell[1] + dy * cell_size)


# ---------- State ----------
@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the presentation layer."""

    body: Tuple[Cell, ...]
    food: Optional[Cell]
    score: int
    status: GameStatus
    direction: Direction

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.OVER


@dataclass
class GameState:
    body: Deque[Cell] = field(default_factory=lambda: deque([(0, 0)]))  # head at index 0
    food: Optional[Cell] = None
    direction: Direction = Direction.RIGHT  # pending, used by the next tick
    heading: Direction = Direction.RIGHT    # direction of the last move
    score: int = 0
    status: GameStatus = GameStatus.NOT_STARTED


# ---------- Engine ----------
class SnakeEngine:
    """
    Discrete Snake simulation on a square board measured in pixels.

    Cells are identified by their top-left pixel coordinate, so every
    coordinate is a multiple of ``cell_size`` in ``[0, canvas_size)``.
    ``tick()`` advances exactly one step; ``set_direction()`` only changes
    the pending heading and never moves the body.
    """

    def __init__(
        self,
        canvas_size: int = CANVAS_SIZE,
        cell_size: int = CELL_SIZE,
        rng: Optional[random.Random] = None,
        max_food_attempts: int = 64,
    ):
        check_bounds(canvas_size, cell_size)
        if max_food_attempts <= 0:
            raise ValueError(f"max_food_attempts must be positive, got {max_food_attempts}")
        self._canvas_size = canvas_size
        self._cell_size = cell_size
        self.rng = rng or random.Random()
        self.max_food_attempts = max_food_attempts
        self.state = GameState()

    @classmethod
    def from_config(cls, cfg: Config, rng: Optional[random.Random] = None) -> "SnakeEngine":
        cfg.validate()
        return cls(
            canvas_size=cfg.canvas_size,
            cell_size=cfg.cell_size,
            rng=rng or random.Random(cfg.seed),
            max_food_attempts=cfg.max_food_attempts,
        )

    # Bounds ------------------------------------------------------------------
    @property
    def canvas_size(self) -> int:
        return self._canvas_size

    @property
    def cell_size(self) -> int:
        return self._cell_size

    @property
    def grid_cells(self) -> int:
        return self._canvas_size // self._cell_size

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self._canvas_size and 0 <= y < self._canvas_size

    # Shortcuts ---------------------------------------------------------------
    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def direction(self) -> Direction:
        return self.state.direction

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def head(self) -> Cell:
        return self.state.body[0]

    # Operations --------------------------------------------------------------
    def start(self) -> None:
        """Throw away the current game and begin a fresh one at the origin."""
        state = GameState(status=GameStatus.RUNNING)
        self.state = state
        state.food = self.place_food()
        logger.debug("New game on %dx%d board, food at %s", self.grid_cells, self.grid_cells, state.food)

    def set_direction(self, requested: Union[Direction, str]) -> bool:
        """
        Queue a heading change for the next tick (no 180° turns).

        Returns True if the intent was accepted. Intents that arrive while
        the game is not running are ignored.
        """
        requested = Direction.parse(requested)
        state = self.state
        if state.status is not GameStatus.RUNNING:
            return False
        if is_opposite(requested, state.direction) or is_opposite(requested, state.heading):
            return False
        state.direction = requested
        return True

    def tick(self) -> TickResult:
        """Advance the game by one cell."""
        state = self.state
        if state.status is not GameStatus.RUNNING:
            return TickResult.IDLE

        # Commit direction once per tick
        state.heading = state.direction
        new_head = step_cell(state.body[0], state.direction, self._cell_size)

        # Wall collision
        if not self.in_bounds(new_head):
            state.status = GameStatus.OVER
            return TickResult.HIT_WALL

        # Self collision
        if new_head in state.body:
            state.status = GameStatus.OVER
            return TickResult.HIT_SELF

        # Move / grow
        state.body.appendleft(new_head)
        if new_head == state.food:
            state.score += 1
            state.food = self.place_food()
            result = TickResult.ATE
            if state.food is None:
                logger.info("Board filled with score %d", state.score)
                state.status = GameStatus.OVER
                result = TickResult.BOARD_FULL
        else:
            state.body.pop()
            result = TickResult.MOVED

        self._check_body()
        return result

    # Food --------------------------------------------------------------------
    def place_food(self) -> Optional[Cell]:
        """
        Pick a uniformly random free cell, or None if the body fills the board.

        Rejection sampling is tried first; after ``max_food_attempts`` misses
        the free cells are enumerated from the occupancy grid instead.
        """
        n, size = self.grid_cells, self._cell_size
        body = set(self.state.body)
        if len(body) >= n * n:
            return None

        for _ in range(self.max_food_attempts):
            candidate = (self.rng.randrange(n) * size, self.rng.randrange(n) * size)
            if candidate not in body:
                return candidate

        free = np.flatnonzero(self._body_grid().ravel() == EMPTY)
        logger.debug(
            "Food sampling missed %d times, choosing from %d free cells",
            self.max_food_attempts, free.size,
        )
        gy, gx = divmod(int(free[self.rng.randrange(free.size)]), n)
        return (gx * size, gy * size)

    # Views -------------------------------------------------------------------
    def _body_grid(self) -> np.ndarray:
        grid = np.zeros((self.grid_cells, self.grid_cells), dtype=np.int8)
        for x, y in self.state.body:
            grid[y // self._cell_size, x // self._cell_size] = BODY
        return grid

    def occupancy(self) -> np.ndarray:
        """
        Board as a (rows, cols) int8 matrix indexed [gy, gx]:
        0 empty, 1 body, 2 food, 3 head.
        """
        grid = self._body_grid()
        hx, hy = self.head
        grid[hy // self._cell_size, hx // self._cell_size] = HEAD
        if self.state.food is not None:
            fx, fy = self.state.food
            grid[fy // self._cell_size, fx // self._cell_size] = FOOD
        return grid

    def snapshot(self) -> Snapshot:
        state = self.state
        return Snapshot(
            body=tuple(state.body),
            food=state.food,
            score=state.score,
            status=state.status,
            direction=state.direction,
        )

    def _check_body(self) -> None:
        body = self.state.body
        if len(set(body)) != len(body):
            raise RuntimeError(f"Body overlaps itself: {list(body)}")
