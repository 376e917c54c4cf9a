from dataclasses import dataclass
from typing import Optional

# ----- Board (pixels) -----
CANVAS_SIZE = 400
CELL_SIZE = 20
TICK_MS = 100

# ----- Window -----
HUD_HEIGHT = 40
FPS = 60

# ----- Colors -----
BG         = (240, 240, 245)
GRID_LINE  = (224, 224, 224)
SNAKE_BODY = (76, 175, 80)
SNAKE_HEAD = (46, 125, 50)
FOOD       = (255, 87, 34)
TEXT       = (30, 30, 40)
OVERLAY    = (0, 0, 0, 128)
OVERLAY_TEXT = (250, 250, 255)


# ----- Tunables -----
@dataclass
class Config:
    canvas_size: int = CANVAS_SIZE
    cell_size: int = CELL_SIZE
    tick_ms: int = TICK_MS
    seed: Optional[int] = None
    max_food_attempts: int = 64

    @property
    def grid_cells(self) -> int:
        """Cells per side of the square board."""
        return self.canvas_size // self.cell_size

    def validate(self) -> "Config":
        check_bounds(self.canvas_size, self.cell_size)
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.max_food_attempts <= 0:
            raise ValueError(
                f"max_food_attempts must be positive, got {self.max_food_attempts}"
            )
        return self


def check_bounds(canvas_size: int, cell_size: int) -> None:
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")
    if canvas_size < cell_size:
        raise ValueError(
            f"canvas_size ({canvas_size}) must be at least one cell ({cell_size})"
        )
    if canvas_size % cell_size != 0:
        raise ValueError(
            f"canvas_size ({canvas_size}) must be a multiple of cell_size ({cell_size})"
        )


CFG = Config()
