# session.py
from typing import Optional, Union
import logging
import random

from .config import CFG, Config
from .game import Direction, GameStatus, Snapshot, SnakeEngine, TickResult
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)


class SnakeSession:
    """
    Single owner of one engine and its tick driver.

    The input layer and the host loop only ever talk to this object, so
    every state change goes through ``start``, ``set_direction`` or
    ``update`` on one thread.
    """

    def __init__(self, cfg: Config = CFG, rng: Optional[random.Random] = None):
        self.cfg = cfg.validate()
        self.engine = SnakeEngine.from_config(cfg, rng=rng)
        self.scheduler = TickScheduler(
            self.engine.tick,
            interval_ms=cfg.tick_ms,
            is_active=lambda: self.engine.status is GameStatus.RUNNING,
        )

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    @property
    def snapshot(self) -> Snapshot:
        return self.engine.snapshot()

    def start(self, now_ms: int) -> Snapshot:
        """Reset the board and arm a fresh driver; arming cancels the old one."""
        self.engine.start()
        generation = self.scheduler.arm(now_ms)
        logger.info("Game started (driver #%d)", generation)
        return self.snapshot

    def set_direction(self, direction: Union[Direction, str]) -> Snapshot:
        self.engine.set_direction(direction)
        return self.snapshot

    def update(self, now_ms: int) -> Optional[TickResult]:
        result = self.scheduler.poll(now_ms)
        if result in (TickResult.HIT_WALL, TickResult.HIT_SELF, TickResult.BOARD_FULL):
            logger.info("Game over (%s) with score %d", result.value, self.engine.score)
        return result
