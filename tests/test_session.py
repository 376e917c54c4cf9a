"""
Tests for snake.session - engine and tick driver wired together.
"""

import logging
import random
from collections import deque

from snake.config import Config
from snake.game import Direction, GameState, GameStatus, TickResult
from snake.session import SnakeSession


def make_session(**overrides):
    cfg = Config(**{"seed": 0, **overrides})
    return SnakeSession(cfg, rng=random.Random(0))


class TestSnakeSession:

    def test_not_started_until_start(self):
        session = make_session()
        assert session.status is GameStatus.NOT_STARTED
        assert session.scheduler.active is False
        assert session.update(1_000) is None

    def test_start_arms_driver(self):
        session = make_session()
        snap = session.start(0)
        assert snap.status is GameStatus.RUNNING
        assert snap.body == ((0, 0),)
        assert session.scheduler.active is True

    def test_update_ticks_on_interval(self):
        """The engine only moves when the tick interval elapses."""
        session = make_session(tick_ms=100)
        session.start(0)
        session.engine.state.food = (200, 200)

        assert session.update(99) is None
        assert session.snapshot.head == (0, 0)
        assert session.update(100) is TickResult.MOVED
        assert session.snapshot.head == (20, 0)

    def test_direction_applies_on_next_tick(self):
        session = make_session(tick_ms=100)
        session.start(0)
        session.engine.state.food = (200, 200)

        snap = session.set_direction(Direction.DOWN)
        assert snap.direction is Direction.DOWN
        assert snap.head == (0, 0)
        session.update(100)
        assert session.snapshot.head == (0, 20)

    def test_game_over_stops_driver(self, caplog):
        session = make_session(tick_ms=100)
        session.start(0)
        session.set_direction(Direction.UP)

        with caplog.at_level(logging.INFO, logger="snake.session"):
            assert session.update(100) is TickResult.HIT_WALL
        assert session.status is GameStatus.OVER
        assert session.scheduler.active is False
        assert "Game over (hit_wall)" in caplog.text
        assert session.update(200) is None

    def test_restart_resets_score_and_status(self):
        """A restart after game over starts clean even with a nonzero score."""
        session = make_session(tick_ms=100)
        session.start(0)
        session.engine.state = GameState(
            body=deque([(0, 0)]),
            food=(200, 200),
            direction=Direction.LEFT,
            heading=Direction.LEFT,
            score=5,
            status=GameStatus.RUNNING,
        )
        session.update(100)
        assert session.status is GameStatus.OVER

        snap = session.start(150)
        assert snap.score == 0
        assert snap.status is GameStatus.RUNNING
        assert session.scheduler.active is True

    def test_restart_while_running_keeps_one_driver(self):
        """Starting again mid-game cancels the old driver before arming."""
        session = make_session(tick_ms=100)
        session.start(0)
        first = session.scheduler.generation
        session.start(50)
        session.engine.state.food = (200, 200)

        assert session.scheduler.generation == first + 1
        assert session.update(100) is None
        assert session.update(150) is TickResult.MOVED
        assert session.update(160) is None
        assert session.snapshot.head == (20, 0)

    def test_logs_start(self, caplog):
        session = make_session()
        with caplog.at_level(logging.INFO, logger="snake.session"):
            session.start(0)
        assert "Game started" in caplog.text
