"""
Tests for snake.scheduler - the cancellable tick driver.
"""

from unittest.mock import Mock

import pytest

from snake.scheduler import TickScheduler


class TestTickScheduler:

    def test_does_nothing_until_armed(self):
        tick = Mock(return_value="moved")
        scheduler = TickScheduler(tick, interval_ms=100)
        assert scheduler.poll(1_000) is None
        assert scheduler.active is False
        tick.assert_not_called()

    def test_fires_once_per_interval(self):
        """Ticks are due every interval_ms after arming."""
        tick = Mock(return_value="moved")
        scheduler = TickScheduler(tick, interval_ms=100)
        scheduler.arm(0)

        assert scheduler.poll(50) is None
        assert scheduler.poll(100) == "moved"
        assert scheduler.poll(150) is None
        assert scheduler.poll(200) == "moved"
        assert tick.call_count == 2

    def test_late_poll_fires_only_once(self):
        """A slow frame does not produce a burst of ticks."""
        tick = Mock()
        scheduler = TickScheduler(tick, interval_ms=100)
        scheduler.arm(0)
        scheduler.poll(450)
        scheduler.poll(451)
        assert tick.call_count == 1
        assert scheduler.next_due == 550

    def test_rearming_replaces_previous_driver(self):
        """Arming twice never doubles the tick rate."""
        tick = Mock()
        scheduler = TickScheduler(tick, interval_ms=100)
        first = scheduler.arm(0)
        second = scheduler.arm(0)

        assert second == first + 1
        assert scheduler.generation == second
        for now in range(0, 1_001, 10):
            scheduler.poll(now)
        assert tick.call_count == 10

    def test_rearm_restarts_the_interval(self):
        tick = Mock()
        scheduler = TickScheduler(tick, interval_ms=100)
        scheduler.arm(0)
        scheduler.arm(60)
        scheduler.poll(100)
        tick.assert_not_called()
        scheduler.poll(160)
        tick.assert_called_once()

    def test_cancel_stops_ticks(self):
        tick = Mock()
        scheduler = TickScheduler(tick, interval_ms=100)
        scheduler.arm(0)
        scheduler.cancel()
        scheduler.cancel()
        assert scheduler.poll(500) is None
        assert scheduler.active is False
        assert scheduler.next_due is None
        tick.assert_not_called()

    def test_cancels_itself_when_inactive_after_tick(self):
        """The driver stops once the tick ends the game."""
        running = {"value": True}

        def tick():
            running["value"] = False
            return "over"

        scheduler = TickScheduler(tick, interval_ms=100, is_active=lambda: running["value"])
        scheduler.arm(0)
        assert scheduler.poll(100) == "over"
        assert scheduler.active is False
        assert scheduler.poll(200) is None

    def test_does_not_fire_when_inactive(self):
        tick = Mock()
        scheduler = TickScheduler(tick, interval_ms=100, is_active=lambda: False)
        scheduler.arm(0)
        assert scheduler.poll(100) is None
        assert scheduler.active is False
        tick.assert_not_called()

    @pytest.mark.parametrize("interval", [0, -5])
    def test_rejects_non_positive_interval(self, interval):
        with pytest.raises(ValueError, match="interval_ms"):
            TickScheduler(Mock(), interval_ms=interval)
