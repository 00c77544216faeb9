"""Tests for the coalescing scheduler."""

from medbill.scheduler import CoalescingScheduler


class FakeTimer:
    """Manually driven stand-in for QTimer."""

    def __init__(self):
        self.running = False
        self.fn = None
        self.ms = None
        self.starts = 0

    def start(self, ms, fn):
        self.ms = ms
        self.fn = fn
        self.running = True
        self.starts += 1

    def stop(self):
        self.running = False

    def fire(self):
        if self.running:
            self.running = False
            self.fn()


def _scheduler(wait_ms=None):
    calls = []
    timer = FakeTimer()
    scheduler = CoalescingScheduler(lambda: calls.append(len(calls)), timer, wait_ms=wait_ms)
    return scheduler, timer, calls


class TestCoalescingScheduler:
    """Tests for CoalescingScheduler."""

    def test_burst_runs_once(self):
        scheduler, timer, calls = _scheduler()
        for _ in range(5):
            scheduler.request()

        assert calls == []
        assert timer.starts == 5

        timer.fire()
        assert calls == [0]
        assert not scheduler.pending

    def test_uses_default_window(self):
        scheduler, timer, _ = _scheduler()
        scheduler.request()
        assert timer.ms == 300

    def test_custom_window(self):
        scheduler, timer, _ = _scheduler(wait_ms=50)
        scheduler.request()
        assert timer.ms == 50

    def test_requests_after_firing_schedule_again(self):
        scheduler, timer, calls = _scheduler()
        scheduler.request()
        timer.fire()
        scheduler.request()
        timer.fire()
        assert calls == [0, 1]

    def test_flush_runs_pending_now(self):
        scheduler, timer, calls = _scheduler()
        scheduler.request()
        scheduler.flush()

        assert calls == [0]
        assert not timer.running
        timer.fire()
        assert calls == [0]

    def test_flush_without_pending_does_nothing(self):
        scheduler, _, calls = _scheduler()
        scheduler.flush()
        assert calls == []

    def test_cancel_drops_pending(self):
        scheduler, timer, calls = _scheduler()
        scheduler.request()
        scheduler.cancel()
        timer.fire()
        assert calls == []
        assert not scheduler.pending
