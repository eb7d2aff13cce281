import pytest

from cosmic_commander.events import EventRecorder
from cosmic_commander.scoring import LocalScoreStore
from cosmic_commander.simulation import World


# Spawn intervals that never elapse inside a test
QUIET_SPAWNS = {
    "enemy_interval": 1e12,
    "obstacle_interval": 1e12,
    "powerup_interval": 1e12,
}


class FakeScheduler:
    """Collects frame requests; run() fires them like one host frame"""

    def __init__(self):
        self.pending = []

    def request_frame(self, callback):
        self.pending.append(callback)

    def run(self, now_ms):
        callbacks, self.pending = self.pending, []
        for callback in callbacks:
            callback(now_ms)
        return len(callbacks)


class FakeRenderer:
    def __init__(self):
        self.calls = []

    def render(self, world, paused=False):
        self.calls.append(paused)


class FakeClock:
    def __init__(self):
        self.timers = {}
        self.once = []

    def schedule(self, callback, interval):
        self.timers[callback] = interval

    def schedule_once(self, callback, delay):
        self.once.append(callback)

    def unschedule(self, callback):
        self.timers.pop(callback, None)

    def advance(self):
        """Fire every periodic timer once"""
        for callback, interval in list(self.timers.items()):
            callback(interval)

    def run_once(self):
        callbacks, self.once = self.once, []
        for callback in callbacks:
            callback(0.0)


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def world(recorder):
    """Seeded world with spawning switched off"""
    return World(events=recorder, seed=1234, n_stars=10, spawn_config=QUIET_SPAWNS)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return LocalScoreStore()
