"""Shared fixtures for scene_autosave tests."""

import asyncio
from pathlib import Path

import pytest

from scene_autosave.locator import ConfigHandle, ConfigLocator
from scene_autosave.models import AutoSaveConfig
from scene_autosave.store import FileAssetStore


class FakeClock:
    """Simulated clock driving ``PeriodicGuardedTask`` waits.

    Pass ``clock.wait`` as the task's wait function, then move time with
    ``advance``.  Every wait that reaches its deadline fires.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.waits: list[float] = []
        self._timers: list[tuple[float, asyncio.Future]] = []

    async def wait(self, cancel: asyncio.Event, seconds: float) -> bool:
        self.waits.append(seconds)
        timer = asyncio.get_running_loop().create_future()
        entry = (self.now + seconds, timer)
        self._timers.append(entry)
        cancelled = asyncio.create_task(cancel.wait())
        try:
            await asyncio.wait({timer, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
            if entry in self._timers:
                self._timers.remove(entry)
        return cancel.is_set()

    @property
    def pending(self) -> int:
        return len(self._timers)

    async def settle(self) -> None:
        """Let scheduled coroutines run until they block again."""
        for _ in range(20):
            await asyncio.sleep(0)

    async def advance(self, seconds: float) -> None:
        await self.settle()
        self.now += seconds
        for deadline, timer in list(self._timers):
            if deadline <= self.now and not timer.done():
                timer.set_result(None)
        await self.settle()


class FakeHost:
    """In-memory editor host with switchable state."""

    def __init__(self) -> None:
        self.playing = False
        self.building = False
        self.compiling = False
        self.focused = True
        self.saves = 0
        self.highlighted: list[Path] = []

    def is_playing(self) -> bool:
        return self.playing

    def is_building(self) -> bool:
        return self.building

    def is_compiling(self) -> bool:
        return self.compiling

    def is_focused(self) -> bool:
        return self.focused

    def save_open_scenes(self) -> None:
        self.saves += 1

    def highlight(self, path: Path) -> None:
        self.highlighted.append(path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def assets_root(tmp_path):
    return tmp_path / "Assets"


@pytest.fixture
def store(assets_root):
    return FileAssetStore(assets_root)


@pytest.fixture
def default_path(assets_root):
    return assets_root / "AutoSaveConfig.asset"


@pytest.fixture
def locator(store, default_path):
    return ConfigLocator(store, name="AutoSaveConfig", default_path=default_path)


@pytest.fixture
def handle(locator):
    return ConfigHandle(locator)


@pytest.fixture
def write_config(default_path):
    """Write a config asset and return its path."""

    def _write(path: Path | None = None, **fields) -> Path:
        target = path or default_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(AutoSaveConfig(**fields).model_dump_json(indent=2))
        return target

    return _write
