"""Owning context that wires the config, host and periodic save loop."""

import logging
from pathlib import Path

from scene_autosave.config import Settings
from scene_autosave.host import EditorHost, host_guards
from scene_autosave.locator import ConfigHandle, ConfigLocator
from scene_autosave.models import AutoSaveConfig, ConfigAsset
from scene_autosave.store import FileAssetStore
from scene_autosave.task import PeriodicGuardedTask, WaitFn, wait_or_cancel

logger = logging.getLogger(__name__)

RELOCATE_NOTE = "You can move this asset anywhere in the project."


class AutoSaveContext:
    """Holds everything the autosave feature needs for one project."""

    def __init__(
        self,
        locator: ConfigLocator,
        host: EditorHost,
        wait: WaitFn = wait_or_cancel,
    ) -> None:
        self._locator = locator
        self._host = host
        self._handle = ConfigHandle(locator)
        self._task = PeriodicGuardedTask(
            self._handle,
            host.save_open_scenes,
            guards=host_guards(host),
            wait=wait,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, host: EditorHost, wait: WaitFn = wait_or_cancel
    ) -> "AutoSaveContext":
        locator = ConfigLocator(
            FileAssetStore(settings.assets_root),
            name=settings.config_name,
            default_path=settings.default_config_path,
        )
        return cls(locator, host, wait=wait)

    @property
    def handle(self) -> ConfigHandle:
        return self._handle

    @property
    def task(self) -> PeriodicGuardedTask:
        return self._task

    async def initialize(self) -> None:
        """Load the config and (re)start the save loop.

        Safe to call again on reload; the previous loop is stopped first.
        """
        asset = self._handle.fetch()
        logger.info(f"Using autosave config {asset.path}")
        await self._task.start()

    async def shutdown(self) -> None:
        await self._task.stop()

    def _current_asset(self) -> ConfigAsset:
        # Drops a deleted or moved asset before handing it out
        self._handle.refresh()
        return self._handle.fetch()

    def find_config(self) -> Path:
        """Locate the config asset and point the host at it."""
        asset = self._current_asset()
        path = self._locator.find() or asset.path
        self._host.highlight(path)
        return path

    def render_inspector(self) -> str:
        """Render the config's fields followed by the relocation note."""
        asset = self._current_asset()
        lines = [str(asset.path)]
        for name, field in AutoSaveConfig.model_fields.items():
            lines.append(f"  {name} = {getattr(asset.config, name)!r}")
            if field.description:
                lines.append(f"      {field.description}")
        lines.append("")
        lines.append(f"Note: {RELOCATE_NOTE}")
        return "\n".join(lines)
