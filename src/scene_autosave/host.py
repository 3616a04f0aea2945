"""Editor host integration: environment guards and the save routine."""

import asyncio
import logging
import subprocess
from pathlib import Path
from typing import Any, Protocol

from scene_autosave.config import Settings
from scene_autosave.task import Guard

logger = logging.getLogger(__name__)


class EditorHost(Protocol):
    """What the autosave loop needs from the editor it runs alongside."""

    def is_playing(self) -> bool: ...

    def is_building(self) -> bool: ...

    def is_compiling(self) -> bool: ...

    def is_focused(self) -> bool: ...

    def save_open_scenes(self) -> Any: ...

    def highlight(self, path: Path) -> None: ...


def host_guards(host: EditorHost) -> list[Guard]:
    """Guards in the order they are checked after the ``enabled`` flag."""
    return [
        Guard("not playing", lambda: not host.is_playing()),
        Guard("not building", lambda: not host.is_building()),
        Guard("not compiling", lambda: not host.is_compiling()),
        Guard("focused", host.is_focused),
    ]


class CommandHost:
    """Host driven by marker files and external commands.

    The editor (or a wrapper script around it) touches a marker file while it
    is playing, building or compiling, and exposes a command that saves every
    open scene.  Focus is probed with an optional command whose exit status
    is 0 while the editor window is in the foreground.
    """

    def __init__(self, settings: Settings) -> None:
        self._save_command = list(settings.save_command)
        self._playing_marker = settings.playing_marker
        self._building_marker = settings.building_marker
        self._compiling_marker = settings.compiling_marker
        self._focus_command = settings.focus_command
        self._focus_timeout = settings.focus_timeout

    @staticmethod
    def _marker_present(marker: Path | None) -> bool:
        return marker is not None and marker.exists()

    def is_playing(self) -> bool:
        return self._marker_present(self._playing_marker)

    def is_building(self) -> bool:
        return self._marker_present(self._building_marker)

    def is_compiling(self) -> bool:
        return self._marker_present(self._compiling_marker)

    def is_focused(self) -> bool:
        """Run the focus probe, blocking for at most ``focus_timeout`` seconds.

        Guards are synchronous, so the probe holds up the event loop (and
        signal handling) while it runs; keep the command fast.
        """
        if not self._focus_command:
            return True
        try:
            result = subprocess.run(
                self._focus_command,
                capture_output=True,
                timeout=self._focus_timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Focus probe failed: {e}")
            return False
        return result.returncode == 0

    async def save_open_scenes(self) -> None:
        if not self._save_command:
            logger.error("No save command configured (set AUTOSAVE_SAVE_COMMAND)")
            return
        try:
            process = await asyncio.create_subprocess_exec(
                *self._save_command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Failed to run save command {self._save_command[0]}: {e}")
            return
        _, stderr = await process.communicate()
        if process.returncode != 0:
            logger.error(
                f"Save command exited with {process.returncode}: "
                f"{stderr.decode(errors='replace').strip()}"
            )

    def highlight(self, path: Path) -> None:
        logger.info(f"Autosave config: {path}")
        print(path)
