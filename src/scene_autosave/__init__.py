"""Scene Autosave - periodically saves open scenes while the editor is idle."""

import asyncio
import logging
import signal

from .config import Settings
from .context import AutoSaveContext
from .host import CommandHost

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def run_service(
    settings: Settings | None = None, context: AutoSaveContext | None = None
) -> None:
    """Run the autosave loop until SIGINT/SIGTERM; SIGHUP reloads."""
    settings = settings or Settings()
    configure_logging(settings.log_level)

    if context is None:
        context = AutoSaveContext.from_settings(settings, CommandHost(settings))
    await context.initialize()

    stop_event = asyncio.Event()
    reloads: set[asyncio.Task[None]] = set()

    def reload() -> None:
        logger.info("Reloading autosave")
        task = asyncio.create_task(context.initialize())
        reloads.add(task)
        task.add_done_callback(reload_done)

    def reload_done(task: asyncio.Task[None]) -> None:
        reloads.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Reload failed: {exc}", exc_info=exc)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)
    loop.add_signal_handler(signal.SIGHUP, reload)

    try:
        await stop_event.wait()
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM, signal.SIGHUP):
            loop.remove_signal_handler(sig)
        if reloads:
            await asyncio.wait(reloads)
        await context.shutdown()


def main() -> None:
    """CLI entry point."""
    from .cli import main as cli_main

    cli_main()


__all__ = [
    "AutoSaveContext",
    "CommandHost",
    "Settings",
    "configure_logging",
    "main",
    "run_service",
]
