"""Configuration settings for the scene autosave service."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Autosave service configuration."""

    # Project layout
    project_root: Path = Path(".")
    assets_dir: str = "Assets"
    config_name: str = "AutoSaveConfig"

    # Host integration
    save_command: list[str] = []  # e.g. ["editor-cli", "save-all"]
    playing_marker: Path | None = None  # Exists while the host is in play mode
    building_marker: Path | None = None  # Exists while a build/export runs
    compiling_marker: Path | None = None  # Exists while scripts recompile
    focus_command: list[str] | None = None  # Exit 0 = host window focused
    focus_timeout: float = 1.0  # Seconds; the probe blocks the event loop

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="AUTOSAVE_")

    @property
    def assets_root(self) -> Path:
        return self.project_root / self.assets_dir

    @property
    def default_config_path(self) -> Path:
        """Where a missing config asset gets created."""
        return self.assets_root / f"{self.config_name}.asset"
