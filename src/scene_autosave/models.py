"""Autosave configuration record."""

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_INTERVAL_MINUTES = 1.0
MIN_INTERVAL_MINUTES = 0.1


class AutoSaveConfig(BaseModel):
    """Per-project autosave settings, stored as a relocatable asset."""

    enabled: bool = Field(
        default=False,
        description="Enable automatic saving",
    )
    interval_minutes: float = Field(
        default=DEFAULT_INTERVAL_MINUTES,
        ge=MIN_INTERVAL_MINUTES,
        description="How often open scenes are saved, in minutes",
    )
    verbose: bool = Field(
        default=False,
        description="Log a message every time scenes are auto-saved",
    )

    model_config = ConfigDict(validate_assignment=True)

    @property
    def interval_seconds(self) -> float:
        return self.interval_minutes * 60


@dataclass
class ConfigAsset:
    """A loaded config together with the asset file it came from."""

    path: Path
    config: AutoSaveConfig
