"""Filesystem-backed asset index for the autosave config."""

import logging
from pathlib import Path

from pydantic import ValidationError

from scene_autosave.models import AutoSaveConfig

logger = logging.getLogger(__name__)

ASSET_SUFFIX = ".asset"


class AssetStoreError(Exception):
    """Raised when an asset can't be read or written."""


class FileAssetStore:
    """Searches, loads and creates config assets under a project directory.

    Assets are JSON documents with a ``.asset`` suffix.  Lookup matches any
    asset whose file name contains the requested name, so a renamed or moved
    copy such as ``Settings/AutoSaveConfig_main.asset`` is still discovered.
    """

    def __init__(self, assets_root: Path) -> None:
        self._assets_root = assets_root

    @property
    def assets_root(self) -> Path:
        return self._assets_root

    def find(self, name: str) -> list[Path]:
        """Return every ``.asset`` file whose name contains *name*, sorted."""
        if not self._assets_root.is_dir():
            return []
        return sorted(
            path
            for path in self._assets_root.rglob(f"*{name}*")
            if path.is_file() and path.suffix == ASSET_SUFFIX
        )

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def load(self, path: Path) -> AutoSaveConfig:
        try:
            return AutoSaveConfig.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise AssetStoreError(f"Failed to read {path}: {e}") from e
        except ValidationError as e:
            raise AssetStoreError(f"Invalid config asset {path}: {e}") from e

    def create(self, config: AutoSaveConfig, path: Path) -> Path:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise AssetStoreError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote config asset {path}")
        return path
