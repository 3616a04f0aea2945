"""Locate-or-create for the singleton autosave config asset."""

import logging
from collections.abc import Sequence
from pathlib import Path

from scene_autosave.models import AutoSaveConfig, ConfigAsset
from scene_autosave.store import AssetStoreError, FileAssetStore

logger = logging.getLogger(__name__)


def select_config(paths: Sequence[Path]) -> Path | None:
    """Pick the authoritative asset from a lookup result.

    No match gives ``None``; several matches warn and the first one wins.
    """
    if not paths:
        return None
    if len(paths) > 1:
        logger.warning(
            f"Found {len(paths)} autosave config assets, remove all but one: "
            + ", ".join(str(p) for p in paths)
        )
    return paths[0]


class ConfigLocator:
    """Finds the config asset by name in the store, creating it if absent."""

    def __init__(self, store: FileAssetStore, name: str, default_path: Path) -> None:
        self._store = store
        self._name = name
        self._default_path = default_path

    @property
    def store(self) -> FileAssetStore:
        return self._store

    def find(self) -> Path | None:
        return select_config(self._store.find(self._name))

    def locate(self) -> ConfigAsset:
        """Load the config asset, writing a default one first if none exists."""
        path = self.find()
        if path is None:
            path = self._store.create(AutoSaveConfig(), self._default_path)
            logger.warning(
                f"Created autosave config at {path}. You can move it anywhere in the project."
            )
        return ConfigAsset(path=path, config=self._store.load(path))


class ConfigHandle:
    """Live reference to the authoritative config asset.

    The periodic task reads ``config`` for the next wait and calls
    ``refresh`` after each wait so edits, deletions and moves of the asset
    are picked up.
    """

    def __init__(self, locator: ConfigLocator) -> None:
        self._locator = locator
        self._asset: ConfigAsset | None = None

    @property
    def asset(self) -> ConfigAsset | None:
        return self._asset

    @property
    def config(self) -> AutoSaveConfig | None:
        return self._asset.config if self._asset else None

    def fetch(self) -> ConfigAsset:
        """Return the held asset, locating it first if nothing is held."""
        if self._asset is None:
            self._asset = self._locator.locate()
        return self._asset

    def refresh(self) -> AutoSaveConfig | None:
        """Re-read the config, rediscovering it if its asset went away.

        Returns ``None`` when no usable config is available this cycle.
        """
        store = self._locator.store
        if self._asset is not None and not store.exists(self._asset.path):
            logger.info(f"Config asset {self._asset.path} is gone, searching again")
            self._asset = None

        try:
            if self._asset is None:
                self._asset = self._locator.locate()
            else:
                self._asset.config = store.load(self._asset.path)
        except AssetStoreError as e:
            logger.warning(f"No usable autosave config, skipping this cycle: {e}")
            return None
        return self._asset.config
