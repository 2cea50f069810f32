"""
YAML View Store Adapter - File-based accuracy view catalog.

Loads view definitions from a YAML file.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from outlook.core.domain.view import AccuracyView
from outlook.core.ports.view_store import ViewStore

logger = logging.getLogger(__name__)


class YamlViewStore(ViewStore):
    """
    View store that reads accuracy views from a YAML file.
    """

    def __init__(self, config_path: str | Path):
        self.config_path = Path(config_path)
        self._views: dict[str, AccuracyView] = {}
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self._load_views()
            self._loaded = True

    def _load_views(self) -> None:
        if not self.config_path.exists():
            logger.warning(f"Views file {self.config_path} not found")
            return

        with open(self.config_path) as f:
            data = yaml.safe_load(f) or {}

        for view_data in data.get("views", []):
            try:
                view = AccuracyView(**view_data)
            except ValidationError as e:
                logger.error(f"Error loading view {view_data.get('name', '?')!r}: {e}")
                continue
            if view.name in self._views:
                logger.warning(f"View '{view.name}' defined twice, keeping the last definition")
            self._views[view.name] = view

    async def list_views(self) -> list[AccuracyView]:
        self._ensure_loaded()
        return list(self._views.values())

    async def get_view(self, name: str) -> AccuracyView | None:
        self._ensure_loaded()
        return self._views.get(name)
