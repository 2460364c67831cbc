"""Renderer registry: column kind tag -> renderer instance."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from nicedataview.columns.action_column import ActionColumnRenderer
from nicedataview.columns.base import ColumnRenderer
from nicedataview.columns.checkbox_column import CheckboxColumnRenderer
from nicedataview.columns.data_column import DataColumnRenderer
from nicedataview.columns.radio_column import RadioColumnRenderer
from nicedataview.columns.serial_column import SerialColumnRenderer
from nicedataview.exceptions import ConfigurationError
from nicedataview.utils.logging import get_logger

logger = get_logger(__name__)

RendererFactory = Callable[..., ColumnRenderer]

DEFAULT_FACTORIES: Mapping[str, RendererFactory] = MappingProxyType(
    {
        "action": ActionColumnRenderer,
        "checkbox": CheckboxColumnRenderer,
        "data": DataColumnRenderer,
        "radio": RadioColumnRenderer,
        "serial": SerialColumnRenderer,
    }
)


class RendererRegistry:
    """Create renderers on demand and cache them per kind.

    Each kind's factory is called with that kind's merged config as keyword
    arguments. ``add_configs`` and ``register`` return new registries; the
    original keeps its cache.

    Example:
        >>> registry = RendererRegistry().add_configs({"data": {"default_filter_empty": False}})
        >>> registry.get("data").default_filter_empty
        False
    """

    def __init__(
        self,
        factories: Mapping[str, RendererFactory] = DEFAULT_FACTORIES,
        configs: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> None:
        self._factories: dict[str, RendererFactory] = dict(factories)
        self._configs: dict[str, dict[str, Any]] = {k: dict(v) for k, v in (configs or {}).items()}
        self._cache: dict[str, ColumnRenderer] = {}

    def _clone(self) -> RendererRegistry:
        new = RendererRegistry(self._factories, self._configs)
        new._cache = dict(self._cache)
        return new

    def get(self, kind: str) -> ColumnRenderer:
        """Return the renderer for ``kind``.

        Raises:
            ConfigurationError: No factory is registered for ``kind``.
        """
        if kind not in self._cache:
            factory = self._factories.get(kind)
            if factory is None:
                raise ConfigurationError(f"No renderer registered for column kind {kind!r}.")
            config = self._configs.get(kind, {})
            logger.debug("creating %s renderer with %s", kind, config)
            self._cache[kind] = factory(**config)
        return self._cache[kind]

    def config(self, kind: str) -> Mapping[str, Any]:
        return MappingProxyType(self._configs.get(kind, {}))

    def add_configs(self, configs: Mapping[str, Mapping[str, Any]]) -> RendererRegistry:
        """Merge config overrides key-wise; affected kinds are re-created on next ``get``."""
        new = self._clone()
        for kind, config in configs.items():
            new._configs[kind] = {**new._configs.get(kind, {}), **config}
            new._cache.pop(kind, None)
        return new

    def register(self, kind: str, factory: RendererFactory) -> RendererRegistry:
        new = self._clone()
        new._factories[kind] = factory
        new._cache.pop(kind, None)
        return new
