"""Registry of value-meta plugins, keyed by numeric type code and name."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rowmeta.exceptions import DuplicateValueMetaError, UnknownValueMetaError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValueMetaPlugin:
    """Registration metadata of a value type."""

    id: int
    name: str
    description: str
    meta_class: type


class ValueMetaRegistry:
    """Registry for value-meta plugins."""

    def __init__(self) -> None:
        self._by_id: dict[int, ValueMetaPlugin] = {}
        self._by_name: dict[str, ValueMetaPlugin] = {}

    def register(self, plugin: ValueMetaPlugin) -> None:
        """
        Register a value type.

        Registering the same class again under the same id is a no-op, so
        re-importing a plugin module is harmless.

        Raises:
            DuplicateValueMetaError: If the id or name belongs to another class
        """
        existing = self._by_id.get(plugin.id) or self._by_name.get(plugin.name.upper())
        if existing is not None:
            if existing == plugin:
                return
            raise DuplicateValueMetaError(plugin.id, plugin.name, existing.name)

        self._by_id[plugin.id] = plugin
        self._by_name[plugin.name.upper()] = plugin
        logger.info(f"Registered value type {plugin.name} (id {plugin.id})")

    def get(self, type_id: int) -> ValueMetaPlugin:
        """
        Get plugin by type code.

        Raises:
            UnknownValueMetaError: If no plugin has this id
        """
        if type_id not in self._by_id:
            raise UnknownValueMetaError(type_id, self.list_types())
        return self._by_id[type_id]

    def get_by_name(self, name: str) -> ValueMetaPlugin:
        """
        Get plugin by type name (case-insensitive).

        Raises:
            UnknownValueMetaError: If no plugin has this name
        """
        plugin = self._by_name.get(name.upper())
        if plugin is None:
            raise UnknownValueMetaError(name, self.list_types())
        return plugin

    def create(self, key: int | str, column_name: str | None = None, **kwargs: Any) -> Any:
        """Instantiate the handler registered under a type code or name."""
        plugin = self.get(key) if isinstance(key, int) else self.get_by_name(key)
        return plugin.meta_class(column_name, **kwargs)

    def unregister(self, type_id: int) -> None:
        """Remove a registered type; unknown ids are ignored."""
        plugin = self._by_id.pop(type_id, None)
        if plugin is not None:
            self._by_name.pop(plugin.name.upper(), None)

    def list_types(self) -> list[str]:
        return [plugin.name for plugin in self._by_id.values()]

    def clear(self) -> None:
        """Clear all registered types (for testing)."""
        self._by_id.clear()
        self._by_name.clear()


# Global registry instance
_registry = ValueMetaRegistry()


def value_meta_plugin(id: int, name: str, description: str) -> Callable[[type], type]:
    """
    Class decorator registering a value-meta handler with the global registry.

    Example:
        >>> @value_meta_plugin(id=77, name="UUID", description="Universally Unique Identifier")
        ... class ValueMetaUuid(ValueMetaInterface):
        ...     ...
    """

    def decorator(cls: type) -> type:
        plugin = ValueMetaPlugin(id=id, name=name, description=description, meta_class=cls)
        cls.plugin = plugin
        _registry.register(plugin)
        return cls

    return decorator


def register_value_meta(plugin: ValueMetaPlugin) -> None:
    _registry.register(plugin)


def get_value_meta(key: int | str) -> ValueMetaPlugin:
    """Get a registered plugin by type code or name."""
    if isinstance(key, int):
        return _registry.get(key)
    return _registry.get_by_name(key)


def create_value_meta(key: int | str, column_name: str | None = None, **kwargs: Any) -> Any:
    """Create a handler for a column, by type code or name."""
    return _registry.create(key, column_name, **kwargs)


def unregister_value_meta(type_id: int) -> None:
    _registry.unregister(type_id)


def list_value_metas() -> list[str]:
    return _registry.list_types()


def clear_value_metas() -> None:
    """Clear all registered types (for testing)."""
    _registry.clear()
