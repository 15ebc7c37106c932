"""Plugin interface and the registry of available plugins."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class PluginEvent(Enum):
    """Requests a plugin can make of the application."""

    PAUSE_CROPPER = "pause_cropper"
    UNPAUSE_CROPPER = "unpause_cropper"
    REFRESH_CARD_GRID = "refresh_card_grid"


class PluginInterface:
    """Base of all plugins: emits requests to whoever listens."""

    def __init__(self) -> None:
        self._listeners: dict[PluginEvent, list[Callable[[], None]]] = {
            event: [] for event in PluginEvent
        }

    def connect(self, event: PluginEvent | str, callback: Callable[[], None]) -> None:
        """Call ``callback`` whenever ``event`` is emitted."""
        self._listeners[PluginEvent(event)].append(callback)

    def _emit(self, event: PluginEvent) -> None:
        for callback in list(self._listeners[event]):
            callback()

    def pause_cropper(self) -> None:
        """Ask the application to pause the cropper."""
        self._emit(PluginEvent.PAUSE_CROPPER)

    def unpause_cropper(self) -> None:
        """Ask the application to resume the cropper."""
        self._emit(PluginEvent.UNPAUSE_CROPPER)

    def refresh_card_grid(self) -> None:
        """Ask the application to refresh the card grid."""
        self._emit(PluginEvent.REFRESH_CARD_GRID)

    def route(self, other: PluginInterface) -> None:
        """Re-emit every request that ``other`` emits."""
        other.connect(PluginEvent.PAUSE_CROPPER, self.pause_cropper)
        other.connect(PluginEvent.UNPAUSE_CROPPER, self.unpause_cropper)
        other.connect(PluginEvent.REFRESH_CARD_GRID, self.refresh_card_grid)


PluginInit = Callable[[Any], PluginInterface]
PluginDestroy = Callable[[PluginInterface], None]


@dataclass(frozen=True)
class Plugin:
    """A named plugin with its constructor and destructor."""

    name: str = "Plugin Name"
    init: PluginInit | None = None
    destroy: PluginDestroy | None = None


class PluginRegistry:
    """The plugins the application knows of, in a fixed order."""

    def __init__(self, plugins: Iterable[Plugin] = ()) -> None:
        self._plugins = tuple(plugins)

    def names(self) -> list[str]:
        """Names of all registered plugins."""
        return [plugin.name for plugin in self._plugins]

    def init_plugin(self, plugin_name: str, project: Any) -> PluginInterface | None:
        """Create the plugin called ``plugin_name``; ``None`` if there is none."""
        for plugin in self._plugins:
            if plugin.name == plugin_name:
                return plugin.init(project) if plugin.init is not None else None
        return None

    def destroy_plugin(self, plugin_name: str, plugin: PluginInterface) -> None:
        """Hand ``plugin`` to the destructor of every plugin called ``plugin_name``."""
        for entry in self._plugins:
            if entry.name == plugin_name and entry.destroy is not None:
                entry.destroy(plugin)