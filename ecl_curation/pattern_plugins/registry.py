"""
Priority-ordered rule table of value set recognizers.

Recognizer modules register on import; conversion only reads the table.
"""

import pkgutil
from dataclasses import dataclass
from importlib import import_module
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .base import PatternContext, PatternDetector, PatternResult, PluginMetadata


@dataclass(frozen=True)
class RegisteredPlugin:
    detector: PatternDetector
    metadata: PluginMetadata

    @property
    def sort_key(self) -> Tuple[int, str]:
        return (self.metadata.priority, self.metadata.id)


class PatternRegistry:
    """Recognizers evaluated in ascending priority, ties broken by id."""

    def __init__(self):
        self._plugins: Dict[str, RegisteredPlugin] = {}
        self._table: Optional[List[RegisteredPlugin]] = None
        self._loaded_packages: set = set()

    def register(self, id_or_meta: Union[str, PluginMetadata], detector: PatternDetector) -> None:
        """Add a recognizer to the table.

        Raises:
            ValueError: If a recognizer with the same id is already registered
        """
        metadata = PluginMetadata(id=id_or_meta) if isinstance(id_or_meta, str) else id_or_meta
        if metadata.id in self._plugins:
            raise ValueError(f"Pattern '{metadata.id}' already registered")
        self._plugins[metadata.id] = RegisteredPlugin(detector, metadata)
        self._table = None

    def _ordered(self) -> List[RegisteredPlugin]:
        if self._table is None:
            self._table = sorted(self._plugins.values(), key=lambda p: p.sort_key)
        return self._table

    def execution_order(self) -> List[str]:
        return [p.metadata.id for p in self._ordered()]

    def metadata(self, plugin_id: str) -> PluginMetadata:
        return self._plugins[plugin_id].metadata

    def _matches(self, context: PatternContext) -> Iterator[PatternResult]:
        for plugin in self._ordered():
            result = plugin.detector(context)
            if result:
                if not result.id:
                    result.id = plugin.metadata.id
                yield result

    def run_first(self, context: PatternContext) -> Optional[PatternResult]:
        """The result of the first recognizer that matches, or None."""
        return next(self._matches(context), None)

    def run_all(self, context: PatternContext) -> List[PatternResult]:
        """Results of every matching recognizer, in table order."""
        return list(self._matches(context))

    def load_all_modules(self, package: str) -> None:
        """Import each module of a package once so its recognizers register."""
        if package in self._loaded_packages:
            return
        pkg = import_module(package)
        for module in pkgutil.iter_modules(pkg.__path__):
            if not module.ispkg:
                import_module(f"{package}.{module.name}")
        self._loaded_packages.add(package)


pattern_registry = PatternRegistry()


def register_pattern(id_or_meta: Union[str, PluginMetadata]):
    """Decorator adding a recognizer to the shared table.

    Example:
        @register_pattern(PluginMetadata(id="dmd_code", priority=PluginPriority.DMD_CODE))
        def detect_dmd_code(ctx: PatternContext):
            ...
    """
    if not isinstance(id_or_meta, (str, PluginMetadata)):
        raise TypeError(
            f"register_pattern expects str or PluginMetadata, got {type(id_or_meta).__name__}"
        )

    def decorator(func: PatternDetector) -> PatternDetector:
        pattern_registry.register(id_or_meta, func)
        return func
    return decorator
