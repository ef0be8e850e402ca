"""Keyed, ordered containers backing the build model."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Container(Generic[T]):
    """Insertion-ordered container keyed by item id."""

    def __init__(self, guard: Callable[[], None]):
        self._guard = guard
        self._items: "OrderedDict[str, T]" = OrderedDict()

    def get(self, item_id: str) -> Optional[T]:
        return self._items.get(item_id)

    def has(self, item_id: str) -> bool:
        return item_id in self._items

    def ids(self) -> List[str]:
        return list(self._items.keys())

    def items(self) -> List[T]:
        return list(self._items.values())

    def remove(self, item_id: str) -> bool:
        self._guard()
        return self._items.pop(item_id, None) is not None

    def is_empty(self) -> bool:
        return not self._items

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)


class DependencyContainer(_Container):
    """Dependencies keyed by id.

    Re-adding an id replaces the entry in place (last write wins), except
    that an entry the user requested is never replaced by one that was not.
    """

    def add(self, dependency) -> None:
        self._guard()
        existing = self._items.get(dependency.id)
        if existing is not None and existing.requested and not dependency.requested:
            if is_debug_enabled(logger):
                logger.debug("Kept requested dependency", extra=extra_context(
                    event="decision", component="build", action="add_dependency",
                    target=dependency.id, outcome="kept_requested"
                ))
            return
        self._items[dependency.id] = dependency

    def with_facet(self, facet: str) -> List:
        return [d for d in self._items.values() if facet in d.facets]

    def has_facet(self, facet: str) -> bool:
        return any(facet in d.facets for d in self._items.values())


class BomContainer(_Container):
    """BOM imports keyed by BOM id; the first import of an id wins."""

    def add(self, bom) -> bool:
        """Return True if the BOM was added, False if its id was already imported."""
        self._guard()
        if bom.id in self._items:
            return False
        self._items[bom.id] = bom
        return True

    def ordered(self) -> List:
        """BOMs sorted by their order attribute, ties kept in import order."""
        return sorted(self._items.values(), key=lambda b: b.order)


class RepositoryContainer(_Container):
    """Repositories keyed by id; the first declaration of an id wins."""

    def add(self, repository) -> bool:
        """Return True if the repository was added."""
        self._guard()
        existing = self._items.get(repository.id)
        if existing is not None:
            if existing.url != repository.url:
                logger.warning(
                    "Repository '%s' already declared with %s; ignoring %s",
                    repository.id, existing.url, repository.url,
                )
            return False
        self._items[repository.id] = repository
        return True


Supplier = Callable[[], str]


class PropertyContainer:
    """Ordered build properties whose values are suppliers evaluated at render time."""

    def __init__(self, guard: Callable[[], None]):
        self._guard = guard
        self._suppliers: "OrderedDict[str, Supplier]" = OrderedDict()

    def put(self, name: str, value: Union[str, Supplier]) -> None:
        """Set a property; plain values are wrapped into a supplier."""
        self._guard()
        if callable(value):
            self._suppliers[name] = value
        else:
            text = str(value)
            self._suppliers[name] = lambda: text

    def has(self, name: str) -> bool:
        return name in self._suppliers

    def remove(self, name: str) -> bool:
        self._guard()
        return self._suppliers.pop(name, None) is not None

    def names(self) -> List[str]:
        return list(self._suppliers.keys())

    def evaluate(self) -> Dict[str, str]:
        """Call every supplier once, in declaration order."""
        return OrderedDict((name, str(supplier())) for name, supplier in self._suppliers.items())

    def __contains__(self, name: object) -> bool:
        return name in self._suppliers

    def __len__(self) -> int:
        return len(self._suppliers)


class PluginContainer:
    """Ordered build plugins; re-adding an id keeps its position and takes the new version."""

    def __init__(self, guard: Callable[[], None]):
        self._guard = guard
        self._plugins: "OrderedDict[str, Optional[str]]" = OrderedDict()

    def add(self, plugin_id: str, version: Optional[str] = None) -> None:
        self._guard()
        self._plugins[plugin_id] = version

    def has(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    def version_of(self, plugin_id: str) -> Optional[str]:
        return self._plugins.get(plugin_id)

    def remove(self, plugin_id: str) -> bool:
        self._guard()
        if plugin_id not in self._plugins:
            return False
        del self._plugins[plugin_id]
        return True

    def items(self) -> List[Tuple[str, Optional[str]]]:
        return list(self._plugins.items())

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)
