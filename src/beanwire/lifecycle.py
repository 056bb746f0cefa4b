from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from beanwire.exceptions import BeanWireComponentInCreationError

if TYPE_CHECKING:
    from beanwire.resolver import ArgumentResolver
    from beanwire.strategies import CreationStrategy

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class LifecycleCell:
    """Memoize the instances of one component.

    Singletons are built once; the strategy is dropped after the first build
    so that whatever it references does not outlive bootstrap. Non-singletons
    are rebuilt on every call and nothing is cached.

    Every build runs under the cell's own lock, so concurrent first use of a
    singleton builds it exactly once. Re-entering a cell from the thread that
    is building it raises ``BeanWireComponentInCreationError`` instead of
    recursing.
    """

    __slots__ = ("_builder", "_instance", "_lock", "_name", "_singleton", "_strategy")

    def __init__(self, name: str, strategy: CreationStrategy, *, singleton: bool) -> None:
        self._name = name
        self._strategy: CreationStrategy | None = strategy
        self._singleton = singleton
        self._instance: Any = _UNSET
        self._lock = threading.RLock()
        self._builder: int | None = None

    @property
    def is_built(self) -> bool:
        """Whether a singleton instance is cached."""
        return self._instance is not _UNSET

    def validate(self) -> None:
        if self._strategy is not None:
            self._strategy.validate()

    def get_instance(self, resolver: ArgumentResolver) -> Any:
        """Return the cached singleton, or build a new instance."""
        with self._lock:
            if self._instance is not _UNSET:
                return self._instance

            current_thread = threading.get_ident()
            if self._builder == current_thread:
                raise BeanWireComponentInCreationError(self._name)

            strategy = self._strategy
            if strategy is None:  # pragma: no cover - released only once cached
                raise BeanWireComponentInCreationError(self._name)

            self._builder = current_thread
            try:
                instance = strategy.create(resolver)
            finally:
                self._builder = None

            logger.debug("Created component '%s'", self._name)
            if self._singleton:
                self._instance = instance
                self._strategy = None
            return instance
