from __future__ import annotations

import logging

from beanwire.descriptors import ComponentDescriptor
from beanwire.exceptions import BeanWireCircularDependencyError, BeanWireNotFoundError
from beanwire.resolver import ArgumentResolver

logger = logging.getLogger(__name__)


class InitializationScheduler:
    """Drive eager construction during bootstrap.

    An eager descriptor whose dependencies are not registered yet is parked in
    the pending set instead of failing. Once discovery has registered
    everything, ``sweep`` retries the pending descriptors until they are all
    built, or until a full pass builds nothing, which means the rest can never
    be built. Failures other than ``BeanWireNotFoundError`` are never deferred.
    """

    def __init__(self, resolver: ArgumentResolver) -> None:
        self._resolver = resolver
        self._pending: dict[str, ComponentDescriptor] = {}

    @property
    def pending(self) -> tuple[str, ...]:
        """Names of the deferred descriptors, in deferral order."""
        return tuple(descriptor.name for descriptor in self._pending.values())

    def try_build(self, descriptor: ComponentDescriptor) -> bool:
        """Build ``descriptor`` now, deferring it if a dependency is missing.

        Returns:
            ``True`` when built, ``False`` when deferred.

        """
        try:
            descriptor.get_instance(self._resolver)
        except BeanWireNotFoundError as error:
            logger.debug("Deferring component '%s': %s", descriptor.name, error)
            self._pending[descriptor.key] = descriptor
            return False
        return True

    def sweep(self) -> None:
        """Retry pending descriptors until none remain.

        Raises:
            BeanWireCircularDependencyError: If a full pass builds nothing; the
                last lookup failure is chained as its cause.

        """
        sweeps = 0
        while self._pending:
            sweeps += 1
            last_error: BeanWireNotFoundError | None = None
            progressed = False
            for key, descriptor in list(self._pending.items()):
                try:
                    descriptor.get_instance(self._resolver)
                except BeanWireNotFoundError as error:
                    last_error = error
                    continue
                del self._pending[key]
                progressed = True
                logger.debug("Built deferred component '%s' in sweep %d", descriptor.name, sweeps)

            if not progressed:
                raise BeanWireCircularDependencyError(self.pending) from last_error

        logger.debug("Pending set drained after %d sweep(s)", sweeps)
