from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar, overload

from beanwire.descriptors import ComponentDescriptor
from beanwire.discovery import DiscoveryProvider, ModuleDiscoveryProvider, TypeDescriptor
from beanwire.exceptions import (
    BeanWireInvalidRegistrationError,
    BeanWireNotFoundError,
    BeanWireTypeMismatchError,
)
from beanwire.introspection import TypeIntrospector
from beanwire.markers import component_name_of
from beanwire.resolver import ArgumentResolver
from beanwire.scheduler import InitializationScheduler
from beanwire.settings import BeanWireSettings
from beanwire.store import DescriptorStore

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Registry:
    """Register components, wire their dependencies, and serve lookups.

    A registry goes through two phases. During bootstrap descriptors are
    registered; eager ones are built right away, and those whose dependencies
    are not registered yet are deferred. ``complete_bootstrap`` retries the
    deferred ones until everything is built, then closes registration. After
    that the registry only serves lookups, building lazy and non-singleton
    components on demand.

    ``Registry.open`` runs both phases for a discovered namespace.

    Examples:
        .. code-block:: python

            registry = Registry.open("myapp.components")
            engine = registry.get_by_type(Engine)
            backup = registry.get_by_name("backup", Engine)

    """

    def __init__(self, settings: BeanWireSettings | None = None) -> None:
        """Create an empty registry in the bootstrap phase.

        Args:
            settings: Bootstrap configuration; read from the environment when
                omitted.

        """
        self._settings = settings or BeanWireSettings()
        self._store = DescriptorStore()
        self._resolver = ArgumentResolver(self)
        self._scheduler = InitializationScheduler(self._resolver)
        self._introspector = TypeIntrospector(
            default_singleton=self._settings.default_singleton,
            default_lazy=self._settings.default_lazy,
        )
        self._bootstrapped = False

        if self._settings.register_self:
            self_name = self._settings.self_name or f"{type(self).__module__}.{type(self).__qualname__}"
            self.register_instance(self_name, self)

    @classmethod
    def open(
        cls,
        namespace: str,
        provider: DiscoveryProvider | None = None,
        settings: BeanWireSettings | None = None,
    ) -> Self:
        """Discover, register, and build every component of ``namespace``.

        Args:
            namespace: Namespace handed to the discovery provider; a package
                name for the default ``ModuleDiscoveryProvider``.
            provider: Discovery provider; defaults to module scanning.
            settings: Bootstrap configuration.

        Returns:
            A fully wired registry.

        Raises:
            BeanWireCircularDependencyError: If deferred components never
                become buildable.
            BeanWireError: For the first failure that cannot be deferred.

        """
        settings = settings or BeanWireSettings()
        provider = provider or ModuleDiscoveryProvider(settings=settings)
        registry = cls(settings)
        for type_descriptor in provider.scan(namespace):
            registry.register_type(type_descriptor)
        registry.complete_bootstrap()
        return registry

    @property
    def is_bootstrapped(self) -> bool:
        return self._bootstrapped

    @property
    def pending(self) -> tuple[str, ...]:
        """Names of components deferred until their dependencies are registered."""
        return self._scheduler.pending

    def register(self, descriptor: ComponentDescriptor) -> ComponentDescriptor:
        """Register ``descriptor`` and, unless lazy, build it.

        A build that fails because a dependency is not registered yet is
        deferred to ``complete_bootstrap``; every other failure propagates.
        Sub-components declared through factory methods are registered right
        after, whether the owner was built or deferred.

        Raises:
            BeanWireDuplicateRegistrationError: If the name is taken, ignoring case.
            BeanWireConstructorShapeError: If the type has no single public
                constructor.
            BeanWireInvalidRegistrationError: If bootstrap already completed or
                a factory method returns nothing.

        """
        if self._bootstrapped:
            msg = f"Cannot register '{descriptor.name}': bootstrap already completed."
            raise BeanWireInvalidRegistrationError(msg)

        descriptor.validate()
        self._store.add(descriptor)
        logger.debug(
            "Registered component '%s' (singleton=%s, lazy=%s)",
            descriptor.name,
            descriptor.singleton,
            descriptor.lazy,
        )

        if not descriptor.lazy:
            self._scheduler.try_build(descriptor)

        for method in descriptor.factory_methods:
            self.register(ComponentDescriptor.from_factory_method(descriptor, method))
        return descriptor

    def register_type(self, type_descriptor: TypeDescriptor) -> ComponentDescriptor | None:
        """Register a discovered type; non-components are ignored."""
        if not type_descriptor.is_component:
            return None
        return self.register(ComponentDescriptor.from_type(type_descriptor))

    def register_instance(self, name: str, instance: Any) -> ComponentDescriptor:
        """Register an already-built singleton under ``name``.

        ``@component`` methods of the instance's class are registered as
        sub-components, as for discovered types.
        """
        factory_methods = self._introspector.extract_factory_methods(type(instance))
        return self.register(ComponentDescriptor.from_instance(name, instance, factory_methods))

    def complete_bootstrap(self) -> None:
        """Build every deferred component and close registration.

        Raises:
            BeanWireCircularDependencyError: If deferred components never
                become buildable.

        """
        self._scheduler.sweep()
        self._bootstrapped = True
        logger.info("Bootstrap completed with %d components", len(self._store))

    @overload
    def get_by_type(self, requested_type: type[T]) -> T: ...

    @overload
    def get_by_type(self, requested_type: Any) -> Any: ...

    def get_by_type(self, requested_type: Any) -> Any:
        """Return a component assignable to ``requested_type``.

        The component registered under the type's declared or simple name wins
        when it is assignable. Otherwise the first assignable component in
        registration order is used; callers must not rely on which one wins
        among several candidates.

        Raises:
            BeanWireNotFoundError: If no component is assignable.

        """
        descriptor = self._find_by_type(requested_type)
        if descriptor is None:
            raise BeanWireNotFoundError(requested_type)
        return descriptor.get_instance(self._resolver)

    @overload
    def get_by_name(self, name: str, requested_type: type[T]) -> T: ...

    @overload
    def get_by_name(self, name: str, requested_type: Any = object) -> Any: ...

    def get_by_name(self, name: str, requested_type: Any = object) -> Any:
        """Return the component registered under ``name``, ignoring case.

        Raises:
            BeanWireNotFoundError: If no component has that name.
            BeanWireTypeMismatchError: If it is not assignable to
                ``requested_type``.

        """
        descriptor = self._store.get(name)
        if descriptor is None:
            raise BeanWireNotFoundError(name)
        if not descriptor.is_assignable_to(requested_type):
            raise BeanWireTypeMismatchError(name, requested_type, descriptor.declared_type)
        return descriptor.get_instance(self._resolver)

    def get_all_of_type(self, requested_type: type[T]) -> dict[str, T]:
        """Return every component assignable to ``requested_type``, by name.

        Lazy components are built as a side effect.
        """
        return {
            descriptor.name: descriptor.get_instance(self._resolver)
            for descriptor in self._store.values()
            if descriptor.is_assignable_to(requested_type)
        }

    def names(self) -> list[str]:
        """Registered component names, in registration order."""
        return self._store.names()

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __len__(self) -> int:
        return len(self._store)

    def _find_by_type(self, requested_type: Any) -> ComponentDescriptor | None:
        named = self._store.get(component_name_of(requested_type))
        if named is not None and named.is_assignable_to(requested_type):
            return named
        return next(
            (
                descriptor
                for descriptor in self._store.values()
                if descriptor.is_assignable_to(requested_type)
            ),
            None,
        )


__all__ = ["Registry"]
