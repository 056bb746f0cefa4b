"""Type descriptors and the providers that discover them.

A discovery provider turns a namespace into a static list of
``TypeDescriptor`` objects. The registry never inspects modules on its own;
everything it needs to know about a component type travels through these
descriptors.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from inspect import Parameter
from types import ModuleType
from typing import Any, Protocol

from beanwire.exceptions import BeanWireDiscoveryError
from beanwire.markers import component_marker
from beanwire.settings import BeanWireSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """A constructor or factory method parameter to be resolved."""

    name: str
    """Keyword the resolved value is passed under."""
    annotation: Any
    """Requested type, with any ``Annotated`` metadata stripped."""
    qualifier: str | None = None
    """Explicit qualifier name, or ``None`` when the parameter is unqualified."""
    default: Any = Parameter.empty
    """Value used when nothing matches; ``Parameter.empty`` makes the parameter required."""

    @property
    def qualified(self) -> bool:
        return self.qualifier is not None

    @property
    def has_default(self) -> bool:
        return self.default is not Parameter.empty

    @property
    def qualifier_name(self) -> str | None:
        """Name used for qualified lookup; an empty qualifier falls back to ``name``."""
        if not self.qualified:
            return None
        return self.qualifier or self.name


@dataclass(frozen=True, slots=True)
class ConstructorSpec:
    """A public constructor: a callable producing the instance and its parameters."""

    factory: Callable[..., Any]
    parameters: tuple[ParameterSpec, ...] = ()


@dataclass(frozen=True, slots=True)
class FactoryMethodSpec:
    """A method of a component that produces another component."""

    method_name: str
    """Attribute looked up on the owning instance."""
    name: str
    """Component name the produced value is registered under."""
    return_type: Any
    """Declared return type; ``None`` means the method returns nothing."""
    singleton: bool = True
    lazy: bool = False
    parameters: tuple[ParameterSpec, ...] = ()
    post_construct: tuple[str, ...] = ()
    """Hook method names run on the produced value."""
    factory_methods: tuple[FactoryMethodSpec, ...] = ()
    """Factory methods declared by the produced type."""


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Everything the registry needs to know about a discovered type."""

    type: Any
    is_component: bool = True
    name: str | None = None
    """Declared name; ``None`` means the simple type name."""
    singleton: bool = True
    lazy: bool = False
    constructors: tuple[ConstructorSpec, ...] = ()
    factory_methods: tuple[FactoryMethodSpec, ...] = ()
    post_construct: tuple[str, ...] = ()

    @property
    def component_name(self) -> str:
        return self.name or getattr(self.type, "__name__", repr(self.type))


class DiscoveryProvider(Protocol):
    """Produce the type descriptors found in a namespace."""

    def scan(self, namespace: str) -> Sequence[TypeDescriptor]:
        """Return every type descriptor of ``namespace`` in discovery order."""
        ...


@dataclass(frozen=True)
class StaticDiscoveryProvider:
    """Serve a fixed mapping of namespace to type descriptors.

    Useful for manual wiring and tests where no module scanning is wanted.
    """

    descriptors: Mapping[str, Sequence[TypeDescriptor]] = field(default_factory=dict)

    def scan(self, namespace: str) -> Sequence[TypeDescriptor]:
        """Return the descriptors registered for ``namespace``.

        Raises:
            BeanWireDiscoveryError: If the namespace is unknown.

        """
        try:
            return tuple(self.descriptors[namespace])
        except KeyError:
            msg = f"No type descriptors for namespace '{namespace}'."
            raise BeanWireDiscoveryError(msg) from None


class ModuleDiscoveryProvider:
    """Describe every ``@component`` class defined in a Python package.

    The namespace is an importable module or package name. Packages are walked
    recursively unless ``recursive_discovery`` is disabled in the settings.
    Classes are reported in module walk order, then definition order; classes
    re-exported from another module are reported once, by their defining
    module.
    """

    def __init__(
        self,
        settings: BeanWireSettings | None = None,
        describe: Callable[..., TypeDescriptor] | None = None,
    ) -> None:
        # introspection imports the descriptor types defined in this module.
        from beanwire.introspection import describe_type

        self._settings = settings or BeanWireSettings()
        self._describe = describe or describe_type

    def scan(self, namespace: str) -> Sequence[TypeDescriptor]:
        """Import ``namespace`` and describe its component classes.

        Raises:
            BeanWireDiscoveryError: If the namespace or one of its modules
                cannot be imported.

        """
        descriptors: list[TypeDescriptor] = []
        for module in self._modules(namespace):
            for member in vars(module).values():
                if not inspect.isclass(member) or member.__module__ != module.__name__:
                    continue
                if component_marker(member) is None:
                    continue
                descriptors.append(
                    self._describe(
                        member,
                        default_singleton=self._settings.default_singleton,
                        default_lazy=self._settings.default_lazy,
                    ),
                )
        logger.debug("Discovered %d component types in '%s'", len(descriptors), namespace)
        return descriptors

    def _modules(self, namespace: str) -> list[ModuleType]:
        root = _import(namespace)
        modules = [root]
        search_path = getattr(root, "__path__", None)
        if search_path is None:
            return modules

        prefix = f"{root.__name__}."
        if self._settings.recursive_discovery:
            infos = pkgutil.walk_packages(search_path, prefix=prefix, onerror=_raise_walk_error)
        else:
            infos = pkgutil.iter_modules(search_path, prefix=prefix)
        modules.extend(_import(info.name) for info in infos)
        return modules


def _import(module_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except ImportError as error:
        msg = f"Unable to import namespace '{module_name}': {error}"
        raise BeanWireDiscoveryError(msg) from error


def _raise_walk_error(module_name: str) -> None:
    msg = f"Unable to import namespace '{module_name}'."
    raise BeanWireDiscoveryError(msg)


__all__ = [
    "ConstructorSpec",
    "DiscoveryProvider",
    "FactoryMethodSpec",
    "ModuleDiscoveryProvider",
    "ParameterSpec",
    "StaticDiscoveryProvider",
    "TypeDescriptor",
]
