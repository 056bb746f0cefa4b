from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from typing import TYPE_CHECKING, Any

from beanwire._internal.type_checks import is_assignable
from beanwire.discovery import FactoryMethodSpec, TypeDescriptor
from beanwire.lifecycle import LifecycleCell
from beanwire.strategies import CreationStrategy, FromConstructor, FromFactoryMethod, PreBuilt

if TYPE_CHECKING:
    from beanwire.resolver import ArgumentResolver


@dataclass(eq=False)
class ComponentDescriptor:
    """Registration metadata of one component plus its lifecycle cell.

    The strategy is handed to the cell, which owns it from then on.
    """

    name: str
    """Registered name; lookups compare it case-insensitively."""
    declared_type: Any
    strategy: InitVar[CreationStrategy]
    singleton: bool = True
    lazy: bool = False
    factory_methods: tuple[FactoryMethodSpec, ...] = ()
    """Sub-components this component exposes through its methods."""
    cell: LifecycleCell = field(init=False, repr=False)

    def __post_init__(self, strategy: CreationStrategy) -> None:
        self.cell = LifecycleCell(self.name, strategy, singleton=self.singleton)

    @classmethod
    def from_type(cls, type_descriptor: TypeDescriptor) -> ComponentDescriptor:
        """Describe a discovered type built from its constructor."""
        return cls(
            name=type_descriptor.component_name,
            declared_type=type_descriptor.type,
            strategy=FromConstructor(
                component_type=type_descriptor.type,
                constructors=type_descriptor.constructors,
                post_construct=type_descriptor.post_construct,
            ),
            singleton=type_descriptor.singleton,
            lazy=type_descriptor.lazy,
            factory_methods=type_descriptor.factory_methods,
        )

    @classmethod
    def from_factory_method(
        cls,
        owner: ComponentDescriptor,
        method: FactoryMethodSpec,
    ) -> ComponentDescriptor:
        """Describe a sub-component produced by ``method`` of ``owner``."""
        return cls(
            name=method.name,
            declared_type=method.return_type,
            strategy=FromFactoryMethod(owner=owner, method=method),
            singleton=method.singleton,
            lazy=method.lazy,
            factory_methods=method.factory_methods,
        )

    @classmethod
    def from_instance(
        cls,
        name: str,
        instance: Any,
        factory_methods: tuple[FactoryMethodSpec, ...] = (),
    ) -> ComponentDescriptor:
        """Describe an already-built singleton exposing ``factory_methods``."""
        return cls(
            name=name,
            declared_type=type(instance),
            strategy=PreBuilt(instance),
            factory_methods=factory_methods,
        )

    @property
    def key(self) -> str:
        return name_key(self.name)

    def is_assignable_to(self, requested_type: Any) -> bool:
        return is_assignable(self.declared_type, requested_type)

    def validate(self) -> None:
        self.cell.validate()

    def get_instance(self, resolver: ArgumentResolver) -> Any:
        return self.cell.get_instance(resolver)


def name_key(name: str) -> str:
    """Return the case-insensitive lookup key of a component name."""
    return name.casefold()


__all__ = ["ComponentDescriptor", "name_key"]
