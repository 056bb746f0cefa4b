"""Creation strategies: how one instance of a component is produced."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from beanwire.discovery import ConstructorSpec, FactoryMethodSpec
from beanwire.exceptions import (
    BeanWireConstructorShapeError,
    BeanWireInvalidRegistrationError,
    BeanWireInvocationError,
)

if TYPE_CHECKING:
    from beanwire.descriptors import ComponentDescriptor
    from beanwire.resolver import ArgumentResolver

logger = logging.getLogger(__name__)


class CreationStrategy(ABC):
    """Produce one instance of a component from resolved arguments."""

    @abstractmethod
    def create(self, resolver: ArgumentResolver) -> Any:
        """Build a new instance, resolving dependencies through ``resolver``."""

    def validate(self) -> None:  # noqa: B027
        """Check the strategy can ever succeed; called once at registration."""


@dataclass(slots=True)
class FromConstructor(CreationStrategy):
    """Build a component by calling its single public constructor."""

    component_type: Any
    constructors: Sequence[ConstructorSpec]
    post_construct: Sequence[str] = ()

    def validate(self) -> None:
        self._constructor()

    def create(self, resolver: ArgumentResolver) -> Any:
        constructor = self._constructor()
        target = _qualname(self.component_type)
        arguments = resolver.resolve_arguments(target, constructor.parameters)
        try:
            instance = constructor.factory(**arguments)
        except Exception as error:
            msg = f"Unable to construct '{target}': {error!r}"
            raise BeanWireInvocationError(target, msg) from error
        run_post_construct(instance, self.post_construct)
        return instance

    def _constructor(self) -> ConstructorSpec:
        if len(self.constructors) != 1:
            raise BeanWireConstructorShapeError(self.component_type, len(self.constructors))
        return self.constructors[0]


@dataclass(slots=True)
class FromFactoryMethod(CreationStrategy):
    """Build a component by calling a method on the owning component instance."""

    owner: ComponentDescriptor
    method: FactoryMethodSpec

    def validate(self) -> None:
        if self.method.return_type is None:
            msg = (
                f"The factory method '{self._target}' must declare a return type; "
                "components cannot be produced by methods returning nothing."
            )
            raise BeanWireInvalidRegistrationError(msg)

    def create(self, resolver: ArgumentResolver) -> Any:
        owner_instance = self.owner.get_instance(resolver)
        arguments = resolver.resolve_arguments(self._target, self.method.parameters)
        try:
            instance = getattr(owner_instance, self.method.method_name)(**arguments)
        except Exception as error:
            msg = f"Unable to call factory method '{self._target}': {error!r}"
            raise BeanWireInvocationError(self._target, msg) from error
        run_post_construct(instance, self.method.post_construct)
        return instance

    @property
    def _target(self) -> str:
        return f"{self.owner.name}.{self.method.method_name}"


@dataclass(slots=True)
class PreBuilt(CreationStrategy):
    """Hand out an instance that was built outside the registry."""

    instance: Any

    def create(self, resolver: ArgumentResolver) -> Any:
        return self.instance


def run_post_construct(instance: Any, hooks: Sequence[str]) -> None:
    """Call every named zero-argument hook on ``instance``, in order.

    Underscore-prefixed hooks run like any other.
    """
    for hook_name in hooks:
        target = f"{_qualname(type(instance))}.{hook_name}"
        logger.debug("Running post-construct hook '%s'", target)
        try:
            getattr(instance, hook_name)()
        except Exception as error:
            msg = f"Unable to call post-construct hook '{target}': {error!r}"
            raise BeanWireInvocationError(target, msg) from error


def _qualname(value: Any) -> str:
    return getattr(value, "__qualname__", None) or repr(value)


__all__ = [
    "CreationStrategy",
    "FromConstructor",
    "FromFactoryMethod",
    "PreBuilt",
    "run_post_construct",
]
