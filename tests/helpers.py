"""Builders for hand-wired descriptors used across tests."""

from collections.abc import Callable, Sequence
from typing import Any

from beanwire.descriptors import ComponentDescriptor
from beanwire.discovery import ConstructorSpec, ParameterSpec
from beanwire.strategies import FromConstructor


def constructed(
    name: str,
    factory: Callable[..., Any],
    *,
    declared_type: Any = object,
    parameters: Sequence[ParameterSpec] = (),
    singleton: bool = True,
    lazy: bool = False,
) -> ComponentDescriptor:
    """Describe a component built by calling ``factory``."""
    return ComponentDescriptor(
        name=name,
        declared_type=declared_type,
        strategy=FromConstructor(
            component_type=declared_type,
            constructors=[ConstructorSpec(factory=factory, parameters=tuple(parameters))],
        ),
        singleton=singleton,
        lazy=lazy,
    )
