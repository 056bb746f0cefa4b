from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NamedTuple, TypeVar, overload

from beanwire.exceptions import BeanWireInvalidRegistrationError

T = TypeVar("T")

COMPONENT_ATTR = "__beanwire_component__"
"""Attribute storing the ``ComponentMarker`` of a class or factory method."""

POST_CONSTRUCT_ATTR = "__beanwire_post_construct__"
"""Attribute flagging a post-construction hook method."""

CONSTRUCTOR_ATTR = "__beanwire_constructor__"
"""Attribute flagging a classmethod as a public constructor."""


class Qualifier(NamedTuple):
    """Name the component a parameter should be wired to.

    Attach ``Qualifier`` metadata with ``typing.Annotated``. An empty value
    means "use the parameter's own name".

    Examples:
        .. code-block:: python

            class Car:
                def __init__(
                    self,
                    engine: Annotated[Engine, Qualifier("primary")],
                    spare: Annotated[Engine, Qualifier()],
                ) -> None: ...

    """

    value: str = ""


@dataclass(frozen=True, slots=True)
class ComponentMarker:
    """Flags recorded by ``@component``.

    ``None`` flags are left for discovery to fill from settings defaults.
    """

    name: str | None = None
    singleton: bool | None = None
    lazy: bool | None = None


@overload
def component(target: T, /) -> T: ...


@overload
def component(
    name: str | None = None,
    /,
    *,
    singleton: bool | None = None,
    lazy: bool | None = None,
) -> Callable[[T], T]: ...


def component(
    target: Any = None,
    /,
    *,
    singleton: bool | None = None,
    lazy: bool | None = None,
) -> Any:
    """Mark a class as a component, or a method as a component factory.

    Usable bare (``@component``) or with arguments
    (``@component("engine", lazy=True)``). On a class the marker is read by
    discovery; on a method of a component class it declares a sub-component
    built by calling that method on the owning component instance.

    Args:
        target: The decorated object in bare form, or the component name.
        singleton: Whether instances are cached after the first build.
        lazy: Whether the first build waits for the first lookup.

    Returns:
        The decorated object, or a decorator in the parametrized form.

    """
    if target is None or isinstance(target, str):
        marker = ComponentMarker(name=target or None, singleton=singleton, lazy=lazy)
        return lambda obj: _mark_component(obj, marker)
    return _mark_component(target, ComponentMarker(singleton=singleton, lazy=lazy))


def _mark_component(target: T, marker: ComponentMarker) -> T:
    if isinstance(target, (staticmethod, classmethod)):
        setattr(target.__func__, COMPONENT_ATTR, marker)
        return target  # type: ignore[return-value]
    if not (inspect.isclass(target) or inspect.isfunction(target)):
        msg = f"@component can only decorate classes and methods, got {target!r}."
        raise BeanWireInvalidRegistrationError(msg)
    setattr(target, COMPONENT_ATTR, marker)
    return target


def post_construct(method: T) -> T:
    """Mark a zero-argument method to run right after a component is built."""
    if not inspect.isfunction(method):
        msg = f"@post_construct can only decorate functions, got {method!r}."
        raise BeanWireInvalidRegistrationError(msg)
    setattr(method, POST_CONSTRUCT_ATTR, True)
    return method


def constructor(method: T) -> T:
    """Mark a classmethod as a public constructor of its component.

    Marked classmethods replace ``__init__`` as the set of public
    constructors, so a class must mark at most one.
    """
    func = method.__func__ if isinstance(method, classmethod) else method
    if not inspect.isfunction(func):
        msg = f"@constructor can only decorate classmethods, got {method!r}."
        raise BeanWireInvalidRegistrationError(msg)
    setattr(func, CONSTRUCTOR_ATTR, True)
    return method


def component_marker(target: Any) -> ComponentMarker | None:
    """Return the ``ComponentMarker`` declared directly on ``target``.

    Markers are not inherited: a subclass of a component is not a component
    unless decorated itself.
    """
    if isinstance(target, (staticmethod, classmethod)):
        target = target.__func__
    if inspect.isclass(target):
        marker = vars(target).get(COMPONENT_ATTR)
    else:
        marker = getattr(target, COMPONENT_ATTR, None)
    return marker if isinstance(marker, ComponentMarker) else None


def component_name_of(target: Any) -> str:
    """Return the declared component name of ``target``, else its simple name."""
    marker = component_marker(target)
    if marker is not None and marker.name:
        return marker.name
    return getattr(target, "__name__", None) or repr(target)


def is_post_construct(func: Any) -> bool:
    return getattr(func, POST_CONSTRUCT_ATTR, False) is True


def is_constructor(func: Any) -> bool:
    return getattr(func, CONSTRUCTOR_ATTR, False) is True


__all__ = [
    "COMPONENT_ATTR",
    "CONSTRUCTOR_ATTR",
    "POST_CONSTRUCT_ATTR",
    "ComponentMarker",
    "Qualifier",
    "component",
    "component_marker",
    "component_name_of",
    "constructor",
    "is_constructor",
    "is_post_construct",
    "post_construct",
]
