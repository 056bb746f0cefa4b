from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def _type_name(value: Any) -> str:
    return getattr(value, "__qualname__", None) or repr(value)


class BeanWireError(Exception):
    """Represent a base class for all BeanWire-specific failures.

    Catch this type when you want to handle any BeanWire error path without
    matching each concrete exception class individually.
    """


class BeanWireInvalidRegistrationError(BeanWireError):
    """Signal invalid registration or marker configuration.

    Raised when a factory method declares no return type, when a constructor
    parameter cannot be described, when a marker is applied to an unsupported
    target, and when ``Registry.register`` is called after bootstrap completed.
    """


class BeanWireDiscoveryError(BeanWireError):
    """Signal that a discovery provider cannot scan the requested namespace."""


class BeanWireDuplicateRegistrationError(BeanWireInvalidRegistrationError):
    """Signal that a component name is already taken.

    Names are compared case-insensitively, so ``"Engine"`` and ``"engine"``
    collide.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"The component '{name}' is already registered.")


class BeanWireNotFoundError(BeanWireError):
    """Signal that no component matches a requested type or name.

    During bootstrap this is the only failure the initialization scheduler
    treats as recoverable: the dependent descriptor is deferred and retried
    once every discovered descriptor is registered.
    """

    def __init__(self, key: Any, message: str | None = None) -> None:
        self.key = key
        if message is None:
            if isinstance(key, str):
                message = f"The component '{key}' is not registered."
            else:
                message = f"No component of type '{_type_name(key)}' is registered."
        super().__init__(message)


class BeanWireParameterResolutionError(BeanWireNotFoundError):
    """Signal that a constructor or factory method parameter cannot be resolved.

    The underlying ``BeanWireNotFoundError`` is chained as ``__cause__``.
    """

    def __init__(self, owner: str, parameter: str, annotation: Any) -> None:
        self.owner = owner
        self.parameter = parameter
        self.annotation = annotation
        super().__init__(
            annotation,
            f"Unable to resolve parameter '{parameter}' of type "
            f"'{_type_name(annotation)}' for component '{owner}'.",
        )


class BeanWireComponentInCreationError(BeanWireNotFoundError):
    """Signal that a component was requested while its own creation is running.

    Raised when a dependency chain re-enters a component on the thread that is
    already building it.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name, f"The component '{name}' is currently in creation.")


class BeanWireTypeMismatchError(BeanWireError):
    """Signal that a component found by name does not satisfy the requested type."""

    def __init__(self, name: str, expected_type: Any, actual_type: Any) -> None:
        self.name = name
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(
            f"The component '{name}' is of type '{_type_name(actual_type)}', "
            f"not '{_type_name(expected_type)}'.",
        )


class BeanWireConstructorShapeError(BeanWireError):
    """Signal that a component type does not expose exactly one public constructor."""

    def __init__(self, component_type: Any, constructor_count: int) -> None:
        self.component_type = component_type
        self.constructor_count = constructor_count
        super().__init__(
            f"'{_type_name(component_type)}' must have exactly one public constructor, "
            f"found {constructor_count}.",
        )


class BeanWireInvocationError(BeanWireError):
    """Signal that a constructor, factory method, or post-construction hook raised.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, target: str, message: str) -> None:
        self.target = target
        super().__init__(message)


class BeanWireCircularDependencyError(BeanWireError):
    """Signal that bootstrap could not converge.

    ``remaining`` holds the names of every descriptor still pending when a full
    sweep made no progress: members of dependency cycles and descriptors that
    depend on a component that is never registered.
    """

    def __init__(self, remaining: Iterable[str]) -> None:
        self.remaining = tuple(remaining)
        names = ", ".join(f"'{name}'" for name in self.remaining)
        super().__init__(f"Unable to resolve circular or missing dependencies for: {names}.")
