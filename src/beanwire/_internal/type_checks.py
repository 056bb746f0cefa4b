from __future__ import annotations

import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_assignable(declared_type: Any, requested_type: Any) -> bool:
    """Return true when a value of ``declared_type`` can stand in for ``requested_type``.

    Runtime classes are compared with ``issubclass``. Anything else, such as
    typing constructs or non-runtime-checkable protocols, only matches itself.

    Args:
        declared_type: Type a component was registered with.
        requested_type: Type a caller asked for.

    """
    if declared_type is requested_type or requested_type is object:
        return True
    if is_runtime_class(declared_type) and is_runtime_class(requested_type):
        try:
            return issubclass(declared_type, requested_type)
        except TypeError:
            return False
    return bool(declared_type == requested_type)


__all__ = ["is_assignable", "is_runtime_class"]
