from __future__ import annotations

from pydantic_settings import BaseSettings

from beanwire._internal.type_checks import is_runtime_class


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a Pydantic settings model.

    Settings components are built through a zero-argument constructor so their
    fields come from the environment instead of being wired from the registry.

    Args:
        candidate: Object to test.

    Returns:
        ``True`` when ``candidate`` is a runtime class and subclasses
        ``pydantic_settings.BaseSettings``; otherwise ``False``.

    """
    if not is_runtime_class(candidate):
        return False
    try:
        return issubclass(candidate, BaseSettings)
    except TypeError:
        return False


__all__ = ["is_pydantic_settings_subclass"]
