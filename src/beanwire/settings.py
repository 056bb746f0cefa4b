from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class BeanWireSettings(BaseSettings):
    """Configure registry bootstrap and module discovery.

    Values are read from ``BEANWIRE_*`` environment variables, for example
    ``BEANWIRE_DEFAULT_LAZY=true``.
    """

    model_config = SettingsConfigDict(env_prefix="BEANWIRE_")

    register_self: bool = True
    """Seed every registry with itself as a pre-built singleton."""

    self_name: str | None = None
    """Name of the self-registration; defaults to the registry's qualified class name."""

    default_singleton: bool = True
    """Singleton flag for ``@component`` markers that leave it unset."""

    default_lazy: bool = False
    """Lazy flag for ``@component`` markers that leave it unset."""

    recursive_discovery: bool = True
    """Walk subpackages when scanning a package namespace."""


__all__ = ["BeanWireSettings"]
