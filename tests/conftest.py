"""Shared pytest fixtures for beanwire tests."""

import pytest

from beanwire.introspection import TypeIntrospector
from beanwire.registry import Registry
from beanwire.settings import BeanWireSettings


@pytest.fixture()
def settings() -> BeanWireSettings:
    """Settings without self-registration, so registries start empty."""
    return BeanWireSettings(register_self=False)


@pytest.fixture()
def registry(settings: BeanWireSettings) -> Registry:
    """Empty registry in the bootstrap phase."""
    return Registry(settings)


@pytest.fixture()
def introspector() -> TypeIntrospector:
    """TypeIntrospector with default flags."""
    return TypeIntrospector()
