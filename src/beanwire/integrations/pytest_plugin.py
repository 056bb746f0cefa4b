"""pytest plugin providing a bootstrapped registry per test.

Enable it with ``-p beanwire.integrations.pytest_plugin`` and name the
namespace to discover with a marker:

.. code-block:: python

    @pytest.mark.beanwire_namespace("myapp.components")
    def test_engine(beanwire_registry: Registry) -> None:
        assert beanwire_registry.get_by_type(Engine).started

Override ``beanwire_settings`` or ``beanwire_discovery_provider`` to change how
the registry is opened.
"""

from __future__ import annotations

import pytest

from beanwire.discovery import DiscoveryProvider
from beanwire.registry import Registry
from beanwire.settings import BeanWireSettings

_NAMESPACE_MARKER = "beanwire_namespace"


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        f"{_NAMESPACE_MARKER}(namespace): namespace discovered by the beanwire_registry fixture",
    )


@pytest.fixture()
def beanwire_settings() -> BeanWireSettings:
    """Settings used to open ``beanwire_registry``."""
    return BeanWireSettings()


@pytest.fixture()
def beanwire_discovery_provider() -> DiscoveryProvider | None:
    """Discovery provider used to open ``beanwire_registry``; ``None`` scans modules."""
    return None


@pytest.fixture()
def beanwire_registry(
    request: pytest.FixtureRequest,
    beanwire_settings: BeanWireSettings,
    beanwire_discovery_provider: DiscoveryProvider | None,
) -> Registry:
    """Registry opened for the namespace named by ``@pytest.mark.beanwire_namespace``."""
    marker = request.node.get_closest_marker(_NAMESPACE_MARKER)
    if marker is None or not marker.args:
        msg = (
            "The beanwire_registry fixture requires a namespace. Decorate the test with "
            f"@pytest.mark.{_NAMESPACE_MARKER}('package.name')."
        )
        raise RuntimeError(msg)
    return Registry.open(
        marker.args[0],
        provider=beanwire_discovery_provider,
        settings=beanwire_settings,
    )
