"""Tests for Registry registration and lookups."""

import pytest

from beanwire import (
    BeanWireDuplicateRegistrationError,
    BeanWireInvalidRegistrationError,
    BeanWireNotFoundError,
    BeanWireSettings,
    BeanWireTypeMismatchError,
    Registry,
    StaticDiscoveryProvider,
    component,
    describe_type,
)
from tests.helpers import constructed


class Engine:
    pass


class TurboEngine(Engine):
    pass


@component("motor")
class Motor:
    pass


class ElectricMotor(Motor):
    pass


@component
class Dashboard:
    pass


@component
class Radio:
    pass


class Wheel:
    pass


class WheelFactory:
    def __init__(self) -> None:
        self.made = 0

    @component
    def wheel(self) -> Wheel:
        self.made += 1
        return Wheel()


@component
class Owner:
    @component("garage")
    def make_garage(self) -> Engine:
        return Engine()


class TestRegister:
    def test_duplicate_name_is_rejected_ignoring_case(self, registry: Registry) -> None:
        """A second component with the same name in another case is a duplicate."""
        registry.register_instance("engine", Engine())

        with pytest.raises(BeanWireDuplicateRegistrationError) as exc_info:
            registry.register_instance("ENGINE", Engine())

        assert exc_info.value.name == "ENGINE"
        assert isinstance(exc_info.value, BeanWireInvalidRegistrationError)
        assert len(registry) == 1

    def test_eager_component_is_built_on_registration(self, registry: Registry) -> None:
        built: list[str] = []

        def make_engine() -> Engine:
            built.append("engine")
            return Engine()

        registry.register(constructed("engine", make_engine, declared_type=Engine))

        assert built == ["engine"]

    def test_lazy_component_waits_for_first_lookup(self, registry: Registry) -> None:
        built: list[str] = []

        def make_engine() -> Engine:
            built.append("engine")
            return Engine()

        registry.register(constructed("engine", make_engine, declared_type=Engine, lazy=True))
        registry.complete_bootstrap()
        assert built == []

        registry.get_by_type(Engine)
        assert built == ["engine"]

    def test_registration_after_bootstrap_is_rejected(self, registry: Registry) -> None:
        registry.complete_bootstrap()

        with pytest.raises(BeanWireInvalidRegistrationError, match="bootstrap already completed"):
            registry.register_instance("engine", Engine())

    def test_register_type_ignores_non_components(self, registry: Registry) -> None:
        """Types without a marker are not registered."""
        assert registry.register_type(describe_type(Engine)) is None
        assert len(registry) == 0

    def test_register_type_uses_declared_name(self, registry: Registry) -> None:
        descriptor = registry.register_type(describe_type(Motor))

        assert descriptor is not None
        assert descriptor.name == "motor"
        assert "MOTOR" in registry

    def test_factory_methods_are_registered_after_owner(self, registry: Registry) -> None:
        registry.register_type(describe_type(Owner))

        assert registry.names() == ["Owner", "garage"]

    def test_instance_factory_methods_are_registered(self, registry: Registry) -> None:
        """@component methods of a pre-built instance become components."""
        factory = WheelFactory()

        registry.register_instance("factory", factory)
        registry.complete_bootstrap()

        assert registry.names() == ["factory", "wheel"]
        assert isinstance(registry.get_by_name("wheel", Wheel), Wheel)
        assert factory.made == 1

    def test_names_follow_registration_order(self, registry: Registry) -> None:
        registry.register_instance("b", Engine())
        registry.register_instance("a", Engine())

        assert registry.names() == ["b", "a"]


class TestGetByType:
    def test_prefers_component_registered_under_simple_name(self, registry: Registry) -> None:
        turbo = TurboEngine()
        plain = Engine()
        registry.register_instance("turbo", turbo)
        registry.register_instance("Engine", plain)

        assert registry.get_by_type(Engine) is plain

    def test_prefers_component_registered_under_declared_name(self, registry: Registry) -> None:
        electric = ElectricMotor()
        motor = Motor()
        registry.register_instance("electric", electric)
        registry.register_instance("motor", motor)

        assert registry.get_by_type(Motor) is motor

    def test_falls_back_to_first_assignable_in_registration_order(
        self,
        registry: Registry,
    ) -> None:
        first = TurboEngine()
        registry.register_instance("first", first)
        registry.register_instance("second", TurboEngine())

        assert registry.get_by_type(Engine) is first

    def test_skips_named_component_of_wrong_type(self, registry: Registry) -> None:
        """A same-named component that is not assignable does not shadow the scan."""
        engine = TurboEngine()
        registry.register_instance("Engine", "not an engine")
        registry.register_instance("turbo", engine)

        assert registry.get_by_type(Engine) is engine

    def test_missing_type_raises_not_found(self, registry: Registry) -> None:
        with pytest.raises(BeanWireNotFoundError) as exc_info:
            registry.get_by_type(Engine)

        assert exc_info.value.key is Engine
        assert "Engine" in str(exc_info.value)


class TestGetByName:
    def test_lookup_ignores_case(self, registry: Registry) -> None:
        engine = Engine()
        registry.register_instance("MainEngine", engine)

        assert registry.get_by_name("mainengine") is engine
        assert registry.get_by_name("MAINENGINE", Engine) is engine

    def test_missing_name_raises_not_found(self, registry: Registry) -> None:
        with pytest.raises(BeanWireNotFoundError) as exc_info:
            registry.get_by_name("engine")

        assert exc_info.value.key == "engine"

    def test_wrong_type_raises_type_mismatch(self, registry: Registry) -> None:
        registry.register_instance("engine", Engine())

        with pytest.raises(BeanWireTypeMismatchError) as exc_info:
            registry.get_by_name("engine", Motor)

        assert exc_info.value.name == "engine"
        assert exc_info.value.expected_type is Motor
        assert exc_info.value.actual_type is Engine

    def test_subclass_satisfies_requested_base(self, registry: Registry) -> None:
        turbo = TurboEngine()
        registry.register_instance("turbo", turbo)

        assert registry.get_by_name("turbo", Engine) is turbo


class TestGetAllOfType:
    def test_returns_every_assignable_component_by_name(self, registry: Registry) -> None:
        plain = Engine()
        turbo = TurboEngine()
        registry.register_instance("plain", plain)
        registry.register_instance("motor", Motor())
        registry.register_instance("turbo", turbo)

        assert registry.get_all_of_type(Engine) == {"plain": plain, "turbo": turbo}

    def test_builds_lazy_components(self, registry: Registry) -> None:
        built: list[str] = []

        def make_engine() -> Engine:
            built.append("lazy")
            return Engine()

        registry.register(constructed("lazy", make_engine, declared_type=Engine, lazy=True))
        registry.complete_bootstrap()

        engines = registry.get_all_of_type(Engine)

        assert list(engines) == ["lazy"]
        assert built == ["lazy"]

    def test_returns_empty_mapping_without_matches(self, registry: Registry) -> None:
        assert registry.get_all_of_type(Engine) == {}


class TestSelfRegistration:
    def test_registry_registers_itself_by_default(self) -> None:
        registry = Registry(BeanWireSettings(register_self=True))

        assert "beanwire.registry.Registry" in registry
        assert registry.get_by_type(Registry) is registry

    def test_self_name_can_be_configured(self) -> None:
        registry = Registry(BeanWireSettings(self_name="container"))

        assert registry.get_by_name("container", Registry) is registry

    def test_self_registration_can_be_disabled(self, registry: Registry) -> None:
        assert len(registry) == 0
        with pytest.raises(BeanWireNotFoundError):
            registry.get_by_type(Registry)


class TestOpen:
    def test_open_registers_and_bootstraps_namespace(self, settings: BeanWireSettings) -> None:
        provider = StaticDiscoveryProvider(
            {"app": [describe_type(Dashboard), describe_type(Radio), describe_type(Engine)]},
        )

        registry = Registry.open("app", provider=provider, settings=settings)

        assert registry.is_bootstrapped
        assert registry.names() == ["Dashboard", "Radio"]
        assert isinstance(registry.get_by_name("dashboard"), Dashboard)

    def test_open_includes_self_registration(self) -> None:
        provider = StaticDiscoveryProvider({"app": [describe_type(Radio)]})

        registry = Registry.open("app", provider=provider, settings=BeanWireSettings())

        assert registry.names() == ["beanwire.registry.Registry", "Radio"]
