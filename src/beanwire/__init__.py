from beanwire.descriptors import ComponentDescriptor
from beanwire.discovery import (
    ConstructorSpec,
    DiscoveryProvider,
    FactoryMethodSpec,
    ModuleDiscoveryProvider,
    ParameterSpec,
    StaticDiscoveryProvider,
    TypeDescriptor,
)
from beanwire.exceptions import (
    BeanWireCircularDependencyError,
    BeanWireComponentInCreationError,
    BeanWireConstructorShapeError,
    BeanWireDiscoveryError,
    BeanWireDuplicateRegistrationError,
    BeanWireError,
    BeanWireInvalidRegistrationError,
    BeanWireInvocationError,
    BeanWireNotFoundError,
    BeanWireParameterResolutionError,
    BeanWireTypeMismatchError,
)
from beanwire.introspection import describe_type
from beanwire.markers import Qualifier, component, constructor, post_construct
from beanwire.registry import Registry
from beanwire.settings import BeanWireSettings
from beanwire.strategies import CreationStrategy, FromConstructor, FromFactoryMethod, PreBuilt

__all__ = [
    "BeanWireCircularDependencyError",
    "BeanWireComponentInCreationError",
    "BeanWireConstructorShapeError",
    "BeanWireDiscoveryError",
    "BeanWireDuplicateRegistrationError",
    "BeanWireError",
    "BeanWireInvalidRegistrationError",
    "BeanWireInvocationError",
    "BeanWireNotFoundError",
    "BeanWireParameterResolutionError",
    "BeanWireSettings",
    "BeanWireTypeMismatchError",
    "ComponentDescriptor",
    "ConstructorSpec",
    "CreationStrategy",
    "DiscoveryProvider",
    "FactoryMethodSpec",
    "FromConstructor",
    "FromFactoryMethod",
    "ModuleDiscoveryProvider",
    "ParameterSpec",
    "PreBuilt",
    "Qualifier",
    "Registry",
    "StaticDiscoveryProvider",
    "TypeDescriptor",
    "component",
    "constructor",
    "describe_type",
    "post_construct",
]
