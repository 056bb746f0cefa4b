from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from beanwire._internal.type_checks import is_runtime_class
from beanwire.discovery import (
    ConstructorSpec,
    FactoryMethodSpec,
    ParameterSpec,
    TypeDescriptor,
)
from beanwire.exceptions import BeanWireInvalidRegistrationError
from beanwire.integrations.pydantic_settings import is_pydantic_settings_subclass
from beanwire.markers import (
    Qualifier,
    component_marker,
    is_constructor,
    is_post_construct,
)

_MISSING_ANNOTATION: Any = object()
_SKIPPED_PARAMETER_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(slots=True)
class TypeIntrospector:
    """Build ``TypeDescriptor`` objects from marked classes.

    Variadic parameters are ignored. Parameters with a default value are wired
    when annotated and fall back to the default when nothing matches; an
    unannotated one is left to its default. Every other parameter needs a
    type annotation.
    """

    default_singleton: bool = True
    default_lazy: bool = False

    def describe(self, component_type: Any) -> TypeDescriptor:
        """Describe ``component_type`` from its markers and signatures."""
        if not is_runtime_class(component_type):
            msg = f"Only classes can be described as components, got {component_type!r}."
            raise BeanWireInvalidRegistrationError(msg)

        marker = component_marker(component_type)
        return TypeDescriptor(
            type=component_type,
            is_component=marker is not None,
            name=marker.name if marker is not None else None,
            singleton=self._flag(marker.singleton if marker else None, self.default_singleton),
            lazy=self._flag(marker.lazy if marker else None, self.default_lazy),
            constructors=self.extract_constructors(component_type),
            factory_methods=self.extract_factory_methods(component_type),
            post_construct=self.extract_post_construct(component_type),
        )

    def extract_constructors(self, component_type: type[Any]) -> tuple[ConstructorSpec, ...]:
        """Return the public constructors of ``component_type``.

        Classmethods marked with ``@constructor`` replace ``__init__``.
        Pydantic settings models get a zero-argument constructor.
        """
        if is_pydantic_settings_subclass(component_type):
            return (ConstructorSpec(factory=component_type),)

        constructors: list[ConstructorSpec] = []
        for attribute_name, value in vars(component_type).items():
            if inspect.isfunction(value) and is_constructor(value):
                msg = (
                    f"@constructor '{component_type.__qualname__}.{attribute_name}' "
                    "must be a classmethod."
                )
                raise BeanWireInvalidRegistrationError(msg)
            if isinstance(value, classmethod) and is_constructor(value.__func__):
                constructors.append(
                    ConstructorSpec(
                        factory=getattr(component_type, attribute_name),
                        parameters=self.extract_parameters(
                            value.__func__,
                            provider_name=f"{component_type.__qualname__}.{attribute_name}",
                            skip_first_parameter=True,
                        ),
                    ),
                )
        if constructors:
            return tuple(constructors)

        return (
            ConstructorSpec(
                factory=component_type,
                parameters=self.extract_parameters(
                    component_type.__init__,
                    provider_name=component_type.__qualname__,
                    skip_first_parameter=True,
                ),
            ),
        )

    def extract_factory_methods(
        self,
        owner_type: Any,
        seen: frozenset[Any] = frozenset(),
    ) -> tuple[FactoryMethodSpec, ...]:
        """Return the ``@component`` methods declared directly on ``owner_type``."""
        if not is_runtime_class(owner_type) or owner_type in seen:
            return ()
        seen = seen | {owner_type}

        methods: list[FactoryMethodSpec] = []
        for attribute_name, value in vars(owner_type).items():
            if not (inspect.isfunction(value) or isinstance(value, (staticmethod, classmethod))):
                continue
            marker = component_marker(value)
            if marker is None:
                continue

            func = value if inspect.isfunction(value) else value.__func__
            return_type = self._return_type(func)
            methods.append(
                FactoryMethodSpec(
                    method_name=attribute_name,
                    name=marker.name or attribute_name,
                    return_type=return_type,
                    singleton=self._flag(marker.singleton, self.default_singleton),
                    lazy=self._flag(marker.lazy, self.default_lazy),
                    parameters=self.extract_parameters(
                        func,
                        provider_name=f"{owner_type.__qualname__}.{attribute_name}",
                        skip_first_parameter=not isinstance(value, staticmethod),
                    ),
                    post_construct=self.extract_post_construct(return_type),
                    factory_methods=self.extract_factory_methods(return_type, seen),
                ),
            )
        return tuple(methods)

    def extract_post_construct(self, component_type: Any) -> tuple[str, ...]:
        """Return hook names of ``component_type``, base classes first.

        An override without ``@post_construct`` is not a hook.
        """
        if not is_runtime_class(component_type):
            return ()
        names = dict.fromkeys(
            attribute_name
            for klass in reversed(component_type.__mro__)
            for attribute_name, value in vars(klass).items()
            if is_post_construct(value)
        )
        return tuple(
            name
            for name in names
            if is_post_construct(inspect.getattr_static(component_type, name, None))
        )

    def extract_parameters(
        self,
        provider: Callable[..., Any],
        *,
        provider_name: str,
        skip_first_parameter: bool,
    ) -> tuple[ParameterSpec, ...]:
        """Return the parameters of ``provider`` that must be resolved."""
        parameters = self._provider_parameters(
            provider=provider,
            provider_name=provider_name,
            skip_first_parameter=skip_first_parameter,
        )
        annotations, annotation_error = self._resolved_type_hints(provider)

        specs: list[ParameterSpec] = []
        for parameter in parameters:
            if parameter.kind in _SKIPPED_PARAMETER_KINDS:
                continue
            has_default = parameter.default is not Parameter.empty
            if has_default and parameter.annotation is Parameter.empty:
                continue
            if parameter.kind is Parameter.POSITIONAL_ONLY:
                msg = (
                    f"Positional-only parameter '{parameter.name}' in '{provider_name}' "
                    "cannot be wired by name."
                )
                raise BeanWireInvalidRegistrationError(msg)

            annotation = self._resolve_parameter_annotation(
                parameter=parameter,
                annotations=annotations,
                annotation_error=annotation_error,
                provider_name=provider_name,
            )
            specs.append(self._parameter_spec(parameter.name, annotation, parameter.default))
        return tuple(specs)

    def _parameter_spec(self, name: str, annotation: Any, default: Any) -> ParameterSpec:
        if get_origin(annotation) is not Annotated:
            return ParameterSpec(name=name, annotation=annotation, default=default)

        base_type, *metadata = get_args(annotation)
        qualifier = next(
            (
                item.value if isinstance(item, Qualifier) else ""
                for item in metadata
                if isinstance(item, Qualifier) or item is Qualifier
            ),
            None,
        )
        return ParameterSpec(
            name=name,
            annotation=base_type,
            qualifier=qualifier,
            default=default,
        )

    def _resolve_parameter_annotation(
        self,
        *,
        parameter: Parameter,
        annotations: dict[str, Any],
        annotation_error: Exception | None,
        provider_name: str,
    ) -> Any:
        annotation = annotations.get(parameter.name, _MISSING_ANNOTATION)
        if annotation is not _MISSING_ANNOTATION:
            return annotation

        raw_annotation = parameter.annotation
        if raw_annotation is not Parameter.empty and not isinstance(raw_annotation, str):
            return raw_annotation

        error_message = (
            f"Unable to infer dependency for parameter '{parameter.name}' "
            f"in '{provider_name}'. Add a type annotation."
        )
        if annotation_error is None:
            raise BeanWireInvalidRegistrationError(error_message)
        msg = f"{error_message} Original annotation error: {annotation_error}"
        raise BeanWireInvalidRegistrationError(msg) from annotation_error

    def _provider_parameters(
        self,
        *,
        provider: Callable[..., Any],
        provider_name: str,
        skip_first_parameter: bool,
    ) -> tuple[Parameter, ...]:
        try:
            parameters = tuple(inspect.signature(provider).parameters.values())
        except (TypeError, ValueError) as error:
            msg = f"Unable to read the signature of '{provider_name}'."
            raise BeanWireInvalidRegistrationError(msg) from error
        # The receiver is bound positionally, whatever it is called.
        if skip_first_parameter and parameters:
            return parameters[1:]
        return parameters

    def _resolved_type_hints(
        self,
        provider: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        try:
            return get_type_hints(provider, include_extras=True), None
        except (AttributeError, NameError, TypeError) as error:
            return {}, error

    def _return_type(self, func: Callable[..., Any]) -> Any:
        hints, annotation_error = self._resolved_type_hints(func)
        return_type = hints.get("return", _MISSING_ANNOTATION)
        if return_type is _MISSING_ANNOTATION:
            raw_annotation = inspect.signature(func).return_annotation
            if raw_annotation is inspect.Signature.empty:
                return None
            if isinstance(raw_annotation, str):
                error_message = (
                    f"Unable to resolve the return annotation '{raw_annotation}' "
                    f"of '{func.__qualname__}'."
                )
                if annotation_error is None:
                    raise BeanWireInvalidRegistrationError(error_message)
                msg = f"{error_message} Original annotation error: {annotation_error}"
                raise BeanWireInvalidRegistrationError(msg) from annotation_error
            return_type = raw_annotation
        while get_origin(return_type) is Annotated:
            return_type = get_args(return_type)[0]
        if return_type is None or return_type is type(None):
            return None
        return return_type

    def _flag(self, value: bool | None, default: bool) -> bool:
        return default if value is None else value


def describe_type(
    component_type: Any,
    *,
    default_singleton: bool = True,
    default_lazy: bool = False,
) -> TypeDescriptor:
    """Describe a ``@component`` class as a ``TypeDescriptor``.

    Args:
        component_type: Class to describe.
        default_singleton: Singleton flag used when the marker leaves it unset.
        default_lazy: Lazy flag used when the marker leaves it unset.

    Returns:
        The descriptor of the class, its constructors, factory methods, and
        post-construction hooks.

    Raises:
        BeanWireInvalidRegistrationError: If a required parameter has no
            usable annotation or a marker is misplaced.

    """
    introspector = TypeIntrospector(
        default_singleton=default_singleton,
        default_lazy=default_lazy,
    )
    return introspector.describe(component_type)


__all__ = ["TypeIntrospector", "describe_type"]
