from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from beanwire.discovery import ParameterSpec
from beanwire.exceptions import BeanWireError, BeanWireNotFoundError, BeanWireParameterResolutionError

logger = logging.getLogger(__name__)


class ComponentLookup(Protocol):
    """Lookups the resolver delegates to; implemented by ``Registry``."""

    def get_by_name(self, name: str, requested_type: Any = object) -> Any: ...

    def get_by_type(self, requested_type: Any) -> Any: ...


@dataclass(frozen=True, slots=True)
class ResolutionRequest:
    """A single value wanted for a parameter."""

    requested_type: Any
    qualifier: str | None = None

    @classmethod
    def for_parameter(cls, parameter: ParameterSpec) -> ResolutionRequest:
        return cls(requested_type=parameter.annotation, qualifier=parameter.qualifier_name)


class ArgumentResolver:
    """Resolve constructor and factory method parameters against a registry.

    A qualified parameter is first looked up by name. When that lookup fails
    for any reason the failure is dropped and the parameter is resolved by
    type alone, exactly like an unqualified one.
    """

    def __init__(self, lookup: ComponentLookup) -> None:
        self._lookup = lookup

    def resolve(self, request: ResolutionRequest) -> Any:
        """Return the component satisfying ``request``.

        Raises:
            BeanWireNotFoundError: If neither the qualifier nor the type match.

        """
        if request.qualifier is not None:
            try:
                return self._lookup.get_by_name(request.qualifier, request.requested_type)
            except BeanWireError as error:
                logger.debug(
                    "Qualifier '%s' did not resolve (%s); falling back to type lookup",
                    request.qualifier,
                    error,
                )
        return self._lookup.get_by_type(request.requested_type)

    def resolve_arguments(
        self,
        owner: str,
        parameters: Sequence[ParameterSpec],
    ) -> dict[str, Any]:
        """Resolve every parameter of ``owner`` into keyword arguments.

        A parameter with a default that cannot be resolved is left out, so the
        callee applies its own default.

        Raises:
            BeanWireParameterResolutionError: If a required parameter cannot be
                resolved; the lookup failure is chained as its cause.

        """
        arguments: dict[str, Any] = {}
        for parameter in parameters:
            try:
                arguments[parameter.name] = self.resolve(ResolutionRequest.for_parameter(parameter))
            except BeanWireNotFoundError as error:
                if parameter.has_default:
                    logger.debug(
                        "Parameter '%s' of '%s' keeps its default: %s",
                        parameter.name,
                        owner,
                        error,
                    )
                    continue
                raise BeanWireParameterResolutionError(
                    owner,
                    parameter.name,
                    parameter.annotation,
                ) from error
        return arguments


__all__ = ["ArgumentResolver", "ComponentLookup", "ResolutionRequest"]
