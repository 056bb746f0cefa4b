from __future__ import annotations

from typing import Any, Protocol

import pytest

from beanwire._internal.type_checks import is_assignable, is_runtime_class


class Engine:
    pass


class TurboEngine(Engine):
    pass


class Startable(Protocol):
    def start(self) -> None: ...


def test_is_runtime_class_rejects_generic_aliases() -> None:
    assert is_runtime_class(Engine)
    assert not is_runtime_class(list[int])
    assert not is_runtime_class("Engine")


@pytest.mark.parametrize(
    ("declared", "requested", "expected"),
    [
        (Engine, Engine, True),
        (TurboEngine, Engine, True),
        (Engine, TurboEngine, False),
        (Engine, object, True),
        (list[int], object, True),
        (list[int], list[int], True),
        (list[int], list, False),
        (Engine, list[int], False),
    ],
)
def test_is_assignable(declared: Any, requested: Any, expected: bool) -> None:
    assert is_assignable(declared, requested) is expected


def test_non_runtime_protocol_only_matches_itself() -> None:
    assert is_assignable(Startable, Startable)
    assert not is_assignable(Engine, Startable)
