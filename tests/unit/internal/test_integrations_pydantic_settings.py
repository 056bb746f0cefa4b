from __future__ import annotations

from pydantic import BaseModel
from pydantic_settings import BaseSettings

from beanwire.integrations.pydantic_settings import is_pydantic_settings_subclass


class AppSettings(BaseSettings):
    debug: bool = False


class Payload(BaseModel):
    value: int = 0


def test_is_pydantic_settings_subclass_returns_true_for_settings_models() -> None:
    assert is_pydantic_settings_subclass(AppSettings) is True


def test_is_pydantic_settings_subclass_returns_false_for_plain_models() -> None:
    assert is_pydantic_settings_subclass(Payload) is False


def test_is_pydantic_settings_subclass_returns_false_for_non_type() -> None:
    assert is_pydantic_settings_subclass("not-a-class") is False


def test_is_pydantic_settings_subclass_returns_false_for_generic_alias() -> None:
    assert is_pydantic_settings_subclass(list[int]) is False
