# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""String-to-type conversion for configuration values.

ConfigStore keeps every option as a raw string and converts on lookup
through a Converter. A converter answers two questions:

- from_string(value, target): the value as ``target``, or None if the
  string cannot be read as that type
- to_string(value): canonical string form, used in diagnostics only

Supported Types (StringConverter):

- str: returned unchanged
- int: optional sign followed by decimal digits ("42", "-7", "+3")
- float: anything float() accepts ("1.5", "1e3", "inf"), no underscores
- bool: "1"/"true"/"yes"/"on" and "0"/"false"/"no"/"off", any case
- pathlib.Path: any non-empty string

Additional types can be registered with StringConverter.register().

Example:
    ```python
    from confmgr.convert import string_to, to_string

    string_to("42", int)       # 42
    string_to("4x2", int)      # None
    string_to("Yes", bool)     # True
    to_string(False)           # "0"
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import re
from typing import Any, Protocol, TypeVar

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?[0-9]+")

_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


class Converter(Protocol):
    """Protocol for string-to-type converters used by ConfigStore."""

    def from_string(self, value: str, target: type[T]) -> T | None:
        """Convert ``value`` to ``target``, or return None if impossible."""
        ...

    def to_string(self, value: Any) -> str:
        """Return the canonical string form of ``value``."""
        ...


def parse_bool(value: str) -> bool | None:
    """Convert a truthy/falsy token to bool.

    Args:
        value: Token to convert (case-insensitive, surrounding whitespace
            ignored).

    Returns:
        True or False, or None if the token is not recognized.
    """
    token = value.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    return None


def _parse_int(value: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"not a decimal integer: {value!r}")
    return int(value)


def _parse_float(value: str) -> float:
    # float() tolerates "1_000" and surrounding whitespace
    if "_" in value or value != value.strip():
        raise ValueError(f"not a float: {value!r}")
    return float(value)


def _parse_path(value: str) -> Path:
    if not value:
        raise ValueError("empty path")
    return Path(value)


class StringConverter:
    """Default Converter for str, int, float, bool and Path.

    Example:
        Register a custom type:
            ```python
            from decimal import Decimal

            converter = StringConverter()
            converter.register(Decimal, Decimal)
            converter.from_string("1.10", Decimal)  # Decimal("1.10")
            ```
    """

    def __init__(self) -> None:
        self._parsers: dict[type, Callable[[str], Any]] = {
            int: _parse_int,
            float: _parse_float,
            Path: _parse_path,
        }

    def register(self, target: type, func: Callable[[str], Any]) -> None:
        """Add or replace the parser for ``target``.

        Args:
            target: Type requested by callers of from_string().
            func: Callable taking the raw string. It may raise ValueError
                or TypeError to signal that the string cannot be converted.
        """
        self._parsers[target] = func

    def from_string(self, value: str, target: type[T]) -> T | None:
        if target is str:
            return value  # type: ignore[return-value]
        if target is bool:
            return parse_bool(value)  # type: ignore[return-value]

        func = self._parsers.get(target)
        if func is None:
            return None
        try:
            return func(value)
        except (ValueError, TypeError, ArithmeticError):
            return None

    def to_string(self, value: Any) -> str:
        if isinstance(value, bool):
            return "1" if value else "0"
        return str(value)


_default_converter = StringConverter()


def get_default_converter() -> StringConverter:
    """Return the shared StringConverter used when none is injected."""
    return _default_converter


def string_to(value: str, target: type[T]) -> T | None:
    """Convert ``value`` with the shared default converter."""
    return _default_converter.from_string(value, target)


def to_string(value: Any) -> str:
    """Stringify ``value`` with the shared default converter."""
    return _default_converter.to_string(value)
