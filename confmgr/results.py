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

"""Public API return types for confmgr.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Inspecting a parse result:
        ```python
        from confmgr.parser import parse_file

        result = parse_file("worldserver.conf.dist")
        if result.ok:
            print(f"{len(result.options)} option(s)")
        else:
            print(f"Error: {result.error}")
        ```
"""

from __future__ import annotations

from dataclasses import dataclass, field

from confmgr.exceptions import ConfigError


@dataclass(frozen=True)
class ParseResult:
    """Result from parsing a single configuration file.

    Exactly one outcome holds: either ``error`` is None and ``options``
    holds at least one entry, or ``error`` is set and ``options`` is empty.

    Attributes:
        path: String path of the parsed file.
        options: Option name to raw string value, first occurrence wins.
        warnings: One message per malformed or duplicate line skipped.
        error: The ConfigError that failed the whole file, if any.
    """

    path: str
    options: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    error: ConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the carried ConfigError, if any.

        Raises:
            ConfigError: If the file failed to parse.
        """
        if self.error is not None:
            raise self.error
