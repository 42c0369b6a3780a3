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

"""Exception hierarchy for confmgr.

- ConfigError: a configuration file could not be used as a whole
  (cannot be opened, a line cannot be read, or no usable entries)

All exceptions inherit from ConfMgrError, allowing users to catch all
confmgr errors with a single except clause if needed.

Note:
    The parser does not raise ConfigError itself. It returns the error on
    a ParseResult, and ConfigStore turns it into a False return value.
    Call ParseResult.raise_for_error() to get exception behavior instead.

Example:
    Raising on a bad file:
        ```python
        from confmgr.exceptions import ConfigError
        from confmgr.parser import parse_file

        try:
            parse_file("worldserver.conf").raise_for_error()
        except ConfigError as e:
            print(f"Config error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "ConfMgrError",
    "ConfigError",
]


class ConfMgrError(Exception):
    """Base exception for all confmgr errors."""

    pass


class ConfigError(ConfMgrError):
    """Raised for configuration file errors.

    This exception covers the conditions that fail a whole file:

    - The file cannot be opened for reading
    - A line cannot be read (I/O or decoding failure, not end of file)
    - The file contains no usable ``key = value`` entries

    Malformed lines and duplicate keys are NOT errors; they are reported
    as warnings and skipped.

    Attributes:
        path: Path of the offending file.
        line_number: 1-based line number for read failures, else None.
    """

    def __init__(
        self, message: str, path: str = "", line_number: int | None = None
    ) -> None:
        super().__init__(message)
        self.path = path
        self.line_number = line_number
