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

"""
Parsing of line-oriented ``key = value`` configuration files.

File Format
-----------
    # Whole-line comment
    [worldserver]               # section headers are skipped
    DataDir = "."               # quotes are removed from values
    WorldServerPort = 8085

Line Rules
----------
1. Leading/trailing whitespace is trimmed.
2. Empty lines, lines starting with '#' and lines starting with '[' are
   skipped.
3. Everything from the first '#' on the line is discarded.
4. The line is split at the first '='; key and value are trimmed. Lines
   with no '=', an empty key or an empty value are skipped with a warning.
5. Every '"' character is removed from the value.
6. A key seen earlier in the same file is skipped with a warning
   (first occurrence wins).

Failure Policy
--------------
Malformed and duplicate lines never fail the file. Only these do:
  - the file cannot be opened
  - a line cannot be read (I/O or decode error)
  - no usable entries were found

Failures are returned on the ParseResult rather than raised, so a caller
can decide whether to merge, log or raise (ParseResult.raise_for_error).

Functions
---------
parse_file : function
    Parse one file into a ParseResult (main public API).
parse_line : function
    Split a single raw line into (key, value), or classify it.
"""

from __future__ import annotations

import os
from pathlib import Path

from confmgr.exceptions import ConfigError
from confmgr.logging import Logger, get_global_logger
from confmgr.results import ParseResult

__all__ = ["parse_file", "parse_line", "SKIP", "MALFORMED"]

# Sentinels returned by parse_line for lines that carry no option
SKIP = "skip"
MALFORMED = "malformed"


def parse_line(raw: str) -> tuple[str, str] | str:
    """
    Classify a single raw line.

    Returns
      (key, value) for an option line,
      SKIP for blank, comment and section lines,
      MALFORMED for lines without a usable separator, key or value.
    """
    line = raw.strip()

    if not line or line[0] in "#[":
        return SKIP

    comment_pos = line.find("#")
    if comment_pos != -1:
        line = line[:comment_pos]

    key, sep, value = line.partition("=")
    key = key.strip()
    value = value.strip()
    if not sep or not key or not value:
        return MALFORMED

    return key, value.replace('"', "")


def parse_file(
    path: str | os.PathLike[str], logger: Logger | None = None
) -> ParseResult:
    """
    Parse a configuration file into a file-local, duplicate-free mapping.

    Nothing outside the returned ParseResult is modified, so a failing file
    cannot leak partial state into a store.

    Args:
        path: File to read (UTF-8, an optional BOM is ignored).
        logger: Receives one error-level message per skipped line. Defaults
            to the global logger.

    Returns:
        ParseResult with either options (ok) or a ConfigError (not ok).
    """
    if logger is None:
        logger = get_global_logger()

    file = os.fspath(path)
    options: dict[str, str] = {}
    warnings: list[str] = []

    def _warn(message: str) -> None:
        warnings.append(message)
        logger.error("CONFIG", f"> {message}")

    line_number = 0
    try:
        handle = Path(file).open("rb")
    except OSError as err:
        error = ConfigError(f"Failed open file '{file}'", path=file)
        error.__cause__ = err
        return ParseResult(path=file, warnings=warnings, error=error)

    with handle:
        while True:
            line_number += 1
            # decode line by line so a bad byte is reported on its own line
            try:
                data = handle.readline()
                if not data:
                    break
                raw = data.decode("utf-8-sig" if line_number == 1 else "utf-8")
            except (OSError, UnicodeDecodeError) as err:
                error = ConfigError(
                    f"Failure to read line number {line_number} in file '{file}'",
                    path=file,
                    line_number=line_number,
                )
                error.__cause__ = err
                return ParseResult(path=file, warnings=warnings, error=error)

            parsed = parse_line(raw)
            if parsed == SKIP:
                continue
            if parsed == MALFORMED:
                _warn(
                    f"Failure to read line number {line_number} in file "
                    f"'{file}'. Skip this line"
                )
                continue

            key, value = parsed
            if key in options:
                _warn(f"Duplicate key name '{key}' in config file '{file}'")
                continue

            options[key] = value

    if not options:
        return ParseResult(
            path=file,
            warnings=warnings,
            error=ConfigError(f"Empty file '{file}'", path=file),
        )

    return ParseResult(path=file, options=options, warnings=warnings)
