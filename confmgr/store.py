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

"""Thread-safe configuration store.

ConfigStore owns the live option mapping (name -> raw string value) and
serves typed lookups with default fallback.

Loading:

- load_initial: clear everything, then load one file
- load_additional_file: merge one more file on top (last file wins)
- load_app_configs: load_initial on "<configured filename>.dist"

A file is parsed into a temporary mapping first and merged only when the
whole file parsed successfully, so a bad file never leaves the store
half-updated. Load failures are logged and reported as False; they are
never raised.

Locking:

A single lock guards the mapping, the filename and the additional-file
list. Every public method holds it for its full duration, including file
I/O during loads, so readers observe either the complete pre-load or the
complete post-load state.

Example:
    ```python
    from confmgr import ConfigStore

    store = ConfigStore()
    store.configure("configs/worldserver.conf")
    if not store.load_app_configs():
        raise SystemExit(1)

    port = store.get_option("WorldServerPort", 8085)
    enabled = store.get_option("Console.Enable", True)
    realms = store.get_keys_by_prefix("Realm.")
    ```
"""

from __future__ import annotations

import os
import threading
from typing import Any, TypeVar

from confmgr.convert import Converter, get_default_converter
from confmgr.logging import Logger, get_global_logger
from confmgr.parser import parse_file

__all__ = [
    "APP_CONFIG_NAMES",
    "CONFIG_PATH",
    "DIST_SUFFIX",
    "ConfigStore",
    "is_app_config",
]

T = TypeVar("T")

CONFIG_PATH = "configs/"
DIST_SUFFIX = ".dist"
APP_CONFIG_NAMES: tuple[str, ...] = ("authserver.conf", "worldserver.conf")


def is_app_config(filename: str | os.PathLike[str]) -> bool:
    """Return True if ``filename`` names one of the server's own configs.

    Matches file names ending in one of APP_CONFIG_NAMES, with or without
    the ".dist" suffix (e.g. "etc/worldserver.conf.dist").
    """
    name = os.path.basename(os.fspath(filename))
    if name.endswith(DIST_SUFFIX):
        name = name[: -len(DIST_SUFFIX)]
    return name.endswith(APP_CONFIG_NAMES)


class ConfigStore:
    """In-memory configuration registry loaded from ``key = value`` files.

    Attributes:
        converter: Converter used by get_option for non-string types.

    Note:
        Create one store in the application's entry point and pass it to
        the components that need it.
    """

    def __init__(
        self,
        converter: Converter | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            converter: String-to-type converter. Defaults to the shared
                StringConverter.
            logger: Diagnostics sink. Defaults to the global logger,
                resolved on every call.
        """
        self.converter: Converter = converter or get_default_converter()
        self._logger = logger
        self._lock = threading.Lock()
        self._options: dict[str, str] = {}
        self._filename = ""
        self._additional_files: list[str] = []

    @property
    def logger(self) -> Logger:
        return self._logger if self._logger is not None else get_global_logger()

    # -------------------------------
    # Merge
    # -------------------------------

    def add_key(self, name: str, value: str, replace: bool = True) -> None:
        """Insert one option into the live mapping.

        Args:
            name: Option name.
            value: Raw string value.
            replace: If False and ``name`` already exists, log the conflict
                and keep the existing value.
        """
        with self._lock:
            self._add_key(name, value, replace)

    def _add_key(self, name: str, value: str, replace: bool = True) -> None:
        existing = self._options.get(name)
        if existing is not None:
            if not replace:
                self.logger.error(
                    "CONFIG",
                    f"> Config: Option '{name}' is exist! Option key - '{existing}'",
                )
                return
            del self._options[name]

        self._options[name] = value

    # -------------------------------
    # Loading
    # -------------------------------

    def _load_file(self, file: str) -> bool:
        # caller holds self._lock
        result = parse_file(file, logger=self.logger)
        if not result.ok:
            self.logger.error("CONFIG", f"> {result.error}")
            return False

        for name, value in result.options.items():
            self.logger.debug("CONFIG", f"{name} = {value}")
            self._add_key(name, value)

        self.logger.verbose(
            "CONFIG", f"Loaded {len(result.options)} option(s) from {file}"
        )
        return True

    def load_initial(self, path: str | os.PathLike[str]) -> bool:
        """Replace the whole configuration with the contents of ``path``.

        The store is cleared first, so it is left empty if the file fails
        to load. Callers must check the return value.

        Returns:
            True if the file loaded, False otherwise (already logged).
        """
        file = os.fspath(path)
        with self._lock:
            self._options.clear()
            self._additional_files.clear()
            return self._load_file(file)

    def load_additional_file(self, path: str | os.PathLike[str]) -> bool:
        """Merge the contents of ``path`` over the current configuration.

        Keys from this file replace existing values. On failure the
        current configuration is left untouched.

        Returns:
            True if the file loaded, False otherwise (already logged).
        """
        file = os.fspath(path)
        with self._lock:
            if not self._load_file(file):
                return False
            self._additional_files.append(file)
            return True

    def load_app_configs(self) -> bool:
        """Load "<configured filename>.dist" as the initial configuration.

        Returns:
            True if the file loaded, False otherwise.
        """
        # TODO: layer the plain "<filename>" on top once overrides are
        # shipped alongside the .dist defaults.
        return self.load_initial(self.get_filename() + DIST_SUFFIX)

    # -------------------------------
    # Typed access
    # -------------------------------

    def get_option(
        self,
        name: str,
        default: T,
        log_on_failure: bool = True,
        value_type: type[T] | None = None,
    ) -> T:
        """Look up an option converted to the type of ``default``.

        Args:
            name: Option name (case-sensitive).
            default: Returned when the option is missing or unconvertible.
            log_on_failure: Log missing/bad options at error level.
            value_type: Target type. Defaults to ``type(default)``.

        Returns:
            The converted value, or ``default``.

        Example:
            ```python
            store.get_option("MaxPlayers", 100)        # int
            store.get_option("MOTD", "Welcome")        # str, no conversion
            store.get_option("AllowTwoSide", False)    # "1"/"true"/... -> bool
            store.get_option("Rate.XP", 1.0, log_on_failure=False)
            ```
        """
        target = value_type if value_type is not None else type(default)

        if target is bool:
            raw = self._get_string(name, "1" if default else "0", log_on_failure)
            converted = self.converter.from_string(raw, bool)
            if converted is None:
                if log_on_failure:
                    self.logger.error(
                        "CONFIG",
                        f"> Config: Bad value defined for name '{name}', going "
                        f"to use '{'true' if default else 'false'}' instead",
                    )
                return default
            return converted  # type: ignore[return-value]

        if target is str:
            return self._get_string(name, default, log_on_failure)  # type: ignore[arg-type]

        with self._lock:
            raw = self._options.get(name)

        if raw is None:
            if log_on_failure:
                self._log_missing(name, default)
            return default

        converted = self.converter.from_string(raw, target)
        if converted is None:
            if log_on_failure:
                self.logger.error(
                    "CONFIG",
                    f"> Config: Bad value defined for name '{name}', going to "
                    f"use '{self.converter.to_string(default)}' instead",
                )
            return default

        return converted

    # Older name for the same lookup contract
    get_value_default = get_option

    def _get_string(self, name: str, default: str, log_on_failure: bool) -> str:
        with self._lock:
            raw = self._options.get(name)
        if raw is None:
            if log_on_failure:
                self._log_missing(name, default)
            return default
        return raw

    def _log_missing(self, name: str, default: Any) -> None:
        shown = self.converter.to_string(default)
        self.logger.error(
            "CONFIG",
            f'> Config: Missing name {name} in config, add "{name} = {shown}"',
        )

    # -------------------------------
    # Enumeration & metadata
    # -------------------------------

    def get_keys_by_prefix(self, prefix: str) -> list[str]:
        """Return all option names starting with ``prefix`` (any order)."""
        with self._lock:
            return [name for name in self._options if name.startswith(prefix)]

    def get_filename(self) -> str:
        with self._lock:
            return self._filename

    def configure(self, path: str | os.PathLike[str]) -> None:
        """Set the primary configuration file used by load_app_configs()."""
        with self._lock:
            self._filename = os.fspath(path)

    def get_config_path(self) -> str:
        return CONFIG_PATH

    def get_additional_files(self) -> list[str]:
        """Return additional files loaded since the last initial load."""
        with self._lock:
            return list(self._additional_files)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the live option mapping."""
        with self._lock:
            return dict(self._options)

    def __len__(self) -> int:
        with self._lock:
            return len(self._options)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._options
