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

"""Command-line interface for confmgr.

Commands:

    validate: Parse a configuration file and report skipped lines
    show: Load one or more files and print the effective options
    get: Load one or more files and print a single typed option

Example:
    Validate a file:
        ```bash
        $ confmgr validate configs/worldserver.conf.dist
        ```

    Show effective options as YAML:
        ```bash
        $ confmgr show configs/worldserver.conf.dist --additional local.conf --format yaml
        ```

    Read a boolean with a default:
        ```bash
        $ confmgr get configs/worldserver.conf.dist Console.Enable --type bool --default 1
        ```

Exit Codes:

- 0: Success
- 1: Error (file could not be loaded, invalid default, or a required option
  missing or invalid)

"""

from __future__ import annotations

import argparse
from importlib.metadata import version
import sys

import yaml

from confmgr.convert import get_default_converter
from confmgr.logging import get_logger, set_global_logger
from confmgr.parser import parse_file
from confmgr.store import ConfigStore

_TYPES: dict[str, type] = {"str": str, "int": int, "float": float, "bool": bool}

# Marks a "get" lookup made without --default
_NO_DEFAULT = object()


def _load_store(args: argparse.Namespace) -> ConfigStore | None:
    """Build a store from the file and --additional arguments."""
    store = ConfigStore()
    if not store.load_initial(args.file):
        print(f"Error: could not load configuration file: {args.file}")
        return None
    for extra in args.additional:
        if not store.load_additional_file(extra):
            print(f"Error: could not load additional file: {extra}")
            return None
    return store


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'confmgr validate' command.

    Parses the file without loading it into a store. Skipped lines are
    listed as warnings; they do not fail validation.

    Returns:
        Exit code (0 if the file is usable, 1 otherwise).
    """
    set_global_logger(get_logger(verbose=args.verbose))

    result = parse_file(args.file)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"File:        {result.path}")
    print(f"Status:      {'VALID' if result.ok else 'INVALID'}")
    print(f"Options:     {len(result.options)}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    print("=" * 70)

    if result.ok:
        print()
        print("[SUCCESS] Configuration file is valid!")
        return 0

    print()
    print(f"[FAILED] {result.error}")
    return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Handler for 'confmgr show' command.

    Returns:
        Exit code (0 for success, 1 if any file failed to load).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    store = _load_store(args)
    if store is None:
        return 1

    options = store.snapshot()
    names = sorted(store.get_keys_by_prefix(args.prefix))

    if args.format == "yaml":
        selected = {name: options[name] for name in names}
        print(yaml.safe_dump(selected, default_flow_style=False, sort_keys=True), end="")
    else:
        for name in names:
            print(f"{name} = {options[name]}")

    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Handler for 'confmgr get' command.

    The --default value is converted to --type before the lookup, so the
    usual missing/bad-value diagnostics apply. Without --default, string
    lookups fall back to an empty string; other types require the option
    to exist and convert cleanly.

    Returns:
        Exit code (0 for success, 1 on load failure, invalid default, or a
        missing/invalid option when no default was given).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    target = _TYPES[args.type]
    converter = get_default_converter()
    if args.default is None and target is str:
        default: object = ""
    elif args.default is None:
        default = _NO_DEFAULT
    else:
        default = converter.from_string(args.default, target)
        if default is None:
            print(f"Error: default {args.default!r} is not a valid {args.type}")
            return 1

    store = _load_store(args)
    if store is None:
        return 1

    if default is _NO_DEFAULT:
        if args.key not in store:
            print(f"Error: option '{args.key}' not found")
            return 1
        value = store.get_option(
            args.key, default, log_on_failure=False, value_type=target
        )
        if value is _NO_DEFAULT:
            print(f"Error: option '{args.key}' is not a valid {args.type}")
            return 1
    else:
        value = store.get_option(args.key, default, value_type=target)

    print(converter.to_string(value))
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the confmgr CLI.

    This function is registered as the 'confmgr' console script in
    pyproject.toml.
    """
    parser = argparse.ArgumentParser(
        prog="confmgr",
        description="confmgr - inspect and validate key = value configuration files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"confmgr {version('confmgr')}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Parse a configuration file and report problems",
        description="Check a configuration file for malformed or duplicate lines without loading it.",
    )
    parser_validate.add_argument(
        "file",
        help="Path to the configuration file",
    )
    parser_validate.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show parsing progress and details",
    )
    parser_validate.set_defaults(func=cmd_validate)

    # 'show' and 'get' share the loading arguments
    load_parent = argparse.ArgumentParser(add_help=False)
    load_parent.add_argument(
        "file",
        help="Path to the initial configuration file",
    )
    load_parent.add_argument(
        "--additional",
        action="append",
        default=[],
        metavar="FILE",
        help="Additional file merged on top (repeatable, later files win)",
    )
    load_parent.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    load_parent.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show every merged option (implies --verbose)",
    )

    # 'show' command
    parser_show = subparsers.add_parser(
        "show",
        parents=[load_parent],
        help="Print the effective configuration",
        description="Load the given files and print the resulting options sorted by name.",
    )
    parser_show.add_argument(
        "--prefix",
        default="",
        help="Only show options whose name starts with this prefix",
    )
    parser_show.add_argument(
        "--format",
        choices=["text", "yaml"],
        default="text",
        help="Output format (default: text)",
    )
    parser_show.set_defaults(func=cmd_show)

    # 'get' command
    parser_get = subparsers.add_parser(
        "get",
        parents=[load_parent],
        help="Print a single option",
        description="Load the given files and print one option converted to the requested type.",
    )
    parser_get.add_argument(
        "key",
        help="Option name (case-sensitive)",
    )
    parser_get.add_argument(
        "--type",
        choices=sorted(_TYPES),
        default="str",
        help="Value type (default: str)",
    )
    parser_get.add_argument(
        "--default",
        default=None,
        help="Value used when the option is missing or invalid (default: empty for str, otherwise the option is required)",
    )
    parser_get.set_defaults(func=cmd_get)

    # Parse and dispatch
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
