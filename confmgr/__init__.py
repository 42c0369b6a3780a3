"""
confmgr - Configuration registry for line-oriented ``key = value`` files

confmgr loads server-style configuration files into an in-memory,
thread-safe option map and serves typed lookups with default fallback.

confmgr provides:
  - A tolerant parser (comments, section markers, quotes, bad lines skipped)
  - Atomic per-file merging: a failing file never half-updates the store
  - Layered loading (initial file, then additional files, last wins)
  - Typed lookups for str, int, float, bool and Path with logged defaults
  - A small CLI for validating and inspecting configuration files

Quick Start
-----------
Check a configuration file:

    $ confmgr validate configs/worldserver.conf.dist

Show the effective configuration:

    $ confmgr show configs/worldserver.conf.dist --additional local.conf

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
store : module
    ConfigStore: loading, merging and typed access.
parser : module
    Line-oriented file parser.
convert : module
    String-to-type conversion.
results : module
    Public result dataclasses.

Public API
----------
    from confmgr import ConfigStore, parse_file

    store = ConfigStore()
    store.load_initial("configs/worldserver.conf.dist")
    port = store.get_option("WorldServerPort", 8085)

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Configuration registry for key = value files"

# Re-export commonly used names for convenience
from confmgr.convert import StringConverter
from confmgr.exceptions import ConfigError, ConfMgrError
from confmgr.parser import parse_file
from confmgr.results import ParseResult
from confmgr.store import ConfigStore, is_app_config

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "ConfigStore",
    "ConfigError",
    "ConfMgrError",
    "ParseResult",
    "StringConverter",
    "is_app_config",
    "parse_file",
]
