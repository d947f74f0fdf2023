"""
AFS binary locations.

OpenAFS installs its client and server tools in different places depending
on the packaging (Transarc layout, distro packages, /opt builds), and
monitoring schedulers often run plugins with a minimal PATH. find_binary()
checks an explicit override, then the conventional directories, and falls
back to the bare name so the PATH search still applies.
"""

import logging
import os
from typing import List

from .env_config import get_config

logger = logging.getLogger(__name__)

# Conventional install directories, searched in order
AFS_BIN_DIRS = [
    '/usr/bin',
    '/usr/sbin',
    '/usr/afsws/bin',
    '/usr/afsws/etc',
    '/usr/local/bin',
    '/usr/local/sbin',
    '/usr/afs/bin',
    '/opt/openafs/bin',
    '/opt/openafs/sbin',
]

# binary name -> config key holding an explicit path
BINARY_OVERRIDES = {
    'rxdebug': 'AFS_MONITOR_RXDEBUG',
    'vos': 'AFS_MONITOR_VOS',
    'bos': 'AFS_MONITOR_BOS',
    'udebug': 'AFS_MONITOR_UDEBUG',
}


def search_dirs() -> List[str]:
    """Site directories from AFS_MONITOR_BIN_DIRS followed by the defaults."""
    extra = [d for d in get_config('AFS_MONITOR_BIN_DIRS').split(':') if d]
    return extra + AFS_BIN_DIRS


def is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def find_binary(name: str) -> str:
    """Find an AFS command-line tool

    Checks, in order:
    - Explicit path from configuration (AFS_MONITOR_<NAME>)
    - AFS_MONITOR_BIN_DIRS, then the conventional AFS install directories

    Returns:
        str: Full path to the binary, or the bare name when nothing was
        found so the caller's PATH decides (a missing binary then surfaces
        as a launch failure)
    """
    override_key = BINARY_OVERRIDES.get(name)
    if override_key:
        override = get_config(override_key)
        if override:
            logger.debug(f"Using configured {name}: {override}")
            return override

    for directory in search_dirs():
        candidate = os.path.join(directory, name)
        if is_executable(candidate):
            logger.debug(f"Found {name} at {candidate}")
            return candidate

    logger.debug(f"{name} not found in AFS directories, relying on PATH")
    return name
