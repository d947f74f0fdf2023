"""Site configuration loader

Settings come from (highest priority first):
1. Environment variables
2. A KEY=VALUE config file (see find_config_file)
3. Built-in DEFAULTS

Per-run settings (host, thresholds, timeout) come from the command line,
not from here; this module only covers site-wide knobs such as where the
AFS binaries live.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# Default configuration values
DEFAULTS = {
    # Extra directories searched for AFS binaries, colon separated
    'AFS_MONITOR_BIN_DIRS': '',

    # Explicit binary paths (empty = search)
    'AFS_MONITOR_RXDEBUG': '',
    'AFS_MONITOR_VOS': '',
    'AFS_MONITOR_BOS': '',
    'AFS_MONITOR_UDEBUG': '',

    # Logging
    'AFS_MONITOR_LOG_LEVEL': 'WARNING',
    'AFS_MONITOR_LOG_FILE': '',
    'AFS_MONITOR_LOG_COLOR': 'true',
}

# Cache of the parsed config file, loaded on first lookup
_file_values: Optional[Dict[str, str]] = None


def config_search_paths() -> List[Path]:
    """Config file locations in priority order."""
    paths = []
    explicit = os.environ.get('AFS_MONITOR_CONFIG')
    if explicit:
        paths.append(Path(explicit))
    paths.extend([
        Path.cwd() / 'afs-monitor.env',
        Path('/etc/afs-monitor/afs-monitor.env'),
        Path.home() / '.afs-monitor.env',
    ])
    return paths


def find_config_file() -> Optional[Path]:
    """Find the first existing config file"""
    for path in config_search_paths():
        if path.is_file():
            return path
    return None


def load_config_file(config_path: Optional[Path] = None) -> Dict[str, str]:
    """Parse a KEY=VALUE config file

    Blank lines and '#' comments are ignored, matching quotes around a value
    are stripped. Unlike a shell .env loader this does not touch os.environ.

    Args:
        config_path: Optional path. If None, auto-discovers.

    Returns:
        Dictionary of settings found in the file
    """
    values: Dict[str, str] = {}

    if config_path is None:
        config_path = find_config_file()

    if config_path is None or not config_path.exists():
        return values

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()

                if not line or line.startswith('#'):
                    continue

                if '=' not in line:
                    logger.debug(f"{config_path}:{line_num}: ignoring line without '='")
                    continue

                key, _, value = line.partition('=')
                key = key.strip()
                value = value.strip()

                if value and value[0] in ('"', "'") and value[-1] == value[0]:
                    value = value[1:-1]

                if key:
                    values[key] = value

    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read config file {config_path}: {e}")

    return values


def _file_config() -> Dict[str, str]:
    global _file_values
    if _file_values is None:
        _file_values = load_config_file()
    return _file_values


def reload_config() -> None:
    """Drop the cached config file so the next lookup re-reads it"""
    global _file_values
    _file_values = None


def get_config(key: str, default: Optional[str] = None) -> str:
    """Get a configuration value

    Priority:
    1. Environment variable
    2. Config file
    3. Provided default
    4. Built-in default
    """
    if key in os.environ:
        return os.environ[key]
    file_values = _file_config()
    if key in file_values:
        return file_values[key]
    if default is not None:
        return default
    return DEFAULTS.get(key, '')


def get_config_bool(key: str, default: bool = False) -> bool:
    """Get boolean configuration value"""
    value = get_config(key, str(default).lower())
    return value.lower() in ('true', 'yes', '1', 'on')


def config_source(key: str) -> str:
    """Where a setting's effective value comes from"""
    if key in os.environ:
        return "env var"
    if key in _file_config():
        return "config file"
    return "default"
