"""
Tests for site configuration loading.

Run: python3 -m pytest tests/test_env_config.py -v
"""

import os

from afs_monitor.utils.env_config import (
    config_search_paths,
    config_source,
    find_config_file,
    get_config,
    get_config_bool,
    load_config_file,
    reload_config,
)


class TestLoadConfigFile:
    """Tests for the KEY=VALUE parser."""

    def test_parses_values(self, tmp_path):
        """Comments, blank lines and quotes are handled."""
        path = tmp_path / "afs-monitor.env"
        path.write_text(
            "# site settings\n"
            "\n"
            "AFS_MONITOR_VOS=/usr/afsws/etc/vos\n"
            "AFS_MONITOR_BIN_DIRS = '/opt/afs/bin:/opt/afs/sbin'\n"
            'AFS_MONITOR_LOG_LEVEL="debug"\n'
            "not a setting\n"
        )
        values = load_config_file(path)
        assert values == {
            'AFS_MONITOR_VOS': '/usr/afsws/etc/vos',
            'AFS_MONITOR_BIN_DIRS': '/opt/afs/bin:/opt/afs/sbin',
            'AFS_MONITOR_LOG_LEVEL': 'debug',
        }

    def test_missing_file(self, tmp_path):
        """A missing file yields no settings."""
        assert load_config_file(tmp_path / "absent.env") == {}

    def test_undecodable_file(self, tmp_path):
        """A file that is not valid UTF-8 yields no settings."""
        path = tmp_path / "afs-monitor.env"
        path.write_bytes(b"AFS_MONITOR_LOG_LEVEL=\xff\xfe\n")
        assert load_config_file(path) == {}

    def test_does_not_touch_environment(self, tmp_path):
        """Loading a file leaves os.environ alone."""
        path = tmp_path / "afs-monitor.env"
        path.write_text("AFS_MONITOR_BOS=/srv/bos\n")
        load_config_file(path)
        assert "AFS_MONITOR_BOS" not in os.environ


class TestSearchPaths:
    """Tests for config file discovery."""

    def test_explicit_path_first(self, tmp_path, monkeypatch):
        """AFS_MONITOR_CONFIG is searched first."""
        path = tmp_path / "site.env"
        monkeypatch.setenv('AFS_MONITOR_CONFIG', str(path))
        assert config_search_paths()[0] == path

    def test_find_config_file(self, tmp_path, monkeypatch):
        """The first existing file is returned."""
        path = tmp_path / "site.env"
        path.write_text("AFS_MONITOR_BOS=/srv/bos\n")
        monkeypatch.setenv('AFS_MONITOR_CONFIG', str(path))
        assert find_config_file() == path


class TestGetConfig:
    """Tests for lookup priority."""

    def test_builtin_default(self):
        """Unset keys fall back to DEFAULTS."""
        assert get_config('AFS_MONITOR_LOG_LEVEL') == 'WARNING'
        assert config_source('AFS_MONITOR_LOG_LEVEL') == "default"

    def test_explicit_default(self):
        """A caller default beats the built-in one."""
        assert get_config('AFS_MONITOR_VOS', '/bin/vos') == '/bin/vos'

    def test_unknown_key(self):
        """Unknown keys resolve to an empty string."""
        assert get_config('AFS_MONITOR_NOPE') == ''

    def test_file_beats_default(self, tmp_path, monkeypatch):
        """Config file values override defaults."""
        path = tmp_path / "site.env"
        path.write_text("AFS_MONITOR_LOG_LEVEL=INFO\n")
        monkeypatch.setenv('AFS_MONITOR_CONFIG', str(path))
        reload_config()
        assert get_config('AFS_MONITOR_LOG_LEVEL') == 'INFO'
        assert config_source('AFS_MONITOR_LOG_LEVEL') == "config file"

    def test_env_beats_file(self, tmp_path, monkeypatch):
        """Environment variables override the config file."""
        path = tmp_path / "site.env"
        path.write_text("AFS_MONITOR_LOG_LEVEL=INFO\n")
        monkeypatch.setenv('AFS_MONITOR_CONFIG', str(path))
        monkeypatch.setenv('AFS_MONITOR_LOG_LEVEL', 'DEBUG')
        reload_config()
        assert get_config('AFS_MONITOR_LOG_LEVEL') == 'DEBUG'
        assert config_source('AFS_MONITOR_LOG_LEVEL') == "env var"

    def test_bool(self, monkeypatch):
        """Boolean parsing accepts the usual spellings."""
        assert get_config_bool('AFS_MONITOR_LOG_COLOR') is True
        monkeypatch.setenv('AFS_MONITOR_LOG_COLOR', 'no')
        assert get_config_bool('AFS_MONITOR_LOG_COLOR') is False
        monkeypatch.setenv('AFS_MONITOR_LOG_COLOR', 'On')
        assert get_config_bool('AFS_MONITOR_LOG_COLOR') is True
