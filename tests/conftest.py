"""
Shared fixtures: sample AFS tool transcripts and a fake command runner.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from afs_monitor.core.models import CapturedOutput  # noqa: E402
from afs_monitor.utils import env_config  # noqa: E402
from afs_monitor.utils.console import reset_console  # noqa: E402
from afs_monitor.utils.logging_config import reset_logging  # noqa: E402


RXDEBUG_OUTPUT = """\
Trying 10.0.0.11 (port 7000):
Free packets: 1230, packet reclaims: 0, calls: 48211, used FDs: 64
not waiting for packets.
12 calls waiting for a thread
110 threads are idle
0 calls have waited for a thread
"""

PARTINFO_OUTPUT = """\
Free space on partition /vicepa: 50 K blocks out of total 1000
Free space on partition /vicepb: 600 K blocks out of total 1000
"""

BOS_HEALTHY_OUTPUT = """\
Instance ptserver, (type is simple) currently running normally.
    Process last started at Mon Oct  6 04:12:10 2026 (1 proc starts)
    Command 1 is '/usr/afs/bin/ptserver'
Instance vlserver, (type is simple) currently running normally.
    Process last started at Mon Oct  6 04:12:10 2026 (1 proc starts)
    Command 1 is '/usr/afs/bin/vlserver'
Instance fs, (type is fs) currently running normally.
    Auxiliary status is: file server running.
    Process last started at Mon Oct  6 04:12:10 2026 (2 proc starts)
    Last exit at Mon Oct  6 04:12:09 2026
    Command 1 is '/usr/afs/bin/fileserver'
    Command 2 is '/usr/afs/bin/volserver'
    Command 3 is '/usr/afs/bin/salvager'
"""

UDEBUG_SYNC_SITE_OUTPUT = """\
Host's addresses are: 10.0.0.1
Host's 10.0.0.1 time is Sat Oct 18 10:00:00 2026
Local time is Sat Oct 18 10:00:00 2026 (time differential 0 secs)
Last yes vote for 10.0.0.1 was 5 secs ago (sync site);
Last vote started 5 secs ago (at Sat Oct 18 09:59:55 2026)
Local db version is 1760764800.42
I am sync site until 54 secs from now (at Sat Oct 18 10:00:54 2026) (3 servers)
Recovery state 1f
Sync site's db version is 1760764800.42
0 locked pages, 0 of them for write
"""

UDEBUG_SECONDARY_OUTPUT = """\
Host's addresses are: 10.0.0.2
Host's 10.0.0.1 time is Sat Oct 18 10:00:00 2026
Local time is Sat Oct 18 10:00:00 2026 (time differential 0 secs)
Last yes vote for 10.0.0.1 was 5 secs ago (sync site);
Last vote started 5 secs ago (at Sat Oct 18 09:59:55 2026)
Local db version is 1760764800.42
I am not sync site
Lowest host 10.0.0.1 was set 5 secs ago
Sync host 10.0.0.1 was set 5 secs ago
Sync site's db version is 1760764800.42
0 locked pages, 0 of them for write
"""

LISTADDRS_OUTPUT = """\
UUID: 000a1b2c-3d4e-1f5a-8b-9c-0d0e0f101112
10.0.0.11
192.168.10.11

"""


def fake_runner(output: str, returncode: int = 0):
    """Build a runner that returns canned output and records its calls."""
    calls = []

    def runner(argv, timeout):
        calls.append((list(argv), timeout))
        return CapturedOutput(
            command=tuple(argv),
            lines=tuple(output.splitlines()),
            returncode=returncode,
        )

    runner.calls = calls
    return runner


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep site config files and logging state out of the tests."""
    monkeypatch.setattr(env_config, '_file_values', {})
    for key in env_config.DEFAULTS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv('AFS_MONITOR_CONFIG', raising=False)
    yield
    reset_logging()
    reset_console()
