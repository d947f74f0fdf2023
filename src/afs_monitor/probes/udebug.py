"""
Ubik quorum probe (udebug).

    udebug -server <host> -port <port>

A database server either claims to be the sync site, in which case its
recovery state must show the database fully recovered, or it must know
which host is the sync site. Relevant lines:

    Local db version is 1760764800.42
    I am sync site until 54 secs from now (at Sat Oct 18 10:00:54 2026) (3 servers)
    Recovery state 1f
    Sync host 10.0.0.1 was set 12 secs ago
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.models import Verdict
from .base import Probe

DEFAULT_PORT = 7003

# Recovery state codes of a healthy sync site
RECOVERED_STATES = frozenset({'1f', '17'})

SYNC_CLAIM_RE = re.compile(r'^\s*I am sync site\b')
RECOVERY_RE = re.compile(r'^\s*Recovery state (\S+)')
SYNC_HOST_RE = re.compile(r'^\s*Sync host (\S+)')
DB_VERSION_RE = re.compile(r'^\s*Local db version is (\S+)')


@dataclass(frozen=True)
class UbikStatus:
    """Observation record for one udebug run."""
    is_sync_site: bool = False
    recovery_state: Optional[str] = None
    sync_host: Optional[str] = None
    local_db_version: Optional[str] = None


def extract_ubik_status(lines: Sequence[str]) -> UbikStatus:
    """
    Scan udebug output.

    Each signal is taken from the first line that provides it. The
    recovery state only counts once the sync site claim has been seen.
    """
    is_sync_site = False
    recovery_state = None
    sync_host = None
    db_version = None

    for line in lines:
        if not is_sync_site and SYNC_CLAIM_RE.search(line):
            is_sync_site = True
            continue

        if is_sync_site and recovery_state is None:
            match = RECOVERY_RE.search(line)
            if match:
                recovery_state = match.group(1)
                continue

        if sync_host is None:
            match = SYNC_HOST_RE.search(line)
            if match:
                sync_host = match.group(1)
                continue

        if db_version is None:
            match = DB_VERSION_RE.search(line)
            if match:
                db_version = match.group(1)

    return UbikStatus(
        is_sync_site=is_sync_site,
        recovery_state=recovery_state,
        sync_host=sync_host,
        local_db_version=db_version,
    )


def classify_ubik_status(status: UbikStatus) -> Verdict:
    """
    Two independent gates:
    - a sync site must report a recovered state (1f or 17)
    - any other server must have seen a sync host
    """
    if status.is_sync_site:
        state = status.recovery_state
        if state is None:
            return Verdict.critical("sync site but no recovery state reported")
        if state.lower() not in RECOVERED_STATES:
            return Verdict.critical(f"sync site with recovery state {state}")
        message = f"sync site, recovery state {state}"
    else:
        if status.sync_host is None:
            return Verdict.critical("not sync site and no sync host found")
        message = f"sync host {status.sync_host}"

    if status.local_db_version:
        message += f", db version {status.local_db_version}"
    return Verdict.ok(message)


class UdebugProbe(Probe):
    """Check ubik sync site election and recovery on a database server."""

    name = "udebug"
    domain = "UBIK"
    binary = "udebug"
    description = "Ubik sync site and recovery state (udebug)"
    default_timeout = 10

    @classmethod
    def add_arguments(cls, parser) -> None:
        parser.add_argument('-p', '--port', type=int, default=DEFAULT_PORT,
                            help=f"Ubik server port (default {DEFAULT_PORT}, vlserver)")

    @classmethod
    def target_options(cls, args) -> dict:
        return {'port': args.port}

    def command(self) -> List[str]:
        target = self.config.target
        port = target.port or DEFAULT_PORT
        return [self.find_binary(), '-server', target.host, '-port', str(port)]

    def evaluate(self, lines: Sequence[str]) -> Verdict:
        return classify_ubik_status(extract_ubik_status(lines))
