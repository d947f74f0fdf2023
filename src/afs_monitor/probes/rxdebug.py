"""
Blocked connections probe (rxdebug).

Asks a server's Rx layer how many calls are queued waiting for a worker
thread. A fileserver with calls piling up is about to stop answering.

    rxdebug <host> <port> -noconns

Relevant output line:
    12 calls waiting for a thread
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.errors import ParseFailure
from ..core.models import PerfDatum, Thresholds, Verdict
from ..core.rules import classify_threshold
from .base import Probe

DEFAULT_PORT = 7000

WAITING_RE = re.compile(r'^\s*(\d+)\s+calls? waiting for a thread')


@dataclass(frozen=True)
class BlockedConnections:
    """Observation record. None means the count never appeared in the output."""
    count: Optional[int]


def extract_blocked_connections(lines: Sequence[str]) -> BlockedConnections:
    """First 'N calls waiting for a thread' line wins."""
    for line in lines:
        match = WAITING_RE.search(line)
        if match:
            return BlockedConnections(int(match.group(1)))
    return BlockedConnections(None)


def classify_blocked_connections(observed: BlockedConnections,
                                 thresholds: Thresholds) -> Verdict:
    if observed.count is None:
        raise ParseFailure()

    count = observed.count
    severity = classify_threshold(count, thresholds)
    noun = "connection" if count == 1 else "connections"
    perfdata = [PerfDatum("blocked", count, warning=thresholds.warning,
                          critical=thresholds.critical, minimum=0)]
    return Verdict(severity, f"{count} blocked {noun}", tuple(perfdata))


class RxdebugProbe(Probe):
    """Count calls waiting for a thread on an Rx server."""

    name = "rxdebug"
    domain = "AFS"
    binary = "rxdebug"
    description = "Rx calls waiting for a thread (blocked connections)"
    default_timeout = 10
    default_thresholds = Thresholds(warning=2, critical=8)

    @classmethod
    def add_arguments(cls, parser) -> None:
        parser.add_argument('-p', '--port', type=int, default=DEFAULT_PORT,
                            help=f"Rx port to query (default {DEFAULT_PORT})")
        parser.add_argument('-d', '--perfdata', action='store_true',
                            help="Append performance data")

    @classmethod
    def target_options(cls, args) -> dict:
        return {'port': args.port}

    def command(self) -> List[str]:
        target = self.config.target
        port = target.port or DEFAULT_PORT
        return [self.find_binary(), target.host, str(port), '-noconns']

    def evaluate(self, lines: Sequence[str]) -> Verdict:
        return classify_blocked_connections(
            extract_blocked_connections(lines), self.config.thresholds)
