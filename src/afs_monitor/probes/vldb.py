"""
VLDB registration probe (vos listaddrs).

    vos listaddrs -host <host> -printuuid -noresolve [-cell <cell>] [-noauth]

Verifies that the fileserver is registered in the VLDB under the expected
UUID and with every expected address. Output looks like:

    UUID: 000a1b2c-3d4e-1f5a-8b-9c-0d0e0f101112
    10.0.0.1
    192.168.10.1
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Sequence

from ..core.models import Verdict
from .base import Probe

UUID_RE = re.compile(r'^\s*UUID:\s*(\S+)')


@dataclass(frozen=True)
class Registration:
    """Observation record: what the VLDB holds for the host."""
    registered_uuid: Optional[str]
    missing_addresses: FrozenSet[str]


def extract_registration(lines: Sequence[str], expected_addresses: Iterable[str]) -> Registration:
    """
    Capture the first UUID line and strike off each expected address
    as it appears. Whatever is left over is missing.
    """
    registered_uuid = None
    missing = set(expected_addresses)

    for line in lines:
        if registered_uuid is None:
            match = UUID_RE.search(line)
            if match:
                registered_uuid = match.group(1)
                continue
        missing.discard(line.strip())

    return Registration(registered_uuid, frozenset(missing))


def classify_registration(registration: Registration, host: str,
                          expected_uuid: Optional[str] = None) -> Verdict:
    """UUID gate first, then the address gate."""
    if expected_uuid:
        if registration.registered_uuid is None:
            return Verdict.critical("No UUID associated.")
        if registration.registered_uuid.lower() != expected_uuid.lower():
            return Verdict.critical(
                f"UUID mismatch: expected {expected_uuid}, found {registration.registered_uuid}")

    if registration.missing_addresses:
        missing = ", ".join(sorted(registration.missing_addresses))
        return Verdict.critical(f"missing addresses: {missing}")

    if registration.registered_uuid:
        return Verdict.ok(f"{host} registered with UUID {registration.registered_uuid}")
    return Verdict.ok(f"{host} registered")


class VldbProbe(Probe):
    """Check a fileserver's UUID and address registration in the VLDB."""

    name = "vldb"
    domain = "VOS"
    binary = "vos"
    description = "Fileserver UUID and address registration (vos listaddrs)"
    default_timeout = 60

    @classmethod
    def add_arguments(cls, parser) -> None:
        parser.add_argument('-u', '--uuid',
                            help="Expected fileserver UUID")
        parser.add_argument('-a', '--addr', action='append', default=[], metavar='ADDRESS',
                            help="Address that must be registered (repeatable)")
        parser.add_argument('-c', '--cell',
                            help="AFS cell to query")
        parser.add_argument('-n', '--noauth', action='store_true',
                            help="Run vos without authentication")

    @classmethod
    def target_options(cls, args) -> dict:
        return {'uuid': args.uuid, 'cell': args.cell}

    def command(self) -> List[str]:
        target = self.config.target
        argv = [self.find_binary(), 'listaddrs', '-host', target.host,
                '-printuuid', '-noresolve']
        if target.cell:
            argv += ['-cell', target.cell]
        if self.config.noauth:
            argv.append('-noauth')
        return argv

    def evaluate(self, lines: Sequence[str]) -> Verdict:
        registration = extract_registration(lines, self.config.expected_addresses)
        return classify_registration(registration, self.config.target.host,
                                     self.config.target.uuid)
