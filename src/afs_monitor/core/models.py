"""
Probe Data Models

Shared data structures for every AFS probe:
- Severity levels and their fixed exit codes
- Target / Thresholds built once from the command line
- CapturedOutput handed from the runner to the fact extractors
- Verdict, the only thing the reporter needs

All records are frozen dataclasses - built once, never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


# === Status Enums ===

class Severity(Enum):
    """Verdict severity, ordered by badness."""
    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"

    @property
    def exit_code(self) -> int:
        """Process exit code for this severity (0/1/2/3)."""
        return _EXIT_CODES[self]

    @property
    def rank(self) -> int:
        """Ordering used when aggregating several entities."""
        return _RANKS[self]

    @classmethod
    def worst(cls, severities) -> 'Severity':
        """Return the most severe of an iterable of severities (OK if empty)."""
        result = cls.OK
        for severity in severities:
            if severity.rank > result.rank:
                result = severity
        return result


_EXIT_CODES = {
    Severity.OK: 0,
    Severity.WARNING: 1,
    Severity.CRITICAL: 2,
    Severity.UNKNOWN: 3,
}

# UNKNOWN sorts between WARNING and CRITICAL when aggregating
_RANKS = {
    Severity.OK: 0,
    Severity.WARNING: 1,
    Severity.UNKNOWN: 2,
    Severity.CRITICAL: 3,
}


class RuleOutcome(Enum):
    """What a matching output rule implies about a line."""
    OKAY = "okay"
    WARNING = "warning"


# === Configuration Records ===

@dataclass(frozen=True)
class Target:
    """
    What is being probed.

    Attributes:
        host: Server name or address (required)
        port: Rx port for rxdebug/udebug
        partition: Partition filter for space checks (normalised /vicepXX)
        cell: AFS cell for VLDB lookups
        uuid: Expected fileserver UUID for registration checks
    """
    host: str
    port: Optional[int] = None
    partition: Optional[str] = None
    cell: Optional[str] = None
    uuid: Optional[str] = None


@dataclass(frozen=True)
class Thresholds:
    """Warning/critical bounds. Invariant: warning <= critical."""
    warning: float
    critical: float

    def is_valid(self) -> bool:
        return self.warning <= self.critical


# === Invocation Records ===

@dataclass(frozen=True)
class CapturedOutput:
    """
    Output of one external command run.

    Attributes:
        command: The argv that was run
        lines: Ordered output lines (stdout and stderr merged)
        returncode: Final exit status of the child
        duration: Wall-clock seconds the child ran
    """
    command: Tuple[str, ...]
    lines: Tuple[str, ...]
    returncode: int
    duration: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


# === Result Types ===

@dataclass(frozen=True)
class PerfDatum:
    """
    One performance-data token: name=value[uom];warn;crit;min;max

    Empty fields are rendered as empty strings, as monitoring
    schedulers expect.
    """
    name: str
    value: float
    uom: str = ""
    warning: Optional[float] = None
    critical: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def render(self) -> str:
        fields = [
            f"{_fmt(self.value)}{self.uom}",
            _fmt(self.warning),
            _fmt(self.critical),
            _fmt(self.minimum),
            _fmt(self.maximum),
        ]
        return f"{self.name}={';'.join(fields)}"


def _fmt(number: Optional[float]) -> str:
    if number is None:
        return ""
    if float(number).is_integer():
        return str(int(number))
    return str(number)


@dataclass(frozen=True)
class Verdict:
    """
    Terminal result of classification.

    Every probe run produces exactly one Verdict.
    """
    severity: Severity
    message: str
    perfdata: Tuple[PerfDatum, ...] = field(default_factory=tuple)

    @property
    def exit_code(self) -> int:
        return self.severity.exit_code

    @classmethod
    def ok(cls, message: str, perfdata=()) -> 'Verdict':
        """Create an OK verdict."""
        return cls(Severity.OK, message, tuple(perfdata))

    @classmethod
    def warning(cls, message: str, perfdata=()) -> 'Verdict':
        """Create a WARNING verdict."""
        return cls(Severity.WARNING, message, tuple(perfdata))

    @classmethod
    def critical(cls, message: str, perfdata=()) -> 'Verdict':
        """Create a CRITICAL verdict."""
        return cls(Severity.CRITICAL, message, tuple(perfdata))

    @classmethod
    def unknown(cls, message: str) -> 'Verdict':
        """Create an UNKNOWN verdict (cannot run / cannot configure)."""
        return cls(Severity.UNKNOWN, message)


@dataclass(frozen=True)
class ProbeConfig:
    """
    Everything one probe run needs, resolved once from the command line.

    Attributes:
        target: What to probe
        thresholds: Warning/critical bounds (None for probes without them)
        timeout: Deadline for the diagnostic command, in seconds
        perfdata: Append performance data to the output line
        noauth: Run the AFS command unauthenticated (-noauth)
        expected_addresses: Addresses that must be registered for the host
        verbose: Number of -v flags given
    """
    target: Target
    thresholds: Optional[Thresholds] = None
    timeout: float = 10
    perfdata: bool = False
    noauth: bool = False
    expected_addresses: FrozenSet[str] = frozenset()
    verbose: int = 0
