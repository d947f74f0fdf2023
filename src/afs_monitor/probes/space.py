"""
Partition usage probe (vos partinfo).

    vos partinfo -server <host> [-partition <name>] [-noauth]

Each partition is reported on one line:

    Free space on partition /vicepa: 289456 K blocks out of total 1007896

Column contract (whitespace separated, 12 columns):

    index  0     1      2   3          4         5      6  7       8   9  10     11
           Free  space  on  partition  /vicepa:  <free> K  blocks  out of total  <total>

Only lines starting with "Free space on partition" are partition lines;
everything else (summary lines, warnings) is ignored.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.errors import ConfigurationError
from ..core.models import PerfDatum, Severity, Thresholds, Verdict
from ..core.rules import classify_threshold
from .base import Probe

logger = logging.getLogger(__name__)

LINE_PREFIX = "Free space on partition"
COLUMN_COUNT = 12
NAME_COLUMN = 4
FREE_COLUMN = 5
TOTAL_COLUMN = 11

PARTITION_RE = re.compile(r'^[a-z]{1,2}$')


class PartitionLineError(ValueError):
    """A partition line did not follow the column contract."""


@dataclass(frozen=True)
class PartitionUsage:
    """Space on one partition, in 1K blocks."""
    name: str
    free: int
    total: int

    @property
    def used_percent(self) -> int:
        """floor((total - free) / total * 100); an empty partition is 0%."""
        if self.total <= 0:
            return 0
        return (self.total - self.free) * 100 // self.total


@dataclass(frozen=True)
class PartitionReport:
    """Observation record: partitions in output order, after filtering."""
    partitions: Tuple[PartitionUsage, ...]
    requested: Optional[str] = None


def normalize_partition(name: str) -> str:
    """
    Accept 'a', 'vicepa' or '/vicepa' and return '/vicepa'.

    Raises:
        ConfigurationError: not a vice partition name
    """
    short = name.strip().lower().lstrip('/')
    if short.startswith('vicep'):
        short = short[len('vicep'):]
    if not PARTITION_RE.match(short):
        raise ConfigurationError(f"invalid partition name: {name}")
    return f"/vicep{short}"


def parse_partition_line(line: str) -> Optional[PartitionUsage]:
    """
    Parse one vos partinfo line.

    Returns:
        PartitionUsage, or None if the line is not a partition line

    Raises:
        PartitionLineError: the line has the partition prefix but not the
            expected columns
    """
    stripped = line.strip()
    if not stripped.startswith(LINE_PREFIX):
        return None

    columns = stripped.split()
    if len(columns) != COLUMN_COUNT:
        raise PartitionLineError(
            f"expected {COLUMN_COUNT} columns, found {len(columns)}: {stripped}")

    name = columns[NAME_COLUMN].rstrip(':')
    try:
        free = int(columns[FREE_COLUMN])
        total = int(columns[TOTAL_COLUMN])
    except ValueError:
        raise PartitionLineError(f"non-numeric block counts: {stripped}")

    return PartitionUsage(name=name, free=free, total=total)


def extract_partition_usage(lines: Sequence[str],
                            partition: Optional[str] = None) -> PartitionReport:
    """Collect partition lines, keeping only `partition` when one is given."""
    found = []
    for line in lines:
        try:
            usage = parse_partition_line(line)
        except PartitionLineError as e:
            logger.warning(f"Skipping malformed partition line: {e}")
            continue
        if usage is None:
            continue
        if partition and usage.name != partition:
            continue
        found.append(usage)
    return PartitionReport(tuple(found), requested=partition)


def classify_partition_usage(report: PartitionReport, thresholds: Thresholds) -> Verdict:
    """
    Worst severity across partitions.

    The message names every partition at WARNING or worse; if none are,
    it names all of them.
    """
    if not report.partitions:
        if report.requested:
            return Verdict.critical(f"no partition {report.requested} found")
        return Verdict.critical("no partition found")

    rated = [(usage, classify_threshold(usage.used_percent, thresholds))
             for usage in report.partitions]
    severity = Severity.worst(s for _, s in rated)

    flagged = [usage for usage, s in rated if s is not Severity.OK]
    shown = flagged or [usage for usage, _ in rated]
    message = ", ".join(f"{usage.name} {usage.used_percent}%" for usage in shown)

    perfdata = [
        PerfDatum(usage.name, usage.used_percent, uom="%",
                  warning=thresholds.warning, critical=thresholds.critical,
                  minimum=0, maximum=100)
        for usage in report.partitions
    ]
    return Verdict(severity, message, tuple(perfdata))


class SpaceProbe(Probe):
    """Percentage of space used on fileserver partitions."""

    name = "space"
    domain = "AFS"
    binary = "vos"
    description = "Fileserver partition usage (vos partinfo)"
    default_timeout = 300
    default_thresholds = Thresholds(warning=85, critical=90)

    @classmethod
    def add_arguments(cls, parser) -> None:
        parser.add_argument('-p', '--partition',
                            help="Only check this partition (a, vicepa or /vicepa)")
        parser.add_argument('-d', '--perfdata', action='store_true',
                            help="Append performance data")
        parser.add_argument('-n', '--noauth', action='store_true',
                            help="Run vos without authentication")

    @classmethod
    def target_options(cls, args) -> dict:
        if args.partition:
            return {'partition': normalize_partition(args.partition)}
        return {}

    def command(self) -> List[str]:
        target = self.config.target
        argv = [self.find_binary(), 'partinfo', '-server', target.host]
        if target.partition:
            argv += ['-partition', target.partition]
        if self.config.noauth:
            argv.append('-noauth')
        return argv

    def evaluate(self, lines: Sequence[str]) -> Verdict:
        report = extract_partition_usage(lines, self.config.target.partition)
        return classify_partition_usage(report, self.config.thresholds)
