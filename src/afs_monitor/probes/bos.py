"""
Server process status probe (bos status).

    bos status -server <host> -long [-noauth]

Every output line must be recognised. Lines matching an OKAY rule are
informational, a WARNING rule stops with that line, and anything else
stops with CRITICAL. Example healthy output:

    Instance ptserver, (type is simple) currently running normally.
        Process last started at Mon Oct  6 04:12:10 2026 (1 proc starts)
        Command 1 is '/usr/afs/bin/ptserver'

The one cross-line rule: a salvager instance whose status wraps onto the
next line as "... running now" is a WARNING, not a CRITICAL.
"""

from typing import List, Sequence

from ..core.models import Severity, Verdict
from ..core.rules import PatternClassifier, context_rule, okay, warning
from .base import Probe

INSTANCE = r'^Instance \S+,\s*(\(type is \S+\)\s*)?'

OKAY_RULES = [
    okay(INSTANCE + r'(temporarily enabled, )?currently running normally\.', counts=True),
    # Status wraps onto the following line
    okay(INSTANCE + r'(temporarily enabled,)?\s*$'),
    okay(r'^\s+Auxiliary status is: file server running\.'),
    okay(r'^\s+Auxiliary status is: run next at '),
    okay(r'^\s+Process last started at '),
    okay(r'^\s+Command \d+ is '),
    okay(r'^\s+Last exit at '),
    okay(r'^\s+Last error exit at '),
    okay(r'^\s*Bosserver reports inappropriate access on server directories'),
]

WARNING_RULES = [
    warning(INSTANCE + r'(temporarily )?disabled'),
    warning(r'^Instance \S+, .*has core file'),
    warning(r'^\s+Auxiliary status is: salvaging file system\.'),
]

CONTEXT_RULES = [
    context_rule(r'^Instance salvage,', r'running now', Severity.WARNING, "salvage is running"),
]


def running_summary(count: int) -> str:
    if count == 0:
        return "no instances running normally"
    if count == 1:
        return "1 instance running normally"
    return f"{count} instances running normally"


BOS_CLASSIFIER = PatternClassifier(
    okay=OKAY_RULES,
    warning=WARNING_RULES,
    context=CONTEXT_RULES,
    summary=running_summary,
)


def classify_bos_status(lines: Sequence[str]) -> Verdict:
    return BOS_CLASSIFIER.classify(lines)


class BosProbe(Probe):
    """Check that every bosserver instance is running normally."""

    name = "bos"
    domain = "BOS"
    binary = "bos"
    description = "Server process status (bos status)"
    default_timeout = 60

    @classmethod
    def add_arguments(cls, parser) -> None:
        parser.add_argument('-n', '--noauth', action='store_true',
                            help="Run bos without authentication")

    def command(self) -> List[str]:
        argv = [self.find_binary(), 'status', '-server', self.config.target.host, '-long']
        if self.config.noauth:
            argv.append('-noauth')
        return argv

    def evaluate(self, lines: Sequence[str]) -> Verdict:
        return classify_bos_status(lines)
