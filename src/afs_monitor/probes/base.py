"""
Probe base class.

A probe is one diagnostic: it builds a command line, runs it under a
deadline, extracts facts from the output and classifies them.

To add a probe:
1. Subclass Probe and set the class attributes
2. Implement command() and evaluate()
3. Optionally extend add_arguments() for probe-specific flags
4. Register it in afs_monitor.probes.PROBES

Example:
    class MyProbe(Probe):
        name = "mycheck"
        domain = "AFS"
        binary = "rxdebug"

        def command(self):
            return [self.find_binary(), self.config.target.host]

        def evaluate(self, lines):
            return Verdict.ok("fine")
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from ..core.errors import CommandFailure, ProbeError
from ..core.models import CapturedOutput, ProbeConfig, Thresholds, Verdict
from ..core.runner import run_command
from ..utils.paths import find_binary

logger = logging.getLogger(__name__)

Runner = Callable[[Sequence[str], float], CapturedOutput]


class Probe(ABC):
    """
    Base class for all AFS probes.

    Class attributes:
        name: Short probe name used by the umbrella command
        domain: Tag printed at the start of the output line
        binary: AFS tool this probe runs
        description: One-line summary for --help and --list
        default_timeout: Deadline in seconds when -t is not given
        default_thresholds: Warning/critical defaults; None means the probe
            takes no -w/-c flags
    """

    name: str = ""
    domain: str = "AFS"
    binary: str = ""
    description: str = ""
    default_timeout: float = 10
    default_thresholds: Optional[Thresholds] = None

    def __init__(self, config: ProbeConfig, runner: Optional[Runner] = None):
        self.config = config
        self.runner = runner or run_command

    # === Command line ===

    @classmethod
    def add_arguments(cls, parser) -> None:
        """Add probe-specific flags to an argparse parser."""

    @classmethod
    def target_options(cls, args) -> dict:
        """
        Probe-specific Target fields from parsed arguments.

        Raises:
            ConfigurationError: a flag value is unusable
        """
        return {}

    def find_binary(self) -> str:
        return find_binary(self.binary)

    @abstractmethod
    def command(self) -> List[str]:
        """Build the argv for the diagnostic command."""

    # === Classification ===

    @abstractmethod
    def evaluate(self, lines: Sequence[str]) -> Verdict:
        """
        Turn captured output lines into a Verdict.

        May raise ParseFailure when an expected fact is missing.
        """

    # === Execution ===

    def run(self) -> Verdict:
        """
        Run the command and classify its output.

        Raises:
            ProbeError: launch failure, timeout, non-zero exit or parse failure
        """
        argv = self.command()
        captured = self.runner(argv, self.config.timeout)

        if not captured.succeeded:
            logger.info(f"{self.binary} exited with status {captured.returncode}")
            for line in captured.lines:
                logger.debug(f"{self.binary}: {line}")
            raise CommandFailure(self.config.target.host, captured.returncode)

        return self.evaluate(captured.lines)

    def check(self) -> Verdict:
        """Run the probe, converting every ProbeError into its Verdict."""
        try:
            verdict = self.run()
        except ProbeError as e:
            logger.info(f"{self.name} probe failed: {e.message}")
            return e.to_verdict()

        logger.info(f"{self.name} probe: {verdict.severity.value} - {verdict.message}")
        return verdict
