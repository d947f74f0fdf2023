"""
Probe error taxonomy.

Every failure path maps to a fixed severity so the entry point can still
print the one-line verdict and exit with a well-defined status.
"""

from .models import Severity, Verdict


class ProbeError(Exception):
    """Base exception for anything that ends a probe run early."""

    severity = Severity.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_verdict(self) -> Verdict:
        return Verdict(self.severity, self.message)


class ConfigurationError(ProbeError):
    """Bad flags, missing target or inverted thresholds."""
    severity = Severity.UNKNOWN


class LaunchFailure(ProbeError):
    """The diagnostic binary could not be started."""
    severity = Severity.UNKNOWN


class InvocationTimeout(ProbeError):
    """The diagnostic command did not finish before its deadline."""
    severity = Severity.CRITICAL

    def __init__(self, command: str, timeout: float):
        super().__init__(f"{command} timed out after {_seconds(timeout)} seconds")
        self.command = command
        self.timeout = timeout


class CommandFailure(ProbeError):
    """The diagnostic command exited non-zero."""
    severity = Severity.CRITICAL

    def __init__(self, host: str, returncode: int):
        super().__init__(f"cannot contact server {host}")
        self.host = host
        self.returncode = returncode


class ParseFailure(ProbeError):
    """An expected fact never appeared in the command output."""
    severity = Severity.CRITICAL

    def __init__(self, message: str = "cannot parse output"):
        super().__init__(message)


def _seconds(timeout: float) -> str:
    if float(timeout).is_integer():
        return str(int(timeout))
    return str(timeout)
