"""
Classification core shared by every probe.

models   - Severity, Target, Thresholds, CapturedOutput, Verdict
errors   - ProbeError taxonomy and the severity each maps to
rules    - threshold and ordered pattern-rule classifiers
runner   - timed external command invocation
reporter - one-line output and exit code
"""

from .models import (
    CapturedOutput, PerfDatum, ProbeConfig, RuleOutcome, Severity, Target,
    Thresholds, Verdict,
)
from .errors import (
    CommandFailure, ConfigurationError, InvocationTimeout, LaunchFailure,
    ParseFailure, ProbeError,
)

__all__ = [
    'CapturedOutput', 'PerfDatum', 'ProbeConfig', 'RuleOutcome', 'Severity', 'Target',
    'Thresholds', 'Verdict',
    'CommandFailure', 'ConfigurationError', 'InvocationTimeout',
    'LaunchFailure', 'ParseFailure', 'ProbeError',
]
