"""
Rule Classifier

Two strategies turn observations into a Verdict:

- Threshold: compare one number against warning/critical bounds (>=, critical first)
- Pattern rules: walk raw output lines through ordered OKAY then WARNING rule
  lists, first match wins, anything unmatched is CRITICAL (fail-closed)

Rule tables are plain data so each probe declares its own and tests can
exercise them without running a command.

Usage:
    severity = classify_threshold(12, Thresholds(2, 8))   # Severity.CRITICAL

    classifier = PatternClassifier(okay=OKAY_RULES, warning=WARNING_RULES)
    verdict = classifier.classify(lines)
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern, Sequence, Tuple

from .models import RuleOutcome, Severity, Thresholds, Verdict

logger = logging.getLogger(__name__)


def classify_threshold(value: float, thresholds: Thresholds) -> Severity:
    """
    Classify a measured value against warning/critical bounds.

    Bounds are inclusive and critical is tested first, so a value at or
    above both reports CRITICAL.
    """
    if value >= thresholds.critical:
        return Severity.CRITICAL
    if value >= thresholds.warning:
        return Severity.WARNING
    return Severity.OK


# =============================================================================
# Pattern rules
# =============================================================================

@dataclass(frozen=True)
class Rule:
    """
    A single line rule.

    Attributes:
        pattern: Compiled regex, tested with search()
        outcome: OKAY (informational) or WARNING (stop with this line)
        counts: True if a match should be counted in the OK summary
    """
    pattern: Pattern
    outcome: RuleOutcome
    counts: bool = False

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None


def okay(regex: str, counts: bool = False) -> Rule:
    """Build an OKAY rule."""
    return Rule(re.compile(regex), RuleOutcome.OKAY, counts)


def warning(regex: str) -> Rule:
    """Build a WARNING rule."""
    return Rule(re.compile(regex), RuleOutcome.WARNING)


@dataclass(frozen=True)
class ContextRule:
    """
    Override for a line that matched no rule, based on the line right
    before it. Only the immediately preceding raw line is inspected.
    """
    previous: Pattern
    current: Pattern
    severity: Severity
    message: str

    def applies(self, previous_line: Optional[str], line: str) -> bool:
        if previous_line is None:
            return False
        return (self.previous.search(previous_line) is not None
                and self.current.search(line) is not None)


def context_rule(previous: str, current: str, severity: Severity, message: str) -> ContextRule:
    """Build a ContextRule from two regexes."""
    return ContextRule(re.compile(previous), re.compile(current), severity, message)


def _default_summary(count: int) -> str:
    if count == 0:
        return "no lines matched"
    if count == 1:
        return "1 line matched"
    return f"{count} lines matched"


class PatternClassifier:
    """
    Ordered, fail-closed line classifier.

    For each non-blank line:
    1. First matching OKAY rule - informational, continue
    2. First matching WARNING rule - stop with WARNING and the trimmed line
    3. Otherwise a matching ContextRule decides, else stop with CRITICAL

    If every line is OKAY, the verdict is OK and the message comes from
    ``summary(count)`` where count is the number of lines that hit a
    counting OKAY rule. The classifier keeps no state between calls.
    """

    def __init__(self,
                 okay: Sequence[Rule],
                 warning: Sequence[Rule],
                 context: Sequence[ContextRule] = (),
                 summary=_default_summary):
        self.okay_rules: Tuple[Rule, ...] = tuple(okay)
        self.warning_rules: Tuple[Rule, ...] = tuple(warning)
        self.context_rules: Tuple[ContextRule, ...] = tuple(context)
        self.summary = summary

    def match(self, line: str) -> Optional[Rule]:
        """Return the governing rule for a single line, or None."""
        for rule in self.okay_rules:
            if rule.matches(line):
                return rule
        for rule in self.warning_rules:
            if rule.matches(line):
                return rule
        return None

    def classify(self, lines: Iterable[str]) -> Verdict:
        counted = 0
        previous = None

        for line in lines:
            if not line.strip():
                previous = line
                continue

            rule = self.match(line)
            if rule is None:
                for override in self.context_rules:
                    if override.applies(previous, line):
                        logger.debug(f"Context override for line: {line.strip()}")
                        return Verdict(override.severity, override.message)
                logger.debug(f"Unrecognised line: {line.strip()}")
                return Verdict.critical(line.strip())

            if rule.outcome is RuleOutcome.WARNING:
                return Verdict.warning(line.strip())

            if rule.counts:
                counted += 1
            previous = line

        return Verdict.ok(self.summary(counted))
