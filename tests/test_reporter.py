"""
Tests for verdict models and the one-line reporter.

Run: python3 -m pytest tests/test_reporter.py -v
"""

import io

import pytest

from afs_monitor.core.errors import (
    CommandFailure,
    ConfigurationError,
    InvocationTimeout,
    LaunchFailure,
    ParseFailure,
)
from afs_monitor.core.models import PerfDatum, Severity, Verdict
from afs_monitor.core.reporter import format_verdict, report


class TestSeverity:
    """Tests for Severity exit codes and aggregation."""

    @pytest.mark.parametrize("severity,code", [
        (Severity.OK, 0),
        (Severity.WARNING, 1),
        (Severity.CRITICAL, 2),
        (Severity.UNKNOWN, 3),
    ])
    def test_exit_codes(self, severity, code):
        """Each severity maps to its fixed exit code."""
        assert severity.exit_code == code

    def test_worst(self):
        """worst() picks the most severe entry."""
        assert Severity.worst([Severity.OK, Severity.CRITICAL, Severity.WARNING]) is Severity.CRITICAL
        assert Severity.worst([Severity.OK, Severity.WARNING]) is Severity.WARNING

    def test_worst_of_nothing_is_ok(self):
        """An empty collection aggregates to OK."""
        assert Severity.worst([]) is Severity.OK


class TestErrorSeverities:
    """Each error maps to a fixed severity."""

    def test_configuration_and_launch_are_unknown(self):
        """Errors that stop a probe from running are UNKNOWN."""
        assert ConfigurationError("bad").to_verdict().severity is Severity.UNKNOWN
        assert LaunchFailure("missing").to_verdict().severity is Severity.UNKNOWN

    def test_timeout_names_duration(self):
        """A timeout names the command and the deadline."""
        verdict = InvocationTimeout("rxdebug", 10).to_verdict()
        assert verdict.severity is Severity.CRITICAL
        assert verdict.message == "rxdebug timed out after 10 seconds"

    def test_fractional_timeout(self):
        """Fractional deadlines keep their decimals."""
        assert InvocationTimeout("bos", 2.5).message == "bos timed out after 2.5 seconds"

    def test_command_failure(self):
        """A non-zero exit reports the unreachable server."""
        verdict = CommandFailure("fs1", 1).to_verdict()
        assert verdict.severity is Severity.CRITICAL
        assert verdict.message == "cannot contact server fs1"

    def test_parse_failure(self):
        """Missing facts are CRITICAL with the default message."""
        verdict = ParseFailure().to_verdict()
        assert verdict.severity is Severity.CRITICAL
        assert verdict.message == "cannot parse output"


class TestPerfDatum:
    """Tests for performance data rendering."""

    def test_full_token(self):
        """All five fields are rendered."""
        datum = PerfDatum("/vicepa", 95, uom="%", warning=85, critical=90, minimum=0, maximum=100)
        assert datum.render() == "/vicepa=95%;85;90;0;100"

    def test_missing_fields_render_empty(self):
        """Unset fields are empty but keep their separators."""
        assert PerfDatum("blocked", 3, minimum=0).render() == "blocked=3;;;0;"

    def test_float_values(self):
        """Integral floats drop the decimal point."""
        assert PerfDatum("load", 1.5, warning=2.0).render() == "load=1.5;2;;;"


class TestFormatVerdict:
    """Tests for the one-line output format."""

    def test_plain_line(self):
        """Domain and severity precede the message."""
        line = format_verdict("BOS", Verdict.ok("3 instances running normally"))
        assert line == "BOS OK - 3 instances running normally"

    def test_perfdata_appended(self):
        """Performance data follows a pipe."""
        verdict = Verdict.critical("12 blocked connections",
                                   [PerfDatum("blocked", 12, warning=2, critical=8, minimum=0)])
        assert format_verdict("AFS", verdict) == "AFS CRITICAL - 12 blocked connections|blocked=12;2;8;0;"

    def test_perfdata_suppressed(self):
        """perfdata=False drops the performance data."""
        verdict = Verdict.warning("5 blocked connections", [PerfDatum("blocked", 5)])
        assert format_verdict("AFS", verdict, perfdata=False) == "AFS WARNING - 5 blocked connections"

    def test_multiple_tokens_space_separated(self):
        """Several tokens are joined with spaces."""
        verdict = Verdict.ok("/vicepa 10%, /vicepb 20%",
                             [PerfDatum("/vicepa", 10, uom="%"), PerfDatum("/vicepb", 20, uom="%")])
        assert format_verdict("AFS", verdict).endswith("|/vicepa=10%;;;; /vicepb=20%;;;;")

    def test_message_collapsed_to_one_line(self):
        """Embedded newlines never reach the output."""
        line = format_verdict("VOS", Verdict.unknown("internal error: first\nsecond"))
        assert line == "VOS UNKNOWN - internal error: first second"


class TestReport:
    """Tests for report()."""

    def test_writes_line_and_returns_exit_code(self):
        """The line is written with a newline and the exit code returned."""
        stream = io.StringIO()
        code = report("UBIK", Verdict.critical("no sync host"), stream=stream)
        assert code == 2
        assert stream.getvalue() == "UBIK CRITICAL - no sync host\n"

    def test_unknown_exit_code(self):
        """UNKNOWN verdicts exit 3."""
        stream = io.StringIO()
        assert report("AFS", Verdict.unknown("bad flags"), stream=stream) == 3
