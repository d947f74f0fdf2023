"""Verdict reporter: one line on stdout, severity mapped to exit code."""

import sys
from typing import Optional, TextIO

from .models import Verdict


def format_verdict(domain: str, verdict: Verdict, perfdata: bool = True) -> str:
    """
    Format the single output line.

    "<DOMAIN> <SEVERITY> - <message>" optionally followed by
    "|<token> <token>" performance data.
    """
    # Embedded newlines would break the one-line contract
    message = " ".join(verdict.message.split())
    line = f"{domain} {verdict.severity.value} - {message}"
    if perfdata and verdict.perfdata:
        line += "|" + " ".join(datum.render() for datum in verdict.perfdata)
    return line


def report(domain: str, verdict: Verdict, perfdata: bool = True,
           stream: Optional[TextIO] = None) -> int:
    """Print the verdict line and return the exit code to use."""
    stream = stream or sys.stdout
    print(format_verdict(domain, verdict, perfdata), file=stream, flush=True)
    return verdict.exit_code
