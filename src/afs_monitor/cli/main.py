#!/usr/bin/env python3
"""AFS Monitor entry points

One console script per probe, for direct use from a monitoring scheduler:

    check_rxdebug -H fs1.example.com -w 2 -c 8 -d
    check_afs_space -H fs1.example.com -p a
    check_bos -H db1.example.com
    check_udebug -H db1.example.com -p 7003
    check_vldb_registration -H fs1.example.com -u <uuid> -a 10.0.0.1

and an umbrella command for operators:

    afs-monitor --list
    afs-monitor --show-config
    afs-monitor <probe> [probe flags]

Whatever happens, a probe run prints exactly one status line on stdout
and exits 0/1/2/3.
"""

import argparse
import logging
import sys
from typing import List, Optional, Type

from rich.table import Table

from ..__version__ import __version__
from ..core.errors import ConfigurationError
from ..core.models import Verdict
from ..core.reporter import report
from ..probes import (
    PROBES, BosProbe, Probe, RxdebugProbe, SpaceProbe, UdebugProbe, VldbProbe, get_probe,
)
from ..utils.console import get_console
from ..utils.env_config import DEFAULTS, config_source, find_config_file, get_config
from ..utils.logging_config import setup_logging
from ..utils.paths import BINARY_OVERRIDES, find_binary
from .options import build_parser, build_config

logger = logging.getLogger(__name__)


def run_probe(probe_cls: Type[Probe], argv: Optional[List[str]] = None,
              prog: Optional[str] = None, runner=None) -> int:
    """
    Parse flags, run one probe and print its status line.

    Returns:
        Exit code for the process
    """
    parser = build_parser(probe_cls, prog=prog)
    try:
        args = parser.parse_args(argv)
        config = build_config(probe_cls, args)
    except ConfigurationError as e:
        print(f"{parser.prog}: {e.message}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return report(probe_cls.domain, e.to_verdict())

    try:
        setup_logging(verbosity=config.verbose)
        logger.debug(f"Configuration: {config}")
        verdict = probe_cls(config, runner=runner).check()
    except Exception as e:
        # Last resort: the status line must still be printed
        logger.debug("Unhandled error in probe", exc_info=True)
        verdict = Verdict.unknown(f"internal error: {e}")

    return report(probe_cls.domain, verdict, perfdata=config.perfdata)


# === Per-probe console scripts ===

def check_rxdebug():
    sys.exit(run_probe(RxdebugProbe))


def check_afs_space():
    sys.exit(run_probe(SpaceProbe))


def check_bos():
    sys.exit(run_probe(BosProbe))


def check_udebug():
    sys.exit(run_probe(UdebugProbe))


def check_vldb_registration():
    sys.exit(run_probe(VldbProbe))


# === Umbrella command ===

def show_probes():
    """Print the available probes as a table on stderr."""
    table = Table(title="AFS Probes", show_header=True, header_style="heading")
    table.add_column("Probe", style="cyan")
    table.add_column("Tag")
    table.add_column("Command", style="green")
    table.add_column("Timeout", justify="right")
    table.add_column("Thresholds")
    table.add_column("Description", style="dim")

    for name, probe in PROBES.items():
        thresholds = probe.default_thresholds
        limits = f"{thresholds.warning:g}/{thresholds.critical:g}" if thresholds else "-"
        table.add_row(name, probe.domain, probe.binary, f"{probe.default_timeout:g}s",
                      limits, probe.description)

    get_console().print(table)


def show_config():
    """Display resolved site settings and binary locations on stderr."""
    console = get_console()

    table = Table(title="Current Configuration", show_header=True, header_style="heading")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="yellow")
    for key in sorted(DEFAULTS):
        table.add_row(key, get_config(key), config_source(key))
    console.print(table)

    binaries = Table(title="AFS Binaries", show_header=True, header_style="heading")
    binaries.add_column("Command", style="cyan")
    binaries.add_column("Resolved to", style="green")
    for name in BINARY_OVERRIDES:
        binaries.add_row(name, find_binary(name))
    console.print(binaries)

    config_file = find_config_file()
    if config_file:
        console.print(f"\n[dim]Loaded from: {config_file}[/dim]")
    else:
        console.print("\n[dim]No config file found, using environment and defaults[/dim]")


def main(argv: Optional[List[str]] = None) -> int:
    """afs-monitor [--list | --show-config | <probe> ...]"""
    if argv is None:
        argv = sys.argv[1:]

    probe = get_probe(argv[0]) if argv else None
    if probe is not None:
        return run_probe(probe, argv[1:], prog=f"afs-monitor {probe.name}")

    parser = argparse.ArgumentParser(
        prog="afs-monitor",
        description="Health-check probes for AFS servers",
        epilog=f"Probes: {', '.join(PROBES)}. Run 'afs-monitor <probe> --help' for probe flags.",
    )
    parser.add_argument('--list', action='store_true', help="List available probes")
    parser.add_argument('--show-config', action='store_true',
                        help="Show resolved site configuration")
    parser.add_argument('-V', '--version', action='version',
                        version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    if args.list:
        show_probes()
        return 0
    if args.show_config:
        show_config()
        return 0

    parser.print_help(sys.stderr)
    return 3


if __name__ == '__main__':
    sys.exit(main())
