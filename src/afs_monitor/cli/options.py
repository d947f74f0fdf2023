"""
Command-line options shared by every probe.

build_parser() adds the common flags, then lets the probe add its own.
build_config() turns parsed arguments into a validated, immutable
ProbeConfig before anything is run.
"""

import argparse
import math
from typing import Optional, Type

from ..__version__ import __version__
from ..core.errors import ConfigurationError
from ..core.models import ProbeConfig, Target, Thresholds
from ..probes.base import Probe


class ProbeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigurationError instead of exiting 2."""

    def error(self, message):
        raise ConfigurationError(message)


def build_parser(probe: Type[Probe], prog: Optional[str] = None) -> ProbeArgumentParser:
    """Create the argument parser for a probe."""
    parser = ProbeArgumentParser(
        prog=prog,
        description=probe.description,
    )
    parser.add_argument('-H', '--hostname', required=True,
                        help="Server to check")
    parser.add_argument('-t', '--timeout', type=float, default=probe.default_timeout,
                        help=f"Seconds to wait for {probe.binary} (default {probe.default_timeout:g})")
    if probe.default_thresholds is not None:
        parser.add_argument('-w', '--warning', type=int,
                            default=probe.default_thresholds.warning,
                            help=f"Warning threshold (default {probe.default_thresholds.warning:g})")
        parser.add_argument('-c', '--critical', type=int,
                            default=probe.default_thresholds.critical,
                            help=f"Critical threshold (default {probe.default_thresholds.critical:g})")
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help="Log to stderr (-v info, -vv debug)")
    parser.add_argument('-V', '--version', action='version',
                        version=f"%(prog)s {__version__}")

    probe.add_arguments(parser)
    return parser


def build_config(probe: Type[Probe], args: argparse.Namespace) -> ProbeConfig:
    """
    Validate parsed arguments and build the ProbeConfig.

    Raises:
        ConfigurationError: empty host, bad port, non-positive timeout
            or warning above critical
    """
    host = args.hostname.strip()
    if not host:
        raise ConfigurationError("hostname must not be empty")

    target = Target(host=host, **probe.target_options(args))
    if target.port is not None and not 0 < target.port < 65536:
        raise ConfigurationError(f"invalid port: {target.port}")

    if not math.isfinite(args.timeout) or args.timeout <= 0:
        raise ConfigurationError(f"timeout must be a positive number of seconds, got {args.timeout:g}")

    thresholds = None
    if probe.default_thresholds is not None:
        thresholds = Thresholds(warning=args.warning, critical=args.critical)
        if not thresholds.is_valid():
            raise ConfigurationError(
                f"warning threshold {args.warning} is greater than critical threshold {args.critical}")

    return ProbeConfig(
        target=target,
        thresholds=thresholds,
        timeout=args.timeout,
        perfdata=getattr(args, 'perfdata', False),
        noauth=getattr(args, 'noauth', False),
        expected_addresses=frozenset(getattr(args, 'addr', None) or ()),
        verbose=args.verbose,
    )
