"""
AFS Monitor - health-check probes for AFS servers.

Each probe runs one AFS diagnostic command against a server, classifies
its output and prints a single monitoring-plugin status line.
"""

from .__version__ import __version__

__all__ = ['__version__']
