"""
AFS probes.

Each probe runs one AFS diagnostic tool and classifies its output.
"""

from .base import Probe
from .bos import BosProbe
from .rxdebug import RxdebugProbe
from .space import SpaceProbe
from .udebug import UdebugProbe
from .vldb import VldbProbe

# Probe name -> class, in the order shown by `afs-monitor --list`
PROBES = {
    probe.name: probe
    for probe in (RxdebugProbe, SpaceProbe, BosProbe, UdebugProbe, VldbProbe)
}


def get_probe(name: str):
    """Look up a probe class by name. Returns None if unknown."""
    return PROBES.get(name)


__all__ = [
    'Probe', 'BosProbe', 'RxdebugProbe', 'SpaceProbe', 'UdebugProbe',
    'VldbProbe', 'PROBES', 'get_probe',
]
