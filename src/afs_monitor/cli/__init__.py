"""Command-line entry points for the AFS probes."""
