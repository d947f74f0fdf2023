"""
Timed command invocation.

Runs one external diagnostic command with a hard wall-clock deadline.
A timer cancels the specific child (its whole process group) when the
deadline passes; there is no process-wide alarm handler.

The timer and the normal completion path race to claim the outcome
through a latch, so exactly one of them decides how the run ended.

Usage:
    from afs_monitor.core.runner import run_command

    captured = run_command(['rxdebug', 'fs1', '7000', '-noconns'], timeout=10)
    for line in captured.lines:
        ...
"""

import logging
import os
import shlex
import signal
import subprocess
import threading
import time
from typing import Optional, Sequence

from .errors import InvocationTimeout, LaunchFailure
from .models import CapturedOutput

logger = logging.getLogger(__name__)

COMPLETED = "completed"
TIMED_OUT = "timed_out"


class OutcomeLatch:
    """First-writer-wins record of how an invocation ended."""

    def __init__(self):
        self._lock = threading.Lock()
        self._outcome: Optional[str] = None

    def claim(self, outcome: str) -> bool:
        """Record outcome if nothing has been recorded yet. Returns True if this call won."""
        with self._lock:
            if self._outcome is not None:
                return False
            self._outcome = outcome
            return True

    @property
    def outcome(self) -> Optional[str]:
        with self._lock:
            return self._outcome


def _kill(proc: subprocess.Popen) -> None:
    """Kill the child and anything it spawned into its session."""
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    except OSError as e:
        logger.debug(f"killpg failed for pid {proc.pid}: {e}; killing child only")
        try:
            proc.kill()
        except ProcessLookupError:
            pass


def run_command(argv: Sequence[str], timeout: float) -> CapturedOutput:
    """
    Run a command, capturing merged stdout/stderr as lines.

    Args:
        argv: Command and arguments (no shell involved)
        timeout: Deadline in seconds

    Returns:
        CapturedOutput with the lines and the child's exit status

    Raises:
        LaunchFailure: the binary could not be started
        InvocationTimeout: the deadline passed first; the child is killed
            and reaped, and no partial output is returned
    """
    argv = [str(arg) for arg in argv]
    name = os.path.basename(argv[0])
    logger.debug(f"Running (timeout {timeout}s): {shlex.join(argv)}")

    started = time.monotonic()
    try:
        proc = subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors='replace',
            start_new_session=True,
        )
    except FileNotFoundError:
        logger.warning(f"Command not found: {argv[0]}")
        raise LaunchFailure(f"cannot execute {argv[0]}: not found")
    except PermissionError:
        logger.warning(f"Command not executable: {argv[0]}")
        raise LaunchFailure(f"cannot execute {argv[0]}: permission denied")
    except OSError as e:
        logger.warning(f"Failed to start {argv[0]}: {e}")
        raise LaunchFailure(f"cannot execute {argv[0]}: {e.strerror or e}")

    latch = OutcomeLatch()

    def expire():
        if latch.claim(TIMED_OUT):
            logger.warning(f"{name} exceeded {timeout}s deadline, killing pid {proc.pid}")
            _kill(proc)

    timer = threading.Timer(timeout, expire)
    timer.daemon = True
    timer.start()
    try:
        output, _ = proc.communicate()
        completed = latch.claim(COMPLETED)
    finally:
        timer.cancel()

    duration = time.monotonic() - started

    if not completed:
        # communicate() already reaped the killed child
        raise InvocationTimeout(name, timeout)

    lines = tuple(output.splitlines()) if output else ()
    logger.debug(f"{name} exited {proc.returncode} after {duration:.2f}s with {len(lines)} lines")

    return CapturedOutput(
        command=tuple(argv),
        lines=lines,
        returncode=proc.returncode,
        duration=duration,
    )
