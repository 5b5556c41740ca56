import asyncio
import logging
import os
import subprocess
import threading
from pathlib import Path
from typing import Dict, Sequence, Union

from models import SyncResult

logger = logging.getLogger(__name__)

DEFAULT_SYNC_COMMAND = ("git", "pull")
DEFAULT_SYNC_TIMEOUT = 120.0

UP_TO_DATE_MARKER = "Already up to date."
UPDATED_MARKER = "Updating"

class SyncExecutionError(RuntimeError):
    """The pull command could not be run, timed out, or printed something unreadable.

    This is different from a FAILED SyncResult, which means git ran and refused.
    """

# One lock per working copy so two deliveries never pull into the same
# checkout at the same time.
_path_locks: Dict[str, threading.Lock] = {}
_path_locks_guard = threading.Lock()

def _lock_for(path: Path) -> threading.Lock:
    key = os.path.realpath(path)
    with _path_locks_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _path_locks[key] = threading.Lock()
        return lock

def classify_pull_output(output: str) -> SyncResult:
    """Map git's human readable pull output to a SyncResult.

    First match wins and matching is case sensitive. Anything unrecognised is
    a failure carrying the full text, e.g. the "divergent branches" hint.
    """
    if UP_TO_DATE_MARKER in output:
        return SyncResult.up_to_date()
    if UPDATED_MARKER in output:
        return SyncResult.success()
    return SyncResult.failed(output)

def pull_repository(
    path: Union[str, Path],
    command: Sequence[str] = DEFAULT_SYNC_COMMAND,
    timeout: float = DEFAULT_SYNC_TIMEOUT,
) -> SyncResult:
    """Run the pull command inside path and classify what it printed.

    stdout is classified when the command exits 0, stderr otherwise.
    Blocks until the command exits; calls for the same path are serialized.
    """
    path = Path(path)
    # git translates its messages, the markers above are the C locale ones
    env = {**os.environ, "LC_ALL": "C"}

    with _lock_for(path):
        logger.debug(f"Running {' '.join(command)} in {path}")
        try:
            completed = subprocess.run(
                list(command),
                cwd=path,
                env=env,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SyncExecutionError(
                f"{' '.join(command)} did not finish within {timeout:g} seconds"
            ) from e
        except OSError as e:
            raise SyncExecutionError(f"Could not run {' '.join(command)} in {path}: {e}") from e

    stream = completed.stdout if completed.returncode == 0 else completed.stderr
    try:
        output = stream.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SyncExecutionError(f"Output of {' '.join(command)} is not valid UTF-8: {e}") from e

    return classify_pull_output(output)

async def run_pull(
    path: Union[str, Path],
    command: Sequence[str] = DEFAULT_SYNC_COMMAND,
    timeout: float = DEFAULT_SYNC_TIMEOUT,
) -> SyncResult:
    """Run pull_repository on a worker thread so the event loop keeps serving.

    The per-path lock is taken on the worker thread, so a delivery queued
    behind N others holds an executor thread while it waits and may wait
    up to N * timeout before its own pull starts. timeout bounds the pull,
    not the wait.
    """
    return await asyncio.to_thread(pull_repository, path, command, timeout)
