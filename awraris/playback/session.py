"""
Playback session state and interrupt handling

A PlaybackSession is the single owner of the live player process while a
queue is being played. Stopping is cooperative: `cancel()` raises the stop
flag, which the sequencer checks between tracks, and terminates the live
process so the sequencer's wait returns immediately.
"""

import signal
import threading
from contextlib import contextmanager
from typing import Any, List, Optional

from ..utils.logger import get_logger


logger = get_logger(__name__)


class PlaybackSession:
    """
    Ephemeral state of one playback run

    Attributes:
        queue: Tracks being played
        position: Index of the track currently playing or about to play
        current_process: The one live player process, None between tracks
    """

    def __init__(self):
        self.queue: List[Any] = []
        self.position = 0
        self.current_process = None
        self._stop_event = threading.Event()
        # Reentrant: the SIGINT handler calls cancel() on the thread that may hold it
        self._lock = threading.RLock()

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def attach(self, process) -> None:
        """
        Register the live player process

        If a stop was requested before the process was registered, it is
        terminated right away.

        Raises:
            RuntimeError: If another process is still attached and running
        """
        with self._lock:
            if self.current_process is not None and self.current_process.poll() is None:
                raise RuntimeError("A player process is already running in this session")
            self.current_process = process
            if self._stop_event.is_set():
                self._terminate(process)

    def clear(self, process=None) -> None:
        """Forget the live process (only if it is `process`, when given)"""
        with self._lock:
            if process is None or self.current_process is process:
                self.current_process = None

    def cancel(self) -> None:
        """
        Request a stop

        Sets the stop flag and terminates the live process, if any. Calling it
        again, or after the process has ended, has no further effect.
        """
        self._stop_event.set()
        with self._lock:
            process = self.current_process
            if process is not None:
                self._terminate(process)

    def _terminate(self, process) -> None:
        if process.poll() is not None:
            return
        try:
            process.terminate()
            logger.debug(f"Sent termination request to player process {getattr(process, 'pid', '?')}")
        except OSError as e:
            # Process exited between poll() and terminate()
            logger.debug(f"Could not terminate player process: {e}")


@contextmanager
def interrupt_handler(session: PlaybackSession, message: str = "Stopping playback..."):
    """
    Route Ctrl+C to `session.cancel()` while the block runs

    The previous SIGINT handler is restored on exit. Outside the main thread
    signal handlers cannot be installed and the block runs unchanged.
    """
    def _on_interrupt(signum, frame):
        logger.console_info(message)
        session.cancel()

    installed = True
    try:
        previous = signal.signal(signal.SIGINT, _on_interrupt)
    except ValueError:
        logger.debug("Not in the main thread, Ctrl+C handler not installed")
        installed = False

    try:
        yield session
    finally:
        if installed:
            signal.signal(signal.SIGINT, previous)
