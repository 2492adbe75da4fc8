"""
Single-track player

Spawns the discovered command-line player against one stream URL and waits
for it. Each player gets its own argument vector and stdio wiring; anything
unknown is called as `<player> <url>`.

`TrackPlayer.play()` never raises for a track that cannot be played: spawn
errors come back as a FAILED outcome so the sequencer can move on.
"""

import subprocess
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..utils.logger import get_logger
from .models import PlaybackOutcome, PlayerErrorKind
from .session import PlaybackSession


logger = get_logger(__name__)


@dataclass
class PlayerCommand:
    """Argument vector and stdio wiring for one player invocation"""
    args: List[str]
    stdin: int = subprocess.DEVNULL
    stdout: int = subprocess.DEVNULL
    stderr: int = subprocess.DEVNULL

    @property
    def streams_stderr(self) -> bool:
        return self.stderr == subprocess.PIPE


def build_player_args(player: str, url: str) -> List[str]:
    """
    Arguments passed to `player` (without the executable itself)

    aplay reads raw PCM from stdin and gets no URL at all.
    """
    if player == 'cvlc':
        return [url, '--intf', 'dummy', '--play-and-exit']
    if player == 'mpv':
        return [url, '--no-video', '--really-quiet']
    if player == 'aplay':
        return ['-f', 'cd']
    # afplay and unknown players
    return [url]


def build_player_command(player: str, url: str) -> PlayerCommand:
    """Full command for playing `url` with `player`"""
    command = PlayerCommand(args=[player] + build_player_args(player, url))
    if player == 'aplay':
        command.stdin = subprocess.PIPE
        command.stderr = subprocess.PIPE
    return command


def classify_spawn_error(player: str, error: OSError) -> PlaybackOutcome:
    """Turn a spawn failure into a FAILED outcome with a user-facing message"""
    if isinstance(error, FileNotFoundError):
        return PlaybackOutcome.failed(
            f"Audio player '{player}' not found. Is it installed and on your PATH?",
            PlayerErrorKind.NOT_FOUND
        )
    if isinstance(error, PermissionError):
        return PlaybackOutcome.failed(
            f"Permission denied when starting '{player}'",
            PlayerErrorKind.PERMISSION_DENIED
        )
    return PlaybackOutcome.failed(f"Audio player error: {error}", PlayerErrorKind.OTHER)


class PlayerHandle:
    """
    A running player process

    `wait()` settles the outcome exactly once; later calls return the same
    outcome without touching the process again.
    """

    def __init__(self, process, session: Optional[PlaybackSession] = None):
        self.process = process
        self.session = session
        self._outcome: Optional[PlaybackOutcome] = None
        self._lock = threading.Lock()
        self._stderr_thread: Optional[threading.Thread] = None

        if getattr(process, 'stderr', None) is not None:
            self._stderr_thread = threading.Thread(
                target=self._pump_stderr, name='player-stderr', daemon=True
            )
            self._stderr_thread.start()

    def _pump_stderr(self) -> None:
        """Show the player's error output to the user as it arrives"""
        try:
            for raw_line in iter(self.process.stderr.readline, b''):
                line = raw_line.decode('utf-8', errors='replace').rstrip() if isinstance(raw_line, bytes) else raw_line.rstrip()
                if line:
                    logger.console_error(f"Player error: {line}")
        except (OSError, ValueError) as e:
            logger.debug(f"Stopped reading player stderr: {e}")

    def _settle(self, returncode: Optional[int]) -> PlaybackOutcome:
        stopped = self.session is not None and self.session.stop_requested
        if stopped or (returncode is not None and returncode < 0):
            return PlaybackOutcome.killed(returncode)
        return PlaybackOutcome.completed(returncode)

    def wait(self) -> PlaybackOutcome:
        """Block until the process ends and return its outcome"""
        with self._lock:
            if self._outcome is not None:
                return self._outcome

            try:
                returncode = self.process.wait()
            except OSError as e:
                self._outcome = PlaybackOutcome.failed(f"Audio player error: {e}")
            else:
                self._outcome = self._settle(returncode)
            finally:
                self._cleanup()

            return self._outcome

    def _cleanup(self) -> None:
        if self.session is not None:
            self.session.clear(self.process)
        stdin = getattr(self.process, 'stdin', None)
        if stdin is not None:
            try:
                stdin.close()
            except OSError as e:
                logger.debug(f"Could not close player stdin: {e}")
        if self._stderr_thread is not None:
            self._stderr_thread.join(timeout=1)


class TrackPlayer:
    """Plays one URL at a time through an external player"""

    def __init__(self, popen: Callable = subprocess.Popen):
        """
        Args:
            popen: subprocess.Popen compatible factory (injectable for tests)
        """
        self.popen = popen

    def start(self, player: str, url: str, session: Optional[PlaybackSession] = None) -> PlayerHandle:
        """
        Spawn the player and register it with the session

        Raises:
            OSError: If the process cannot be spawned
        """
        command = build_player_command(player, url)
        logger.debug(f"Starting player: {player} ({len(command.args) - 1} args)")

        process = self.popen(
            command.args,
            stdin=command.stdin,
            stdout=command.stdout,
            stderr=command.stderr
        )

        if session is not None:
            try:
                session.attach(process)
            except RuntimeError:
                process.terminate()
                raise

        return PlayerHandle(process, session)

    def play(self, player: str, url: str, session: Optional[PlaybackSession] = None) -> PlaybackOutcome:
        """
        Play `url` to the end

        Returns:
            COMPLETED with the exit code, KILLED after a stop request, or
            FAILED when the player could not be started
        """
        try:
            handle = self.start(player, url, session)
        except OSError as e:
            logger.debug(f"Failed to spawn {player}: {e}")
            return classify_spawn_error(player, e)

        outcome = handle.wait()
        logger.debug(f"Player {player} finished: {outcome.status.value} (exit code {outcome.exit_code})")
        return outcome
