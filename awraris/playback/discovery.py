"""
Audio player discovery

Probes a short, platform-specific list of command-line players and returns
the first one that answers `--version` with exit status 0.
"""

import subprocess
import sys
from typing import Callable, Dict, List, Optional

from ..config.settings import get_settings
from ..utils.logger import get_logger


logger = get_logger(__name__)

# Candidate players per platform, in probe order
PLAYER_CANDIDATES: Dict[str, List[str]] = {
    'darwin': ['afplay', 'cvlc', 'mpv'],
    'linux': ['cvlc', 'mpv', 'aplay'],
    'win32': ['cvlc', 'mpv'],
}

FALLBACK_PLATFORM = 'linux'


def get_candidates(platform: Optional[str] = None, preferred: Optional[str] = None) -> List[str]:
    """
    Ordered list of player names to probe

    Args:
        platform: sys.platform value, defaults to the running platform
        preferred: Player to try first (from settings), if any

    Returns:
        Candidate names without duplicates
    """
    platform = platform or sys.platform
    candidates = list(PLAYER_CANDIDATES.get(platform, PLAYER_CANDIDATES[FALLBACK_PLATFORM]))

    if preferred:
        candidates = [preferred] + [name for name in candidates if name != preferred]

    return candidates


def probe_player(name: str, timeout: float = 5, runner: Callable = subprocess.run) -> bool:
    """
    Check whether a player executable responds to a version check

    Never raises: a missing executable, a timeout or a non-zero exit all
    count as "not available".
    """
    try:
        result = runner(
            [name, '--version'],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Player probe {name} failed: {e}")
        return False

    if result.returncode != 0:
        logger.debug(f"Player probe {name} exited with {result.returncode}")
        return False

    return True


def discover_player(
    platform: Optional[str] = None,
    preferred: Optional[str] = None,
    runner: Callable = subprocess.run
) -> Optional[str]:
    """
    Find a usable audio player

    Args:
        platform: sys.platform value, defaults to the running platform
        preferred: Player to try first, defaults to `player.preferred` from settings
        runner: subprocess.run compatible callable (injectable for tests)

    Returns:
        Name of the first player that answered, or None if none did
    """
    settings = get_settings()
    if preferred is None:
        preferred = settings.player.preferred

    for name in get_candidates(platform, preferred):
        if probe_player(name, timeout=settings.player.probe_timeout, runner=runner):
            logger.debug(f"Discovered audio player: {name}")
            return name

    logger.info("No audio player found")
    return None
