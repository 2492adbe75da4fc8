"""
Playback package

Player discovery, the single-track player, the queue sequencer and
playlist continuation.
"""

from .models import OutcomeStatus, PlaybackOutcome, PlayerErrorKind, SequenceReport, TrackFailure
from .discovery import discover_player, get_candidates, PLAYER_CANDIDATES
from .player import TrackPlayer, PlayerHandle, build_player_args, build_player_command
from .session import PlaybackSession, interrupt_handler
from .sequencer import PlaybackSequencer
from .continuation import PlaylistContinuation, play_with_continuation

__all__ = [
    'OutcomeStatus',
    'PlaybackOutcome',
    'PlayerErrorKind',
    'SequenceReport',
    'TrackFailure',
    'discover_player',
    'get_candidates',
    'PLAYER_CANDIDATES',
    'TrackPlayer',
    'PlayerHandle',
    'build_player_args',
    'build_player_command',
    'PlaybackSession',
    'interrupt_handler',
    'PlaybackSequencer',
    'PlaylistContinuation',
    'play_with_continuation'
]
