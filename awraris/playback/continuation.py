"""
Playlist continuation

When a single track played on demand belongs to a saved playlist, playback
carries on with the rest of that playlist. Only the first playlist holding
the track is used. Continuation is best-effort: any failure here ends
playback quietly and never changes the outcome of the track already played.
"""

from typing import Optional, Tuple

from ..playlists.models import Playlist, Track
from ..utils.logger import get_logger
from .models import SequenceReport
from .session import PlaybackSession
from .sequencer import PlaybackSequencer


logger = get_logger(__name__)


class PlaylistContinuation:
    """Resumes saved playlists after an ad-hoc track"""

    def __init__(self, store=None, sequencer: Optional[PlaybackSequencer] = None):
        if store is None:
            from ..playlists.store import get_playlist_store
            store = get_playlist_store()
        self.store = store
        self.sequencer = sequencer or PlaybackSequencer()

    def find_continuation(self, track_id: str) -> Optional[Tuple[Playlist, int]]:
        """
        Locate where playback should resume

        Returns:
            (playlist, start index) or None when the track is in no playlist
            or is the last track of the first playlist holding it

        Raises:
            PlaylistStoreError: If the playlists file cannot be read
        """
        match = self.store.find_playlist_containing(track_id)
        if match is None:
            return None

        playlist, index = match
        if index + 1 >= len(playlist.tracks):
            return None

        return playlist, index + 1

    def continue_after(
        self,
        track_id: Optional[str],
        session: Optional[PlaybackSession] = None,
        player_name: Optional[str] = None
    ) -> Optional[SequenceReport]:
        """
        Play the remainder of the playlist containing `track_id`

        Returns:
            Report of the continuation, or None when nothing was continued
        """
        if not track_id:
            return None
        if session is not None and session.stop_requested:
            return None

        try:
            continuation = self.find_continuation(track_id)
            if continuation is None:
                return None

            playlist, start_index = continuation
            logger.console_info(f'Continuing playlist "{playlist.name}" after current track...')
            return self.sequencer.play_sequence(
                playlist.tracks, start_index, session=session, player_name=player_name
            )
        except Exception as e:
            logger.debug(f"Playlist continuation skipped: {e}")
            return None


def play_with_continuation(
    track: Track,
    sequencer: PlaybackSequencer,
    continuation: PlaylistContinuation,
    session: Optional[PlaybackSession] = None
) -> Tuple[SequenceReport, Optional[SequenceReport]]:
    """
    Play one ad-hoc track, then continue its playlist if it has one

    Raises:
        NoPlayerError: If no audio player is available for the track itself
    """
    session = session or PlaybackSession()
    report = sequencer.play_sequence([track], 0, session=session)
    if report.stopped:
        return report, None

    continued = continuation.continue_after(track.id, session=session, player_name=report.player)
    return report, continued
