"""
Playback sequencer

Drives an ordered queue of tracks through the single-track player, one at a
time. A track that cannot be resolved or played is reported and skipped;
only the absence of any audio player aborts the whole sequence.

The stop flag of the PlaybackSession is checked between tracks. A stop
requested while a track is playing also terminates that track's player
(see PlaybackSession.cancel), so the sequence ends without starting the
next track.
"""

from typing import Callable, Optional, Sequence

from ..exceptions import NoPlayerError
from ..playlists.models import Track
from ..utils.logger import get_logger
from .discovery import discover_player
from .models import OutcomeStatus, SequenceReport, TrackFailure
from .player import TrackPlayer
from .session import PlaybackSession


logger = get_logger(__name__)


class PlaybackSequencer:
    """Plays queues of tracks with per-track failure isolation"""

    def __init__(self, resolver=None, player: Optional[TrackPlayer] = None,
                 discover: Optional[Callable[[], Optional[str]]] = None):
        """
        Initialize the sequencer

        Args:
            resolver: Object with `try_resolve(track_id) -> StreamResult`,
                defaults to the global yt-dlp stream resolver
            player: Single-track player
            discover: Player discovery function
        """
        if resolver is None:
            from ..youtube.stream import get_stream_resolver
            resolver = get_stream_resolver()
        self.resolver = resolver
        self.player = player or TrackPlayer()
        self.discover = discover or discover_player

    def play_sequence(
        self,
        tracks: Sequence[Track],
        start_index: int = 0,
        session: Optional[PlaybackSession] = None,
        player_name: Optional[str] = None
    ) -> SequenceReport:
        """
        Play `tracks[start_index:]` in order

        Args:
            tracks: Queue to play
            start_index: First queue position to play
            session: Session carrying the stop flag and live process slot
            player_name: Player to use, discovered when not given

        Returns:
            SequenceReport of what was attempted, played and skipped

        Raises:
            NoPlayerError: If the queue is non-empty and no player is available
        """
        session = session or PlaybackSession()
        tracks = list(tracks)
        report = SequenceReport()
        start_index = max(0, start_index)

        if start_index >= len(tracks):
            return report

        if player_name is None:
            player_name = self.discover()
        if not player_name:
            logger.error("No audio player found, cannot start playback")
            raise NoPlayerError()
        report.player = player_name

        session.queue = tracks
        total = len(tracks)

        for index in range(start_index, total):
            if session.stop_requested:
                break

            session.position = index
            track = tracks[index]
            report.attempted.append(index)

            url = self._get_url(track, index, report)
            if url is None:
                continue

            # Ctrl+C may have arrived during stream resolution
            if session.stop_requested:
                break

            logger.console_info(f"Now playing ({index + 1}/{total}): {track.title}")
            outcome = self.player.play(player_name, url, session=session)

            if outcome.status == OutcomeStatus.FAILED:
                logger.console_error(f"Playback failed for {track.title}: {outcome.error}")
                report.failures.append(TrackFailure(index, track.title, outcome.error))
            elif outcome.status == OutcomeStatus.COMPLETED:
                report.played.append(index)
                if outcome.exit_code:
                    logger.debug(f"Player exited with code {outcome.exit_code} for {track.title}")
            else:
                logger.debug(f"Playback of {track.title} was stopped")

        report.stopped = session.stop_requested
        return report

    def _get_url(self, track: Track, index: int, report: SequenceReport) -> Optional[str]:
        """Stored URL, or a freshly resolved one; failures are recorded in `report`"""
        if not track.is_playable:
            logger.console_warning(f"No playable URL for {track.title}, skipping.")
            report.failures.append(TrackFailure(index, track.title, "No playable URL"))
            return None

        if track.url:
            return track.url

        result = self.resolver.try_resolve(track.id)
        if result.success:
            return result.url
        logger.console_error(f"Failed to get stream for {track.title}: {result.error}")
        report.failures.append(TrackFailure(index, track.title, result.error))
        return None

