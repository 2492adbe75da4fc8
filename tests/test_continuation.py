"""Test playlist continuation after an ad-hoc track"""

from unittest.mock import Mock

from awraris.exceptions import PlaylistStoreError
from awraris.playback.continuation import PlaylistContinuation, play_with_continuation
from awraris.playback.player import TrackPlayer
from awraris.playback.sequencer import PlaybackSequencer
from awraris.playback.session import PlaybackSession
from awraris.playlists.models import Track


def build(store, resolver, popen):
    discover = Mock(return_value='mpv')
    sequencer = PlaybackSequencer(resolver=resolver, player=TrackPlayer(popen=popen), discover=discover)
    return PlaylistContinuation(store, sequencer), sequencer, discover


def fill(store, name, ids):
    store.create_playlist(name)
    for track_id in ids:
        store.add_track(name, Track(title=f"t{track_id}", id=track_id))


class TestContinuation:
    """Test continue_after"""

    def test_continues_after_matched_track(self, store, resolver, make_popen):
        fill(store, "road-trip", ['1', '2', '3'])
        popen = make_popen()
        continuation, _, _ = build(store, resolver, popen)

        report = continuation.continue_after('2', player_name='mpv')

        assert popen.urls == ['https://stream/3']
        assert report.played == [2]

    def test_last_track_triggers_nothing(self, store, resolver, make_popen):
        fill(store, "road-trip", ['1', '2', '3'])
        popen = make_popen()
        continuation, _, _ = build(store, resolver, popen)

        assert continuation.continue_after('3') is None
        assert popen.processes == []

    def test_unknown_track_triggers_nothing(self, store, resolver, make_popen):
        fill(store, "road-trip", ['1', '2'])
        popen = make_popen()
        continuation, _, _ = build(store, resolver, popen)

        assert continuation.continue_after('zzz') is None
        assert popen.processes == []

    def test_only_first_containing_playlist_is_used(self, store, resolver, make_popen):
        fill(store, "first", ['x', '1', '2'])
        fill(store, "second", ['x', '9'])
        popen = make_popen()
        continuation, _, _ = build(store, resolver, popen)

        continuation.continue_after('x')

        assert popen.urls == ['https://stream/1', 'https://stream/2']

    def test_store_failure_is_swallowed(self, resolver, make_popen):
        broken_store = Mock()
        broken_store.find_playlist_containing.side_effect = PlaylistStoreError("Cannot read playlists file")
        popen = make_popen()
        continuation, _, _ = build(broken_store, resolver, popen)

        assert continuation.continue_after('1') is None
        assert popen.processes == []

    def test_corrupt_file_is_swallowed(self, store, resolver, make_popen):
        store.path.write_text("{not json", encoding='utf-8')
        continuation, _, _ = build(store, resolver, make_popen())

        assert continuation.continue_after('1') is None

    def test_stopped_session_does_not_continue(self, store, resolver, make_popen):
        fill(store, "road-trip", ['1', '2', '3'])
        session = PlaybackSession()
        session.cancel()
        popen = make_popen()
        continuation, _, _ = build(store, resolver, popen)

        assert continuation.continue_after('1', session=session) is None
        assert popen.processes == []

    def test_missing_track_id(self, store, resolver, make_popen):
        continuation, _, _ = build(store, resolver, make_popen())
        assert continuation.continue_after(None) is None


class TestPlayWithContinuation:
    """Test the ad-hoc play flow"""

    def test_adhoc_track_then_rest_of_playlist(self, store, resolver, make_popen):
        fill(store, "road-trip", ['1', '2', '3'])
        popen = make_popen()
        continuation, sequencer, discover = build(store, resolver, popen)
        track = Track(title="t2", id='2', url="https://adhoc/2")

        report, continued = play_with_continuation(track, sequencer, continuation)

        assert popen.urls == ['https://adhoc/2', 'https://stream/3']
        assert report.played == [0]
        assert continued.played == [2]
        assert discover.call_count == 1

    def test_failed_adhoc_track_still_continues(self, store, resolver, make_popen):
        fill(store, "road-trip", ['1', '2', '3'])
        popen = make_popen(returncodes=[1, 0])
        continuation, sequencer, _ = build(store, resolver, popen)

        report, continued = play_with_continuation(Track(title="t1", id='1'), sequencer, continuation)

        assert popen.urls == ['https://stream/1', 'https://stream/2', 'https://stream/3']
        assert continued is not None

    def test_stopped_adhoc_track_does_not_continue(self, store, resolver, make_popen):
        fill(store, "road-trip", ['1', '2', '3'])
        session = PlaybackSession()
        popen = make_popen(on_wait=lambda process: session.cancel())
        continuation, sequencer, _ = build(store, resolver, popen)

        report, continued = play_with_continuation(Track(title="t1", id='1'), sequencer, continuation, session)

        assert report.stopped
        assert continued is None
        assert len(popen.processes) == 1

    def test_unreadable_store_leaves_adhoc_outcome_alone(self, resolver, make_popen):
        broken_store = Mock()
        broken_store.find_playlist_containing.side_effect = PlaylistStoreError("boom")
        popen = make_popen()
        continuation, sequencer, _ = build(broken_store, resolver, popen)

        report, continued = play_with_continuation(Track(title="t1", id='1'), sequencer, continuation)

        assert report.played == [0]
        assert continued is None
