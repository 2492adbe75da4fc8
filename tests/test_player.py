"""Test the single-track player and playback session"""

import io
import os
import signal
import subprocess
import sys
import time
from unittest.mock import patch

import pytest

from awraris.playback.models import OutcomeStatus, PlayerErrorKind
from awraris.playback.player import (
    PlayerHandle,
    TrackPlayer,
    build_player_args,
    build_player_command,
)
from awraris.playback.sequencer import PlaybackSequencer
from awraris.playback.session import PlaybackSession, interrupt_handler


def send_interrupt(session):
    """Deliver SIGINT to this process and wait until the handler has run"""
    os.kill(os.getpid(), signal.SIGINT)
    for _ in range(100):
        if session.stop_requested:
            return
        time.sleep(0.01)


def interrupt_on_first_call(poll, session):
    """Wrap `poll` so its first call sends SIGINT before returning"""
    calls = []

    def wrapper():
        if not calls:
            calls.append(True)
            send_interrupt(session)
        return poll()
    return wrapper


class TestArgumentShaping:
    """Test player-specific argument vectors"""

    def test_cvlc(self):
        assert build_player_args('cvlc', 'X') == ['X', '--intf', 'dummy', '--play-and-exit']

    def test_mpv(self):
        assert build_player_args('mpv', 'X') == ['X', '--no-video', '--really-quiet']

    def test_afplay(self):
        assert build_player_args('afplay', 'X') == ['X']

    def test_aplay_gets_no_url(self):
        assert build_player_args('aplay', 'X') == ['-f', 'cd']

    def test_unknown_player(self):
        assert build_player_args('someplayer', 'X') == ['X']

    def test_command_includes_executable(self):
        command = build_player_command('mpv', 'X')
        assert command.args == ['mpv', 'X', '--no-video', '--really-quiet']

    def test_stdio_is_discarded(self):
        for player in ('cvlc', 'mpv', 'afplay', 'other'):
            command = build_player_command(player, 'X')
            assert command.stdin == subprocess.DEVNULL
            assert command.stdout == subprocess.DEVNULL
            assert command.stderr == subprocess.DEVNULL
            assert not command.streams_stderr

    def test_aplay_stdio(self):
        command = build_player_command('aplay', 'X')
        assert command.stdin == subprocess.PIPE
        assert command.stdout == subprocess.DEVNULL
        assert command.stderr == subprocess.PIPE
        assert command.streams_stderr


class TestTrackPlayer:
    """Test spawning and outcomes"""

    def test_completed_outcome(self, make_popen):
        popen = make_popen(returncodes=[0])
        outcome = TrackPlayer(popen=popen).play('mpv', 'https://stream/a')

        assert outcome.status == OutcomeStatus.COMPLETED
        assert outcome.exit_code == 0
        assert outcome.succeeded
        assert popen.processes[0].args == ['mpv', 'https://stream/a', '--no-video', '--really-quiet']

    def test_nonzero_exit_is_completed_not_failed(self, make_popen):
        outcome = TrackPlayer(popen=make_popen(returncodes=[2])).play('mpv', 'u')
        assert outcome.status == OutcomeStatus.COMPLETED
        assert outcome.exit_code == 2
        assert not outcome.succeeded

    def test_missing_executable_is_failed_outcome(self, make_popen):
        popen = make_popen(error=FileNotFoundError("No such file or directory: 'cvlc'"))
        outcome = TrackPlayer(popen=popen).play('cvlc', 'u')

        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.error_kind == PlayerErrorKind.NOT_FOUND
        assert 'cvlc' in outcome.error

    def test_permission_error_is_failed_outcome(self, make_popen):
        popen = make_popen(error=PermissionError("denied"))
        outcome = TrackPlayer(popen=popen).play('mpv', 'u')
        assert outcome.error_kind == PlayerErrorKind.PERMISSION_DENIED

    def test_session_slot_cleared_after_playback(self, make_popen):
        session = PlaybackSession()
        seen = []
        popen = make_popen(on_wait=lambda process: seen.append(session.current_process is process))

        TrackPlayer(popen=popen).play('mpv', 'u', session=session)

        assert seen == [True]
        assert session.current_process is None

    def test_cancel_during_playback_kills_process(self, make_popen):
        session = PlaybackSession()
        popen = make_popen(on_wait=lambda process: session.cancel())

        outcome = TrackPlayer(popen=popen).play('mpv', 'u', session=session)

        assert outcome.status == OutcomeStatus.KILLED
        assert popen.processes[0].terminated

    def test_wait_settles_once(self, make_process):
        process = make_process(['mpv', 'u'], returncode=0)
        handle = PlayerHandle(process)

        first = handle.wait()
        second = handle.wait()

        assert first is second
        assert process.wait_calls == 1

    def test_aplay_stderr_is_shown(self, make_process):
        process = make_process(['aplay', '-f', 'cd'], returncode=0)
        process.stderr = io.BytesIO(b"underrun!!!\n")

        with patch('awraris.playback.player.logger') as mock_logger:
            handle = PlayerHandle(process)
            handle.wait()

        mock_logger.console_error.assert_called_with("Player error: underrun!!!")


class TestPlaybackSession:
    """Test process ownership and cancellation"""

    def test_attach_refuses_second_live_process(self, make_process):
        session = PlaybackSession()
        session.attach(make_process(['mpv']))

        with pytest.raises(RuntimeError):
            session.attach(make_process(['mpv']))

    def test_attach_after_previous_exited(self, make_process):
        session = PlaybackSession()
        first = make_process(['mpv'])
        session.attach(first)
        first.wait()

        second = make_process(['mpv'])
        session.attach(second)
        assert session.current_process is second

    def test_cancel_sets_flag_and_terminates(self, make_process):
        session = PlaybackSession()
        process = make_process(['mpv'])
        session.attach(process)

        session.cancel()

        assert session.stop_requested
        assert process.terminated

    def test_cancel_after_clear_is_noop_for_process(self, make_process):
        session = PlaybackSession()
        process = make_process(['mpv'])
        session.attach(process)
        process.wait()
        session.clear(process)

        session.cancel()

        assert session.stop_requested
        assert not process.terminated

    def test_attach_after_cancel_terminates_immediately(self, make_process):
        session = PlaybackSession()
        session.cancel()
        process = make_process(['mpv'])

        session.attach(process)

        assert process.terminated

    def test_interrupt_handler_restores_previous_handler(self):
        session = PlaybackSession()
        with patch('awraris.playback.session.signal.signal') as mock_signal:
            mock_signal.return_value = 'previous'
            with interrupt_handler(session):
                handler = mock_signal.call_args.args[1]
                handler(2, None)

        assert session.stop_requested
        assert mock_signal.call_args.args[1] == 'previous'


@pytest.mark.skipif(sys.platform == 'win32', reason="SIGINT delivery via os.kill is POSIX only")
class TestInterruptHandling:
    """Test Ctrl+C delivered as a real signal"""

    def test_ctrl_c_during_playback_stops_the_queue(self, resolver, make_popen, sample_tracks):
        session = PlaybackSession()
        popen = make_popen(on_wait=lambda process: send_interrupt(session))
        sequencer = PlaybackSequencer(
            resolver=resolver, player=TrackPlayer(popen=popen), discover=lambda: 'mpv'
        )
        previous = signal.getsignal(signal.SIGINT)

        with interrupt_handler(session):
            report = sequencer.play_sequence(sample_tracks, session=session)

        assert len(popen.processes) == 1
        assert popen.processes[0].terminated
        assert report.stopped
        assert report.attempted == [0]
        assert report.played == []
        assert signal.getsignal(signal.SIGINT) is previous

    def test_ctrl_c_while_session_lock_is_held(self, make_process):
        session = PlaybackSession()
        first = make_process(['mpv'])
        second = make_process(['mpv'])

        with interrupt_handler(session):
            session.attach(first)
            first.wait()
            # attach() polls the previous process under the session lock
            first.poll = interrupt_on_first_call(first.poll, session)
            session.attach(second)

        assert session.stop_requested
        assert session.current_process is second
        assert second.terminated
