"""Test configuration and fixtures"""

import pytest
import tempfile
from pathlib import Path
from unittest.mock import Mock

from awraris.playlists.models import Track
from awraris.playlists.store import PlaylistStore
from awraris.youtube.models import StreamResult


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def store(temp_dir):
    """Playlist store on a temporary file"""
    return PlaylistStore(temp_dir / "playlists.json")


class FakeProcess:
    """
    Stand-in for subprocess.Popen

    `wait()` returns `returncode` unless the process was terminated, in which
    case it returns -15 like a SIGTERM'd child.
    """

    def __init__(self, args, returncode=0, on_wait=None, **kwargs):
        self.args = args
        self.kwargs = kwargs
        self.pid = 4242
        self.stdin = None
        self.stderr = None
        self._final_code = returncode
        self.returncode = None
        self.terminated = False
        self.wait_calls = 0
        self._on_wait = on_wait

    def poll(self):
        return self.returncode

    def wait(self, timeout=None):
        self.wait_calls += 1
        if self.returncode is None:
            if self._on_wait:
                self._on_wait(self)
            self.returncode = -15 if self.terminated else self._final_code
        return self.returncode

    def terminate(self):
        self.terminated = True


class FakePopen:
    """
    Factory recording every spawned FakeProcess

    Args:
        returncodes: Exit codes handed out in spawn order (0 once exhausted)
        on_wait: Callback run when a process is waited on (simulates "during playback")
        error: Exception raised instead of spawning
    """

    def __init__(self, returncodes=None, on_wait=None, error=None):
        self.returncodes = list(returncodes or [])
        self.on_wait = on_wait
        self.error = error
        self.processes = []

    def __call__(self, args, **kwargs):
        if self.error is not None:
            raise self.error
        code = self.returncodes.pop(0) if self.returncodes else 0
        process = FakeProcess(args, returncode=code, on_wait=self.on_wait, **kwargs)
        self.processes.append(process)
        return process

    @property
    def urls(self):
        return [process.args[1] for process in self.processes]


@pytest.fixture
def resolver():
    """Stream resolver mock resolving every id to https://stream/<id>"""
    resolver = Mock()
    resolver.try_resolve.side_effect = lambda video_id: StreamResult(
        track_id=video_id, url=f"https://stream/{video_id}"
    )
    return resolver


@pytest.fixture
def sample_tracks():
    """Three resolvable tracks"""
    return [
        Track(title="Track A", id="a"),
        Track(title="Track B", id="b"),
        Track(title="Track C", id="c"),
    ]


@pytest.fixture
def make_popen():
    """FakePopen factory class, called with returncodes/on_wait/error"""
    return FakePopen


@pytest.fixture
def make_process():
    """FakeProcess class, called with args and an optional returncode"""
    return FakeProcess
