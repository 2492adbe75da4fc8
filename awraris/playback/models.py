"""
Result values produced by the playback engine

A track that fails to play is an ordinary outcome, not an exception: the
sequencer inspects these values and moves on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class OutcomeStatus(Enum):
    """How a single player process ended"""
    COMPLETED = "completed"  # Process exited on its own
    FAILED = "failed"        # Process could not be spawned or errored
    KILLED = "killed"        # Process was terminated by a stop request


class PlayerErrorKind(Enum):
    """Classification of spawn-level player errors"""
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    OTHER = "other"


@dataclass
class PlaybackOutcome:
    """
    Outcome of playing one URL through one player process

    Attributes:
        status: How the process ended
        exit_code: Process return code (None when it never started)
        error: Human-readable error for FAILED outcomes
        error_kind: Spawn error classification for FAILED outcomes
    """
    status: OutcomeStatus
    exit_code: Optional[int] = None
    error: Optional[str] = None
    error_kind: Optional[PlayerErrorKind] = None

    @classmethod
    def completed(cls, exit_code: int) -> 'PlaybackOutcome':
        return cls(status=OutcomeStatus.COMPLETED, exit_code=exit_code)

    @classmethod
    def failed(cls, error: str, error_kind: PlayerErrorKind = PlayerErrorKind.OTHER,
               exit_code: Optional[int] = None) -> 'PlaybackOutcome':
        return cls(status=OutcomeStatus.FAILED, exit_code=exit_code, error=error, error_kind=error_kind)

    @classmethod
    def killed(cls, exit_code: Optional[int] = None) -> 'PlaybackOutcome':
        return cls(status=OutcomeStatus.KILLED, exit_code=exit_code)

    @property
    def succeeded(self) -> bool:
        """True when the player ran to the end with exit status 0"""
        return self.status == OutcomeStatus.COMPLETED and self.exit_code == 0


@dataclass
class TrackFailure:
    """A track the sequencer could not play, and why"""
    index: int
    title: str
    reason: str


@dataclass
class SequenceReport:
    """
    Summary of one `play_sequence` call

    Attributes:
        attempted: Queue indices the sequencer started working on, in order
        played: Indices whose player process was started and ended on its own
        failures: Tracks skipped because of resolution or playback failures
        stopped: True when a stop request ended the sequence early
        player: Name of the player used for the sequence
    """
    player: Optional[str] = None
    attempted: List[int] = field(default_factory=list)
    played: List[int] = field(default_factory=list)
    failures: List[TrackFailure] = field(default_factory=list)
    stopped: bool = False

    @property
    def failed_indices(self) -> List[int]:
        return [failure.index for failure in self.failures]
