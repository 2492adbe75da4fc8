"""
Data models for playlists and stored tracks

Playlists are persisted as plain JSON, so every model knows how to build
itself from a dictionary (`from_dict`) and how to serialize back (`to_dict`).
Keys use the camelCase spelling of the on-disk format (`addedAt`, `createdAt`)
so files written by earlier versions of the tool keep loading.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


@dataclass
class Track:
    """
    A playable unit stored in a playlist or queued for playback

    A track needs either an `id` (resolved on demand through the stream
    resolver) or a pre-resolved `url`. A track with neither is unplayable
    and is skipped by the sequencer.

    Attributes:
        title: Display string
        id: Opaque YouTube video id, None when only a URL is known
        url: Pre-resolved direct stream URL
        added_at: ISO timestamp set when the track was appended to a playlist
    """
    title: str
    id: Optional[str] = None
    url: Optional[str] = None
    added_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Track':
        """Build a track from its JSON representation"""
        return cls(
            title=data.get('title') or 'Unknown Title',
            id=data.get('id') or None,
            url=data.get('url') or None,
            added_at=data.get('addedAt'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON representation, omitting empty optional fields"""
        data: Dict[str, Any] = {}
        if self.id:
            data['id'] = self.id
        data['title'] = self.title
        if self.url:
            data['url'] = self.url
        if self.added_at:
            data['addedAt'] = self.added_at
        return data

    @property
    def is_playable(self) -> bool:
        """True if the track has a URL or an id to resolve one from"""
        return bool(self.url or self.id)


@dataclass
class Playlist:
    """
    A named, ordered collection of tracks

    Track order is playback order; continuation resumes after a position
    in this list.

    Attributes:
        id: Generated at creation, stable and unique
        name: User supplied, not necessarily unique
        tracks: Ordered tracks
        created_at: ISO timestamp of creation
    """
    id: str
    name: str
    tracks: List[Track] = field(default_factory=list)
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Playlist':
        """Build a playlist from its JSON representation"""
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            tracks=[Track.from_dict(t) for t in data.get('tracks') or []],
            created_at=data.get('createdAt'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'tracks': [track.to_dict() for track in self.tracks],
            'createdAt': self.created_at,
        }

    def matches(self, id_or_name: str) -> bool:
        """True if the playlist's id or name equals the given key"""
        return self.id == id_or_name or self.name == id_or_name

    def index_of(self, track_id: str) -> int:
        """
        Position of the first track carrying the given id

        Returns:
            Zero-based index, or -1 if no track has that id
        """
        for index, track in enumerate(self.tracks):
            if track.id and track.id == track_id:
                return index
        return -1
