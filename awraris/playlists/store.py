"""
JSON playlist store

All playlists live in one JSON document (by default ~/.awraris/playlists.json).
Every mutation reads the whole collection, changes it in memory and rewrites
the whole file. Two processes mutating playlists at the same time can lose
updates; the store only supports sequential access from a single process.
"""

import json
import os
from pathlib import Path
from typing import List, Optional, Tuple

from ..config.settings import get_settings
from ..exceptions import PlaylistStoreError, PlaylistNotFoundError, TrackIndexError
from ..utils.logger import get_logger
from ..utils.helpers import ensure_directory, generate_playlist_id, get_current_timestamp
from .models import Playlist, Track


class PlaylistStore:
    """CRUD over the persisted playlist collection"""

    def __init__(self, path: Optional[Path] = None):
        """
        Initialize the store

        Args:
            path: Location of the JSON file, defaults to the configured storage path
        """
        self.path = Path(path) if path else get_settings().get_playlists_path()
        self.logger = get_logger(__name__)

    def load_playlists(self) -> List[Playlist]:
        """
        Read the full collection

        A missing file is an empty collection. An unreadable or malformed
        file raises, so a later save cannot overwrite data we failed to parse.

        Returns:
            Playlists in file order

        Raises:
            PlaylistStoreError: If the file exists but cannot be read or parsed
        """
        ensure_directory(self.path.parent)
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            if not isinstance(raw, list):
                raise ValueError("top-level value is not a list")
            return [Playlist.from_dict(item) for item in raw]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            self.logger.error(f"Failed to read playlists from {self.path}: {e}")
            raise PlaylistStoreError(
                f"Cannot read playlists file {self.path}: {e}",
                details={'file_path': str(self.path)}
            )

    def save_playlists(self, playlists: List[Playlist]) -> None:
        """
        Rewrite the full collection

        The document is written to a temporary file first and moved into
        place, so a crash never leaves a half-written file behind.

        Raises:
            PlaylistStoreError: If the file cannot be written
        """
        ensure_directory(self.path.parent)
        temp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump([p.to_dict() for p in playlists], f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.path)
        except OSError as e:
            raise PlaylistStoreError(
                f"Cannot write playlists file {self.path}: {e}",
                details={'file_path': str(self.path)}
            )
        self.logger.debug(f"Saved {len(playlists)} playlists to {self.path}")

    def list_playlists(self) -> List[Playlist]:
        return self.load_playlists()

    def get_playlist(self, id_or_name: str) -> Optional[Playlist]:
        """
        Find a playlist by id or name

        Names are not unique; the first playlist in file order wins.

        Returns:
            Matching playlist or None
        """
        for playlist in self.load_playlists():
            if playlist.matches(id_or_name):
                return playlist
        return None

    def create_playlist(self, name: str) -> Playlist:
        """
        Create an empty playlist with a generated id

        Args:
            name: Display name (duplicates allowed)

        Returns:
            The new playlist
        """
        playlists = self.load_playlists()
        playlist = Playlist(
            id=generate_playlist_id(p.id for p in playlists),
            name=name,
            tracks=[],
            created_at=get_current_timestamp(),
        )
        playlists.append(playlist)
        self.save_playlists(playlists)
        self.logger.info(f"Created playlist {playlist.name} ({playlist.id})")
        return playlist

    def add_track(self, id_or_name: str, track: Track) -> Playlist:
        """
        Append a track, stamping its added_at time

        Raises:
            PlaylistNotFoundError: If no playlist matches

        Returns:
            The updated playlist
        """
        playlists = self.load_playlists()
        playlist = self._find(playlists, id_or_name)

        stored = Track(
            title=track.title,
            id=track.id,
            url=track.url,
            added_at=get_current_timestamp(),
        )
        playlist.tracks.append(stored)
        self.save_playlists(playlists)
        self.logger.info(f"Added '{stored.title}' to playlist {playlist.name}")
        return playlist

    def remove_track(self, id_or_name: str, track_index: int) -> Track:
        """
        Remove the track at a zero-based index

        Raises:
            PlaylistNotFoundError: If no playlist matches
            TrackIndexError: If the index is out of range

        Returns:
            The removed track
        """
        playlists = self.load_playlists()
        playlist = self._find(playlists, id_or_name)

        if track_index < 0 or track_index >= len(playlist.tracks):
            raise TrackIndexError(
                "Track index out of range",
                details={'playlist': playlist.name, 'index': track_index}
            )

        removed = playlist.tracks.pop(track_index)
        self.save_playlists(playlists)
        self.logger.info(f"Removed '{removed.title}' from playlist {playlist.name}")
        return removed

    def delete_playlist(self, id_or_name: str) -> None:
        """
        Delete every playlist whose id or name matches

        Unknown keys are not an error.
        """
        playlists = self.load_playlists()
        remaining = [p for p in playlists if not p.matches(id_or_name)]
        self.save_playlists(remaining)
        self.logger.info(f"Deleted {len(playlists) - len(remaining)} playlist(s) matching {id_or_name}")

    def find_playlist_containing(self, track_id: str) -> Optional[Tuple[Playlist, int]]:
        """
        Find the first playlist holding a track with the given id

        Returns:
            (playlist, index of the track) or None
        """
        for playlist in self.load_playlists():
            index = playlist.index_of(track_id)
            if index >= 0:
                return playlist, index
        return None

    @staticmethod
    def _find(playlists: List[Playlist], id_or_name: str) -> Playlist:
        for playlist in playlists:
            if playlist.matches(id_or_name):
                return playlist
        raise PlaylistNotFoundError("Playlist not found", details={'playlist': id_or_name})


_store_instance: Optional[PlaylistStore] = None


def get_playlist_store() -> PlaylistStore:
    """
    Get the global playlist store bound to the configured storage path

    Returns:
        Global PlaylistStore instance
    """
    global _store_instance
    if not _store_instance:
        _store_instance = PlaylistStore()
    return _store_instance


def reset_playlist_store() -> None:
    """Forget the global store so the next access picks up changed settings"""
    global _store_instance
    _store_instance = None
