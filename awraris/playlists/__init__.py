"""
Playlists package
Named, ordered track lists persisted as a single JSON document
"""

from .models import Track, Playlist
from .store import PlaylistStore, get_playlist_store, reset_playlist_store

__all__ = [
    'Track',
    'Playlist',
    'PlaylistStore',
    'get_playlist_store',
    'reset_playlist_store'
]
