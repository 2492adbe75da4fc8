"""
Awraris: terminal music search and playback
Search YouTube for music, stream it through a locally installed player and keep lightweight playlists.

Awraris is a small command-line tool built around three collaborators: a search provider
(YouTube Data API v3 or YouTube Music), a stream resolver (yt-dlp) that turns a video id
into a direct audio URL, and whatever media player the host system offers (VLC, mpv,
afplay, aplay). The tool itself never decodes audio; it hands URLs to the player process
and watches it until it exits.

## Core Architecture

**Configuration Management (`awraris/config/`)**
- Settings from YAML files, `.env` files and environment variables
- Singleton access through `get_settings()`

**YouTube Integration (`awraris/youtube/`)**
- Search providers returning ranked video metadata
- Stream resolution through yt-dlp with classified failures

**Playback Engine (`awraris/playback/`)**
- Player discovery across platform-specific candidates
- Single-track player with player-specific argument shaping
- Playback sequencer with per-track failure isolation and stop handling
- Playlist continuation after an ad-hoc play of a playlist member

**Playlists (`awraris/playlists/`)**
- Named, ordered track lists persisted as one JSON document per user

**Utilities (`awraris/utils/`)**
- Logging with console/file separation
- Formatting and validation helpers

## Quick Start
```bash
pip install -e .

# Optional, only for the YouTube Data API search provider
echo "YOUTUBE_API_KEY=..." > .env

awraris play "daft punk around the world"
awraris playlist create road-trip
awraris playlist add road-trip
awraris playlist play road-trip
```
"""

# Version information for the Awraris package
__version__ = "0.3.0"

__author__ = "Awraris Team"

__description__ = "Terminal music search and playback with lightweight playlists"

__all__ = [
    "__version__",
    "__author__",
    "__description__"
]
