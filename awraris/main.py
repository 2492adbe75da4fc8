"""
Main CLI interface for Awraris

This module provides the command-line interface for searching YouTube,
streaming audio through a local player and managing local playlists.

The CLI is built using Click framework and provides:
- Ad-hoc streaming (play, search)
- Playlist operations (list, create, add, play, show, remove, delete)
- Configuration management (show, set)
- System diagnostics (doctor)
"""

import sys
import click
import functools
from urllib.parse import quote_plus

from . import __version__
from .config.settings import get_settings, reload_settings, SEARCH_PROVIDERS
from .exceptions import NoPlayerError, SearchError, StreamErrorKind
from .playback import (
    PlaybackSequencer,
    PlaybackSession,
    PlaylistContinuation,
    discover_player,
    interrupt_handler,
    play_with_continuation,
)
from .playlists.store import get_playlist_store, reset_playlist_store
from .utils.logger import (
    configure_from_settings,
    create_operation_logger,
    get_current_log_file,
    get_logger,
)
from .utils.validation import (
    clamp_result_limit,
    parse_start_index,
    parse_track_number,
    validate_playlist_name,
)
from .youtube.search import get_searcher, reset_searcher
from .youtube.stream import get_stream_resolver


# Initialize logging system from configuration settings
configure_from_settings()
logger = get_logger(__name__)


WEB_PLAYER_URL = "https://music.youtube.com/search?q={query}"


def print_banner():
    """Print application banner to console"""
    banner = """
╔═══════════════════════════════════════════════════════════════╗
║                           Awraris                             ║
║                                                               ║
║        Search YouTube and stream music from your terminal     ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝
    """
    click.echo(click.style(banner, fg='green', bold=True))


def print_box(title: str, lines, color: str = 'red'):
    """
    Print a framed help message

    Args:
        title: Heading shown in `color`
        lines: Body lines
        color: Frame and heading color
    """
    body = [title, ""] + [str(line) for line in lines]
    width = max(len(line) for line in body) + 2

    click.echo(click.style("╭" + "─" * width + "╮", fg=color))
    for index, line in enumerate(body):
        text = click.style(line.ljust(width - 1), fg=color, bold=True) if index == 0 else line.ljust(width - 1)
        click.echo(click.style("│ ", fg=color) + text + click.style("│", fg=color))
    click.echo(click.style("╰" + "─" * width + "╯", fg=color))


def handle_error(func):
    """
    Decorator to handle common CLI errors gracefully

    Ctrl+C outside of playback exits with 130, any other uncaught error is
    logged, shown in red and exits with 1.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo(click.style("\n\nOperation cancelled by user", fg='yellow'))
            sys.exit(130)
        except Exception as e:
            logger.error(f"Command failed: {e}")
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            sys.exit(1)
    return wrapper


def print_results(results, show_ids: bool = False):
    """Print numbered search results"""
    for index, video in enumerate(results, 1):
        click.echo(
            f"{click.style(str(index), fg='cyan')}. {click.style(video.title, fg='green')}\n"
            f"   by {click.style(video.channel_title, fg='blue')} • "
            f"{click.style(video.duration_str, fg='yellow')}"
        )
        if show_ids:
            click.echo(click.style(f"   {video.id}", dim=True))


def search_or_explain(query: str, limit: int):
    """
    Run a search, printing the API key setup box when the key is missing

    Raises:
        SearchError: Re-raised after the explanation
    """
    try:
        return get_searcher().search(query, limit)
    except SearchError as e:
        if e.is_auth_error and "API key" in e.message:
            print_box("YouTube API Setup Required", [
                "To use YouTube search, you need:",
                "1. Go to https://console.cloud.google.com/",
                "2. Create a project and enable YouTube Data API v3",
                "3. Create an API key",
                "4. Create a .env file with: YOUTUBE_API_KEY=your_key",
                "",
                "Alternative: awraris config set --provider ytmusic",
            ])
        raise


def explain_no_player(title: str):
    """Show install hints for a player, offer the web player and exit 1"""
    click.echo(click.style("No audio player found", fg='red'), err=True)
    print_box("Audio Player Required", [
        "Please install one of the following:",
        "• VLC Media Player - https://www.videolan.org/vlc/",
        "• MPV - https://mpv.io/",
        "",
        "Installation commands:",
        "• macOS: brew install vlc",
        "• Ubuntu: sudo apt install vlc",
        "• Windows: Download from VLC website",
        "",
        "Alternative: Use web player at https://music.youtube.com",
    ])

    if title and click.confirm("Open web player instead?", default=True):
        click.launch(WEB_PLAYER_URL.format(query=quote_plus(title)))
        click.echo(click.style(f"Opening web player for \"{title}\"", fg='green'))

    sys.exit(1)


def prompt_playlist_name(name, message):
    """Return `name`, or ask for it when missing"""
    if name:
        return name
    return click.prompt(message).strip()


# Main CLI group - root command that all subcommands attach to
@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', type=click.Path(), help='Path to config file')
@click.pass_context
def cli(ctx, version, verbose, config):
    """
    Awraris - Search YouTube and stream music from your terminal

    Plays audio through a locally installed player (VLC, MPV, afplay) and
    keeps simple local playlists.
    """
    ctx.ensure_object(dict)

    if version:
        click.echo(f"Awraris v{__version__}")
        return

    if config:
        reload_settings(config)
        configure_from_settings()
        reset_playlist_store()
        reset_searcher()
        click.echo(f"Loaded config: {config}")

    if verbose:
        ctx.obj['verbose'] = True
        logger.info("Verbose mode enabled")

    if ctx.invoked_subcommand is None:
        print_banner()
        click.echo(ctx.get_help())


@cli.command()
@click.argument('query', nargs=-1)
@handle_error
def play(query):
    """
    Search YouTube and play a track

    After the chosen track ends, playback continues with the rest of the
    first saved playlist that contains it.
    """
    query = " ".join(query).strip()
    if not query:
        query = click.prompt("What would you like to play?").strip()
    if not query:
        click.echo(click.style("Nothing to search for", fg='yellow'))
        return

    settings = get_settings()
    click.echo(f"Searching for \"{query}\"...")
    results = search_or_explain(query, settings.search.play_results)

    if not results:
        click.echo(click.style(f"No results found for \"{query}\"", fg='red'))
        return

    click.echo(click.style(f"\nFound {len(results)} results for \"{query}\":", fg='yellow'))
    print_results(results)

    choice = click.prompt(
        f"\nSelect a song (1-{len(results)})",
        type=click.IntRange(1, len(results)),
        default=1
    )
    selected = results[choice - 1]

    click.echo(f"Getting audio stream for \"{selected.title}\"...")
    stream = get_stream_resolver().try_resolve(selected.id)

    if not stream.success:
        click.echo(click.style(f"Stream Error: {stream.error}", fg='red'), err=True)
        if stream.error_kind == StreamErrorKind.SIGN_IN_REQUIRED:
            print_box("YouTube Stream Access Issue", [
                "The search found the video, but streaming is blocked.",
                "",
                "Solutions:",
                "• Use a VPN to change your IP address",
                "• Try again later or from a different network",
                "• Update yt-dlp: pip install -U yt-dlp",
            ])
        return

    track = selected.to_track(stream.url)
    sequencer = PlaybackSequencer()
    continuation = PlaylistContinuation(get_playlist_store(), sequencer)
    session = PlaybackSession()

    click.echo(click.style("Press Ctrl+C to stop", dim=True))
    try:
        with interrupt_handler(session):
            report, continued = play_with_continuation(track, sequencer, continuation, session)
    except NoPlayerError:
        explain_no_player(selected.title)

    if report.played and not report.stopped:
        click.echo(click.style(f"Finished playing \"{selected.title}\"", fg='green'))
    if continued is not None:
        click.echo(click.style("Playlist finished.", fg='green'))


@cli.command()
@click.argument('query')
@click.option('--limit', '-l', type=click.IntRange(1, 50), help='Number of results (1-50)')
@handle_error
def search(query, limit):
    """Search YouTube for music"""
    settings = get_settings()
    limit = limit or settings.search.default_limit

    results = search_or_explain(query, limit)
    if not results:
        click.echo(click.style(f"No results found for \"{query}\"", fg='red'))
        return

    click.echo(click.style(f"Found {len(results)} results for \"{query}\":\n", fg='yellow'))
    print_results(results, show_ids=True)


# Playlist commands group
@cli.group(invoke_without_command=True)
@click.pass_context
def playlist(ctx):
    """
    Local playlist management

    Without a subcommand, lists all playlists.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(playlist_list)


@playlist.command('list')
@handle_error
def playlist_list():
    """List playlists"""
    playlists = get_playlist_store().list_playlists()
    if not playlists:
        click.echo(click.style(
            "No playlists found. Create one with 'awraris playlist create <name>'", fg='yellow'
        ))
        return

    for p in playlists:
        click.echo(
            f"{click.style(p.id, fg='cyan')}  {click.style(p.name, fg='green')}  "
            f"{click.style(f'{len(p.tracks)} tracks', dim=True)}"
        )


@playlist.command('create')
@click.argument('name', required=False)
@handle_error
def playlist_create(name):
    """Create an empty playlist"""
    name = prompt_playlist_name(name, "Playlist name")
    is_valid, error_msg = validate_playlist_name(name)
    if not is_valid:
        click.echo(click.style(error_msg, fg='red'), err=True)
        sys.exit(1)

    p = get_playlist_store().create_playlist(name)
    click.echo(click.style(f"Created playlist {p.name} ({p.id})", fg='green'))


@playlist.command('add')
@click.argument('name', required=False)
@handle_error
def playlist_add(name):
    """Search YouTube and add the results to a playlist"""
    store = get_playlist_store()
    name = prompt_playlist_name(name, "Playlist to add to (name or id)")

    target = store.get_playlist(name)
    if target is None:
        click.echo(click.style("Playlist not found", fg='red'), err=True)
        sys.exit(1)

    query = click.prompt("Song or artist to search and add").strip()
    default_limit = get_settings().search.add_limit
    limit_input = click.prompt(
        f"How many results to add? (default {default_limit})",
        default="", show_default=False
    )
    limit = clamp_result_limit(limit_input, default=default_limit)

    results = search_or_explain(query, limit)
    if not results:
        click.echo(click.style("No results found.", fg='red'))
        return

    click.echo(click.style(f"Adding {len(results)} results to playlist {target.name}...", fg='yellow'))

    resolver = get_stream_resolver()
    operation = create_operation_logger(__name__, "Adding tracks")
    operation.start()

    added = 0
    skipped = 0
    for index, video in enumerate(results, 1):
        operation.progress(video.title, index, len(results))
        stream = resolver.try_resolve(video.id)
        if not stream.success:
            skipped += 1
            click.echo(click.style(f"! Failed to add {video.title}: {stream.error}", fg='red'))
            continue
        store.add_track(target.id, video.to_track(stream.url))
        added += 1
        click.echo(click.style(f"+ {video.title}", fg='green'))

    operation.complete(f"Done. Added {added} tracks, skipped {skipped}.")


@playlist.command('play')
@click.argument('name', required=False)
@handle_error
def playlist_play(name):
    """Play a playlist from a chosen track"""
    store = get_playlist_store()
    name = prompt_playlist_name(name, "Playlist name or id to play")

    p = store.get_playlist(name)
    if p is None:
        click.echo(click.style("Playlist not found", fg='red'), err=True)
        sys.exit(1)
    if not p.tracks:
        click.echo(click.style("Playlist is empty", fg='yellow'))
        return

    for index, t in enumerate(p.tracks, 1):
        click.echo(f"{click.style(str(index), fg='cyan')}. {t.title}")

    start_input = click.prompt(
        f"Start at track (1-{len(p.tracks)}), Enter for 1",
        default="", show_default=False
    )
    start_index = parse_start_index(start_input, len(p.tracks))

    session = PlaybackSession()
    click.echo(click.style("Press Ctrl+C to stop", dim=True))
    try:
        with interrupt_handler(session):
            PlaybackSequencer().play_sequence(p.tracks, start_index, session=session)
    except NoPlayerError:
        click.echo(click.style("No audio player found on system", fg='red'), err=True)
        sys.exit(1)

    click.echo(click.style("Playlist finished or stopped.", fg='green'))


@playlist.command('show')
@click.argument('name', required=False)
@handle_error
def playlist_show(name):
    """Show the tracks of a playlist"""
    name = prompt_playlist_name(name, "Playlist name or id to show")
    p = get_playlist_store().get_playlist(name)
    if p is None:
        click.echo(click.style("Playlist not found", fg='red'), err=True)
        sys.exit(1)

    click.echo(click.style(f"{p.name} - {len(p.tracks)} tracks", fg='green'))
    for index, t in enumerate(p.tracks, 1):
        click.echo(f"{click.style(str(index), fg='cyan')}. {t.title} {click.style(t.id or '', dim=True)}")


@playlist.command('remove')
@click.argument('name', required=False)
@handle_error
def playlist_remove(name):
    """Remove one track from a playlist"""
    store = get_playlist_store()
    name = prompt_playlist_name(name, "Playlist name or id to remove from")

    p = store.get_playlist(name)
    if p is None:
        click.echo(click.style("Playlist not found", fg='red'), err=True)
        sys.exit(1)

    for index, t in enumerate(p.tracks, 1):
        click.echo(f"{click.style(str(index), fg='cyan')}. {t.title}")

    choice = click.prompt(f"Track number to remove (1-{len(p.tracks)})", default="", show_default=False)
    track_index = parse_track_number(choice, len(p.tracks))
    if track_index is None:
        click.echo(click.style("Invalid track number", fg='red'), err=True)
        sys.exit(1)

    store.remove_track(p.id, track_index)
    click.echo(click.style("Track removed", fg='green'))


@playlist.command('delete')
@click.argument('name', required=False)
@handle_error
def playlist_delete(name):
    """Delete a playlist"""
    name = prompt_playlist_name(name, "Playlist name or id to delete")
    get_playlist_store().delete_playlist(name)
    click.echo(click.style("Playlist deleted", fg='green'))


# Configuration commands group
@cli.group()
def config():
    """
    Configuration management

    View and change player, search and logging settings.
    """
    pass


@config.command('show')
@handle_error
def config_show():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:\n")

    click.echo("Player:")
    click.echo(f"   Preferred: {settings.player.preferred or 'auto'}")
    click.echo(f"   Probe timeout: {settings.player.probe_timeout}s")

    click.echo("\nSearch:")
    click.echo(f"   Provider: {settings.search.provider}")
    click.echo(f"   API key: {'set' if settings.search.api_key else 'not set'}")
    click.echo(f"   Search results: {settings.search.default_limit}")
    click.echo(f"   Play results: {settings.search.play_results}")
    click.echo(f"   Add results: {settings.search.add_limit}")

    click.echo("\nPlaylists:")
    click.echo(f"   File: {settings.get_playlists_path()}")

    click.echo("\nLogging:")
    click.echo(f"   Level: {settings.logging.level}")
    click.echo(f"   File: {settings.logging.file or 'none'}")


@config.command('set')
@click.option('--player', help="Player to try first (e.g. mpv, cvlc), 'auto' to clear")
@click.option('--provider', type=click.Choice(SEARCH_PROVIDERS), help='Search provider')
@click.option('--search-limit', type=click.IntRange(1, 50), help='Default number of search results')
@click.option('--play-results', type=click.IntRange(1, 50), help='Results offered by play')
@click.option('--add-limit', type=click.IntRange(1, 50), help='Default number of results added to playlists')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']), help='Log level')
@handle_error
def config_set(player, provider, search_limit, play_results, add_limit, log_level):
    """
    Update configuration settings

    Changes are saved to the user config file.
    """
    settings = get_settings()
    changes = []

    if player:
        settings.player.preferred = "" if player == 'auto' else player
        changes.append(f"Preferred player: {player}")

    if provider:
        settings.search.provider = provider
        reset_searcher()
        changes.append(f"Search provider: {provider}")

    if search_limit:
        settings.search.default_limit = search_limit
        changes.append(f"Search results: {search_limit}")

    if play_results:
        settings.search.play_results = play_results
        changes.append(f"Play results: {play_results}")

    if add_limit:
        settings.search.add_limit = add_limit
        changes.append(f"Add results: {add_limit}")

    if log_level:
        settings.logging.level = log_level
        changes.append(f"Log level: {log_level}")

    if changes:
        settings.save_config()
        click.echo("Configuration updated:")
        for change in changes:
            click.echo(f"   • {change}")
    else:
        click.echo("No changes specified")


# System diagnostic commands
@cli.command()
@handle_error
def doctor():
    """
    Run system diagnostics

    Checks the audio player, search provider, dependencies and file locations.
    """
    click.echo("Running diagnostics...\n")

    issues = []
    settings = get_settings()

    player = discover_player()
    if player:
        click.echo(f"Audio player: {player}")
    else:
        click.echo("Audio player: Not found")
        issues.append("Install VLC (cvlc) or MPV to play audio")

    click.echo(f"Search provider: {settings.search.provider}")
    if settings.search.provider == 'youtube':
        if settings.search.api_key:
            click.echo("YouTube API key: OK")
        else:
            click.echo("YouTube API key: Not set")
            issues.append("Set YOUTUBE_API_KEY in your .env file or use --provider ytmusic")

    dependencies = [
        ('yt_dlp', 'yt-dlp', 'required for streaming'),
        ('ytmusicapi', 'ytmusicapi', 'required for the ytmusic search provider'),
        ('requests', 'requests', 'required for the youtube search provider'),
    ]

    for module_name, display_name, purpose in dependencies:
        try:
            __import__(module_name)
            click.echo(f"{display_name}: OK")
        except ImportError:
            click.echo(f"{display_name}: Not installed")
            issues.append(f"{display_name} is {purpose}")

    playlists_path = settings.get_playlists_path()
    if playlists_path.exists():
        click.echo(f"Playlists file: {playlists_path}")
    else:
        click.echo(f"Playlists file: {playlists_path} (will be created)")

    current_log = get_current_log_file()
    click.echo(f"Logging: {current_log if current_log else 'Console only'}")

    if issues:
        click.echo(f"\nFound {len(issues)} issues:")
        for issue in issues:
            click.echo(f"   • {issue}")
    else:
        click.echo("\nAll systems operational!")


# Entry point for module execution
if __name__ == '__main__':
    cli()
