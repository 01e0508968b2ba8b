"""CLI entry point for ``patterns play``."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pattern_catalog.config import (
    CatalogConfigError,
    ConfigOverrides,
    PlayMode,
    load_config,
)
from pattern_catalog.core.logging import configure_logger

from .iterators import FilterIterator, SongIterator
from .loader import PlaylistLoadError, load_playlist, sample_playlist
from .player import MusicPlayer
from .songs import Playlist, Song, format_duration


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patterns play",
        description=(
            "Play a playlist through the music player using one of the "
            "traversal iterators."
        ),
        epilog=(
            "Without PLAYLIST the built-in 'My Favorites' sample is played."
        ),
    )
    parser.add_argument(
        "playlist",
        nargs="?",
        type=Path,
        help="TOML playlist definition to play.",
    )
    parser.add_argument(
        "--mode",
        choices=[member.value for member in PlayMode],
        help=(
            "Traversal order (defaults to player.mode, then sequential). "
            "--genre or --artist alone imply the matching filter mode."
        ),
    )
    parser.add_argument("--genre", help="Genre to keep in genre mode.")
    parser.add_argument(
        "--artist", help="Artist substring to keep in artist mode."
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the shuffle order so runs are repeatable.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Stop after playing this many songs.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=(
            "Path to a TOML config file (defaults to the workspace config "
            "directory)."
        ),
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root used for config and logs.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the run (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror player narration to stderr.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.limit is not None and args.limit < 0:
        parser.error("--limit must be zero or greater.")

    overrides = ConfigOverrides(
        log_level=args.log_level,
        play_mode=_mode_from_args(args),
        seed=args.seed,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except CatalogConfigError as exc:
        parser.error(str(exc))

    config = load_result.config
    if config.play_mode is PlayMode.GENRE and not args.genre:
        parser.error("--genre is required for genre mode.")
    if config.play_mode is PlayMode.ARTIST and not args.artist:
        parser.error("--artist is required for artist mode.")

    logger, log_path = configure_logger(
        "pattern_catalog",
        log_dir=load_result.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
    )

    try:
        playlist = (
            load_playlist(args.playlist)
            if args.playlist is not None
            else sample_playlist()
        )
    except PlaylistLoadError as exc:
        logger.error("Failed to load playlist", extra={"error": str(exc)})
        sys.stderr.write(str(exc) + "\n")
        return 1

    iterator = build_iterator(
        playlist,
        config.play_mode,
        genre=args.genre,
        artist=args.artist,
        seed=config.seed,
    )
    player = MusicPlayer()
    player.load_playlist(playlist, iterator)

    if args.limit is None:
        played = player.play_all()
    else:
        played = []
        while len(played) < args.limit:
            song = player.play()
            if song is None:
                break
            played.append(song)

    _print_played(Console(), playlist, played)
    _print_summary(playlist, config.play_mode, iterator, played, log_path)
    return 0


def build_iterator(
    playlist: Playlist,
    mode: PlayMode,
    *,
    genre: str | None = None,
    artist: str | None = None,
    seed: int | None = None,
) -> SongIterator:
    """Return the playlist iterator for ``mode``."""

    if mode is PlayMode.REVERSE:
        return playlist.create_reverse_iterator()
    if mode is PlayMode.SHUFFLE:
        rng = random.Random(seed) if seed is not None else None
        return playlist.create_shuffle_iterator(rng=rng)
    if mode is PlayMode.GENRE:
        if not genre:
            raise ValueError("genre mode requires a genre.")
        return playlist.create_genre_iterator(genre)
    if mode is PlayMode.ARTIST:
        if not artist:
            raise ValueError("artist mode requires an artist.")
        return playlist.create_artist_iterator(artist)
    return playlist.create_iterator()


def _mode_from_args(args: argparse.Namespace) -> PlayMode | None:
    if args.mode:
        return PlayMode.from_value(args.mode)
    if args.genre:
        return PlayMode.GENRE
    if args.artist:
        return PlayMode.ARTIST
    return None


def _print_played(
    console: Console, playlist: Playlist, played: Sequence[Song]
) -> None:
    if not played:
        console.print("No songs played.", markup=False, highlight=False)
        return

    table = Table(title=Text(playlist.name), box=box.SIMPLE, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Title", overflow="fold")
    table.add_column("Artist")
    table.add_column("Genre")
    table.add_column("Length", justify="right")
    for idx, song in enumerate(played, start=1):
        table.add_row(
            str(idx),
            Text(song.title),
            Text(song.artist),
            Text(song.genre),
            format_duration(song.duration_seconds),
        )
    console.print(table)


def _print_summary(
    playlist: Playlist,
    mode: PlayMode,
    iterator: SongIterator,
    played: Sequence[Song],
    log_path: Path,
) -> None:
    total = sum(song.duration_seconds for song in played)
    lines = [
        "play summary:",
        f"  playlist: {playlist.name}",
        f"  mode:     {mode.value}",
        f"  played:   {len(played)} of {len(playlist)}",
    ]
    if isinstance(iterator, FilterIterator):
        lines.append(f"  matched:  {iterator.filtered_count()}")
    lines.extend(
        [
            f"  duration: {format_duration(total)}",
            f"  log file: {log_path}",
        ]
    )
    sys.stdout.write("\n".join(lines) + "\n")


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
