"""Build playlists from TOML definitions, plus a built-in sample playlist."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from pattern_catalog.core.config import TomlConfigError, load_toml

from .songs import Playlist, Song

__all__ = [
    "PlaylistLoadError",
    "SAMPLE_SONGS",
    "load_playlist",
    "playlist_from_mapping",
    "sample_playlist",
]

_SONG_FIELDS = {
    "id": str,
    "title": str,
    "artist": str,
    "album": str,
    "genre": str,
    "duration_seconds": int,
    "year": int,
}


class PlaylistLoadError(ValueError):
    """Raised when a playlist definition is malformed."""


SAMPLE_SONGS: tuple[Song, ...] = (
    Song("1", "Bohemian Rhapsody", "Queen", "A Night at the Opera", "Rock", 354, 1975),
    Song("2", "Billie Jean", "Michael Jackson", "Thriller", "Pop", 294, 1982),
    Song("3", "Smells Like Teen Spirit", "Nirvana", "Nevermind", "Rock", 301, 1991),
    Song("4", "Like a Prayer", "Madonna", "Like a Prayer", "Pop", 340, 1989),
    Song("5", "Hotel California", "Eagles", "Hotel California", "Rock", 390, 1977),
    Song("6", "Take On Me", "A-ha", "Hunting High and Low", "Pop", 225, 1985),
    Song("7", "So What", "Miles Davis", "Kind of Blue", "Jazz", 545, 1959),
    Song("8", "Superstition", "Stevie Wonder", "Talking Book", "Soul", 245, 1972),
)


def sample_playlist() -> Playlist:
    """Return the eight-song "My Favorites" playlist."""

    playlist = Playlist("My Favorites")
    for song in SAMPLE_SONGS:
        playlist.add(song)
    return playlist


def playlist_from_mapping(data: Mapping[str, Any]) -> Playlist:
    name = data.get("name", "Untitled")
    if not isinstance(name, str):
        raise PlaylistLoadError("Playlist 'name' must be a string.")
    raw_songs = data.get("songs", [])
    if not isinstance(raw_songs, list):
        raise PlaylistLoadError("Playlist 'songs' must be an array of tables.")

    playlist = Playlist(name)
    for index, raw in enumerate(raw_songs):
        playlist.add(_song_from_mapping(index, raw))
    return playlist


def load_playlist(path: Path) -> Playlist:
    try:
        data = load_toml(path)
    except TomlConfigError as exc:
        raise PlaylistLoadError(str(exc)) from exc
    return playlist_from_mapping(data)


def _song_from_mapping(index: int, raw: object) -> Song:
    if not isinstance(raw, Mapping):
        raise PlaylistLoadError(f"Song {index} must be a table.")
    unknown = sorted(set(raw) - set(_SONG_FIELDS))
    if unknown:
        raise PlaylistLoadError(
            f"Song {index} has unknown field(s): {', '.join(unknown)}."
        )
    values: dict[str, Any] = {}
    for field_name, expected in _SONG_FIELDS.items():
        if field_name not in raw:
            raise PlaylistLoadError(f"Song {index} is missing '{field_name}'.")
        value = raw[field_name]
        if expected is str and isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, expected) or isinstance(value, bool):
            raise PlaylistLoadError(
                f"Song {index} field '{field_name}' must be "
                f"{expected.__name__}; got {type(value).__name__}."
            )
        if expected is int and value < 0:
            raise PlaylistLoadError(
                f"Song {index} field '{field_name}' must be zero or greater; "
                f"got {value}."
            )
        values[field_name] = value
    return Song(**values)
