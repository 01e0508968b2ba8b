"""Iterator pattern: playlists, traversal strategies and a player."""

from __future__ import annotations

from .iterators import (
    ArtistFilterIterator,
    FilterIterator,
    GenreFilterIterator,
    ReverseIterator,
    SequentialIterator,
    ShuffleIterator,
    SongIterator,
)
from .loader import (
    PlaylistLoadError,
    load_playlist,
    playlist_from_mapping,
    sample_playlist,
)
from .player import MusicPlayer
from .songs import Playlist, Song, format_duration, format_song

__all__ = [
    "ArtistFilterIterator",
    "FilterIterator",
    "GenreFilterIterator",
    "MusicPlayer",
    "Playlist",
    "PlaylistLoadError",
    "ReverseIterator",
    "SequentialIterator",
    "ShuffleIterator",
    "Song",
    "SongIterator",
    "format_duration",
    "format_song",
    "load_playlist",
    "playlist_from_mapping",
    "sample_playlist",
]
