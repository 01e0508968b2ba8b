"""Song records and the ``Playlist`` aggregate."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .iterators import (
        ArtistFilterIterator,
        GenreFilterIterator,
        ReverseIterator,
        SequentialIterator,
        ShuffleIterator,
    )

__all__ = [
    "Playlist",
    "Song",
    "format_duration",
    "format_song",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Song:
    """Flat value record for one playlist entry."""

    id: str
    title: str
    artist: str
    album: str
    genre: str
    duration_seconds: int
    year: int


class Playlist:
    """Ordered, mutable collection of songs exposing several iterators.

    Iterators snapshot :attr:`items` when they are created, so adding or
    removing songs later never disturbs a traversal already in progress.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._songs: list[Song] = []

    def __repr__(self) -> str:
        return f"Playlist(name={self.name!r}, songs={len(self)})"

    def __len__(self) -> int:
        return len(self._songs)

    def __iter__(self) -> Iterator[Song]:
        return iter(self.create_iterator())

    @property
    def items(self) -> tuple[Song, ...]:
        return tuple(self._songs)

    @property
    def count(self) -> int:
        return len(self._songs)

    def add(self, song: Song) -> None:
        self._songs.append(song)
        logger.debug("Added song", extra={"playlist": self.name, "song_id": song.id})

    def remove(self, song_id: str) -> bool:
        for index, song in enumerate(self._songs):
            if song.id == song_id:
                del self._songs[index]
                return True
        return False

    def total_duration(self) -> int:
        return sum(song.duration_seconds for song in self._songs)

    def create_iterator(self) -> SequentialIterator:
        from .iterators import SequentialIterator

        return SequentialIterator(self)

    def create_shuffle_iterator(
        self, rng: Optional[random.Random] = None
    ) -> ShuffleIterator:
        from .iterators import ShuffleIterator

        return ShuffleIterator(self, rng=rng)

    def create_reverse_iterator(self) -> ReverseIterator:
        from .iterators import ReverseIterator

        return ReverseIterator(self)

    def create_genre_iterator(self, genre: str) -> GenreFilterIterator:
        from .iterators import GenreFilterIterator

        return GenreFilterIterator(self, genre)

    def create_artist_iterator(self, artist: str) -> ArtistFilterIterator:
        from .iterators import ArtistFilterIterator

        return ArtistFilterIterator(self, artist)


def format_duration(seconds: int) -> str:
    """Format ``seconds`` as ``m:ss``."""

    if seconds < 0:
        raise ValueError(f"duration must be zero or greater; got {seconds}")
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def format_song(song: Song) -> str:
    return (
        f'"{song.title}" by {song.artist} [{song.genre}] '
        f"({format_duration(song.duration_seconds)})"
    )
