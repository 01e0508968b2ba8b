"""Playlist iterators sharing one ``has_next/next/current/reset`` contract.

Every iterator copies the playlist's songs when it is constructed and keeps
its own cursor, so two iterators over one playlist never affect each other.
Exhaustion is signalled by ``next()`` returning ``None`` (repeatedly, never
raising). Iterators also implement Python's iterator protocol, where
exhaustion raises ``StopIteration`` as usual.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .songs import Playlist, Song

__all__ = [
    "ArtistFilterIterator",
    "FilterIterator",
    "GenreFilterIterator",
    "ReverseIterator",
    "SequentialIterator",
    "ShuffleIterator",
    "SongIterator",
]


class SongIterator(ABC):
    """Cursor over an ordered selection of songs."""

    def __init__(self, songs: Sequence[Song]) -> None:
        self._songs: tuple[Song, ...] = tuple(songs)
        self._position = 0
        self._current: Optional[Song] = None

    def has_next(self) -> bool:
        return self._position < len(self._songs)

    def next(self) -> Optional[Song]:
        if not self.has_next():
            self._current = None
            return None
        song = self._songs[self._order(self._position)]
        self._position += 1
        self._current = song
        return song

    def current(self) -> Optional[Song]:
        return self._current

    def reset(self) -> None:
        self._position = 0
        self._current = None

    def remaining(self) -> int:
        return len(self._songs) - self._position

    @abstractmethod
    def _order(self, step: int) -> int:
        """Map the ``step``-th advance onto an index into the snapshot."""

    def __iter__(self) -> SongIterator:
        return self

    def __next__(self) -> Song:
        song = self.next()
        if song is None:
            raise StopIteration
        return song


class SequentialIterator(SongIterator):
    """Playlist order."""

    def __init__(self, playlist: Playlist) -> None:
        super().__init__(playlist.items)

    def _order(self, step: int) -> int:
        return step


class ReverseIterator(SongIterator):
    """Last song first."""

    def __init__(self, playlist: Playlist) -> None:
        super().__init__(playlist.items)

    def _order(self, step: int) -> int:
        return len(self._songs) - 1 - step


class ShuffleIterator(SongIterator):
    """Random permutation (Fisher-Yates) of the playlist.

    ``reset()`` draws a new permutation rather than replaying the old one.
    Pass a seeded ``random.Random`` for a reproducible sequence of orders.
    """

    def __init__(
        self, playlist: Playlist, rng: Optional[random.Random] = None
    ) -> None:
        super().__init__(playlist.items)
        self._rng = rng or random.Random()
        self._indices: list[int] = []
        self._shuffle()

    @property
    def order(self) -> tuple[int, ...]:
        return tuple(self._indices)

    def reset(self) -> None:
        super().reset()
        self._shuffle()

    def _shuffle(self) -> None:
        indices = list(range(len(self._songs)))
        for i in range(len(indices) - 1, 0, -1):
            j = self._rng.randint(0, i)
            indices[i], indices[j] = indices[j], indices[i]
        self._indices = indices

    def _order(self, step: int) -> int:
        return self._indices[step]


class FilterIterator(SongIterator):
    """Playlist-order subsequence computed once, at construction."""

    def __init__(self, playlist: Playlist) -> None:
        super().__init__([song for song in playlist.items if self.matches(song)])

    @abstractmethod
    def matches(self, song: Song) -> bool: ...

    def filtered_count(self) -> int:
        return len(self._songs)

    def _order(self, step: int) -> int:
        return step


class GenreFilterIterator(FilterIterator):
    """Songs whose genre equals ``genre``, ignoring case."""

    def __init__(self, playlist: Playlist, genre: str) -> None:
        self.genre = genre
        self._needle = genre.casefold()
        super().__init__(playlist)

    def matches(self, song: Song) -> bool:
        return song.genre.casefold() == self._needle


class ArtistFilterIterator(FilterIterator):
    """Songs whose artist contains ``artist``, ignoring case."""

    def __init__(self, playlist: Playlist, artist: str) -> None:
        self.artist = artist
        self._needle = artist.casefold()
        super().__init__(playlist)

    def matches(self, song: Song) -> bool:
        return self._needle in song.artist.casefold()
