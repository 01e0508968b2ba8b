"""Music player that consumes any ``SongIterator``."""

from __future__ import annotations

import logging
from typing import Optional

from .iterators import SongIterator
from .songs import Playlist, Song, format_duration

__all__ = ["MusicPlayer"]

logger = logging.getLogger(__name__)


class MusicPlayer:
    """Plays songs in whatever order the loaded iterator yields them.

    The player never inspects playlist internals; swapping the iterator
    (``set_iterator``) is how playback modes change.
    """

    def __init__(self) -> None:
        self.playlist: Optional[Playlist] = None
        self.iterator: Optional[SongIterator] = None
        self.now_playing: Optional[Song] = None

    def load_playlist(
        self, playlist: Playlist, iterator: Optional[SongIterator] = None
    ) -> None:
        self.playlist = playlist
        self.iterator = (
            iterator if iterator is not None else playlist.create_iterator()
        )
        self.now_playing = None
        logger.info(
            "Loaded playlist %s (%d songs)",
            playlist.name,
            len(playlist),
            extra={"mode": type(self.iterator).__name__},
        )

    def set_iterator(self, iterator: SongIterator) -> None:
        self.iterator = iterator
        logger.info(
            "Changed playback mode", extra={"mode": type(iterator).__name__}
        )

    def play(self) -> Optional[Song]:
        """Advance one song; ``None`` when nothing is loaded or left."""

        if self.iterator is None:
            logger.warning("No playlist loaded")
            return None
        song = self.iterator.next()
        if song is None:
            logger.info("End of playlist")
            return None
        self.now_playing = song
        logger.info(
            'Now playing: "%s" by %s (%s)',
            song.title,
            song.artist,
            format_duration(song.duration_seconds),
        )
        return song

    def play_all(self) -> list[Song]:
        """Drain the current iterator and return the songs played."""

        if self.iterator is None:
            logger.warning("No playlist loaded")
            return []
        played: list[Song] = []
        while self.iterator.has_next():
            song = self.play()
            if song is not None:
                played.append(song)
        logger.info("Played %d songs", len(played))
        return played

    def reset(self) -> None:
        if self.iterator is not None:
            self.iterator.reset()
        self.now_playing = None
        logger.info("Reset to beginning")
