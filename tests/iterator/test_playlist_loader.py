from __future__ import annotations

import pytest

from pattern_catalog.iterator import (
    PlaylistLoadError,
    Song,
    load_playlist,
    playlist_from_mapping,
)

PLAYLIST_TOML = """
name = "Road Trip"

[[songs]]
id = 1
title = "Africa"
artist = "Toto"
album = "Toto IV"
genre = "Rock"
duration_seconds = 295
year = 1982

[[songs]]
id = "b2"
title = "Dreams"
artist = "Fleetwood Mac"
album = "Rumours"
genre = "Rock"
duration_seconds = 257
year = 1977
"""


def _song(**overrides):
    data = {
        "id": "1",
        "title": "Africa",
        "artist": "Toto",
        "album": "Toto IV",
        "genre": "Rock",
        "duration_seconds": 295,
        "year": 1982,
    }
    data.update(overrides)
    return data


def test_load_playlist_from_toml(workspace):
    path = workspace.write("trip.toml", PLAYLIST_TOML)

    playlist = load_playlist(path)

    assert playlist.name == "Road Trip"
    assert playlist.items == (
        Song("1", "Africa", "Toto", "Toto IV", "Rock", 295, 1982),
        Song("b2", "Dreams", "Fleetwood Mac", "Rumours", "Rock", 257, 1977),
    )


def test_defaults_for_empty_mapping():
    playlist = playlist_from_mapping({})

    assert playlist.name == "Untitled"
    assert len(playlist) == 0


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"name": 1}, "'name' must be a string"),
        ({"songs": {"id": "1"}}, "must be an array"),
        ({"songs": ["Africa"]}, "Song 0 must be a table"),
        ({"songs": [_song(), _song(bpm=120)]}, "Song 1 has unknown field"),
        ({"songs": [{"id": "1"}]}, "Song 0 is missing 'title'"),
        ({"songs": [_song(duration_seconds="4:55")]}, "'duration_seconds' must be int"),
        ({"songs": [_song(year=True)]}, "'year' must be int; got bool"),
        ({"songs": [_song(title=["A"])]}, "'title' must be str"),
        (
            {"songs": [_song(duration_seconds=-5)]},
            "'duration_seconds' must be zero or greater; got -5",
        ),
        ({"songs": [_song(year=-1)]}, "'year' must be zero or greater"),
    ],
)
def test_invalid_playlists(data, message):
    with pytest.raises(PlaylistLoadError, match=message):
        playlist_from_mapping(data)


def test_load_playlist_wraps_toml_errors(workspace):
    with pytest.raises(PlaylistLoadError, match="File not found"):
        load_playlist(workspace.root / "missing.toml")
