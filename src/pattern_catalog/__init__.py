"""Design pattern catalogue: Visitor document exporters and Iterator playlists."""
