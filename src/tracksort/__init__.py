"""tracksort: organize a music collection into Genre/Artist/Album folders."""

__version__ = "0.1.0"
