"""Console helpers: interactive menu, mpv streaming and yt-dlp downloads."""

__version__ = "0.1.0"
