"""Wrappers around yt-dlp, mpv and aria2c."""
