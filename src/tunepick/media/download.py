"""Batch audio downloads with yt-dlp, optionally through aria2c."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable, Iterable
from pathlib import Path

from tunepick.exceptions import MediaToolError
from tunepick.models import DownloadSummary

logger = logging.getLogger("tunepick.media")

OUTPUT_TEMPLATE = "%(artist,uploader)s - %(title)s.%(ext)s"
ARIA2C_ARGS = "aria2c:-x 16 -s 16 -k 1M"

Runner = Callable[..., subprocess.CompletedProcess]


def aria2c_available() -> bool:
    return shutil.which("aria2c") is not None


def build_ytdlp_command(
    url: str,
    *,
    ytdlp_path: str = "yt-dlp",
    output_dir: Path,
    audio_format: str = "mp3",
    use_aria2c: bool = True,
    cookies: Path | None = None,
) -> list[str]:
    """Build the yt-dlp command for extracting audio from one URL."""
    cmd = [
        ytdlp_path,
        "-x",
        "--audio-format",
        audio_format,
        "--embed-metadata",
        "--embed-thumbnail",
        "-o",
        str(output_dir / OUTPUT_TEMPLATE),
    ]
    if use_aria2c:
        cmd += ["--downloader", "aria2c", "--downloader-args", ARIA2C_ARGS]
    if cookies:
        cmd += ["--cookies", str(cookies)]
    cmd.append(url)
    return cmd


def read_url_list(path: Path) -> list[str]:
    """Read URLs from a file: one per line, '#' comments and blanks ignored.

    Duplicates are dropped, keeping the first occurrence.
    """
    urls: list[str] = []
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line not in urls:
            urls.append(line)
    return urls


def download_one(
    url: str,
    summary: DownloadSummary,
    *,
    ytdlp_path: str = "yt-dlp",
    output_dir: Path,
    audio_format: str = "mp3",
    use_aria2c: bool = True,
    cookies: Path | None = None,
    runner: Runner = subprocess.run,
) -> DownloadSummary:
    """Download one URL and return the updated summary.

    Raises:
        MediaToolError: yt-dlp is not installed.
    """
    if summary.seen(url):
        logger.info("Skipping already processed %s", url)
        return summary.with_skip(url)

    cmd = build_ytdlp_command(
        url,
        ytdlp_path=ytdlp_path,
        output_dir=output_dir,
        audio_format=audio_format,
        use_aria2c=use_aria2c,
        cookies=cookies,
    )
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = runner(cmd)
    except FileNotFoundError as e:
        raise MediaToolError("yt-dlp", f"executable not found ({ytdlp_path})") from e

    if result.returncode != 0:
        logger.warning("Download failed (exit %d): %s", result.returncode, url)
        return summary.with_failure(url)
    return summary.with_success(url)


def download_batch(
    urls: Iterable[str],
    *,
    ytdlp_path: str = "yt-dlp",
    output_dir: Path,
    audio_format: str = "mp3",
    use_aria2c: bool = True,
    cookies: Path | None = None,
    runner: Runner = subprocess.run,
    on_progress: Callable[[str, DownloadSummary], None] | None = None,
) -> DownloadSummary:
    """Download every URL in order, threading the summary through each step."""
    if use_aria2c and not aria2c_available():
        logger.warning("aria2c not found on PATH, using yt-dlp's native downloader")
        use_aria2c = False

    output_dir.mkdir(parents=True, exist_ok=True)

    summary = DownloadSummary()
    for url in urls:
        summary = download_one(
            url,
            summary,
            ytdlp_path=ytdlp_path,
            output_dir=output_dir,
            audio_format=audio_format,
            use_aria2c=use_aria2c,
            cookies=cookies,
            runner=runner,
        )
        if on_progress:
            on_progress(url, summary)
    return summary
