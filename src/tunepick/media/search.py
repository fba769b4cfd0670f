"""YouTube search through yt-dlp."""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Callable

from tunepick.exceptions import MediaToolError
from tunepick.models import SearchResult

logger = logging.getLogger("tunepick.media")

SEARCH_TIMEOUT = 60


def search_youtube(
    query: str,
    limit: int = 10,
    *,
    ytdlp_path: str = "yt-dlp",
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> list[SearchResult]:
    """Search YouTube and return up to `limit` results in yt-dlp's order.

    Raises:
        ValueError: empty query or non-positive limit.
        MediaToolError: yt-dlp is missing, timed out or exited non-zero.
    """
    query = query.strip()
    if not query:
        raise ValueError("Search query must not be empty")
    if limit < 1:
        raise ValueError(f"Search limit must be positive, got {limit}")

    cmd = [
        ytdlp_path,
        f"ytsearch{limit}:{query}",
        "--flat-playlist",
        "--dump-json",
        "--no-warnings",
    ]
    logger.debug("Running %s", " ".join(cmd))

    try:
        result = runner(cmd, capture_output=True, text=True, timeout=SEARCH_TIMEOUT)
    except FileNotFoundError as e:
        raise MediaToolError("yt-dlp", f"executable not found ({ytdlp_path})") from e
    except subprocess.TimeoutExpired as e:
        raise MediaToolError("yt-dlp", "search timed out") from e

    if result.returncode != 0:
        raise MediaToolError(
            "yt-dlp",
            (result.stderr or "").strip() or f"exit {result.returncode}",
            returncode=result.returncode,
        )

    return parse_search_output(result.stdout or "")


def parse_search_output(output: str) -> list[SearchResult]:
    """Parse yt-dlp --dump-json output (one JSON object per line)."""
    results: list[SearchResult] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            logger.debug("Skipping non-JSON line: %s", line[:80])
            continue
        if not isinstance(data, dict) or not data.get("id"):
            continue
        results.append(SearchResult.from_dict(data))
    return results
