"""Play YouTube videos with mpv, picking from search results."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from tunepick.exceptions import MediaToolError

from .search import search_youtube

if TYPE_CHECKING:
    from tunepick.config import Config
    from tunepick.models import SearchResult
    from tunepick.ui.base import MenuProvider

logger = logging.getLogger("tunepick.media")


def is_url(target: str) -> bool:
    return target.startswith(("http://", "https://"))


def build_mpv_command(
    target: str,
    *,
    mpv_path: str = "mpv",
    audio_only: bool = False,
    extra_args: Sequence[str] = (),
) -> list[str]:
    """Build the mpv command line for a URL."""
    cmd = [mpv_path]
    if audio_only:
        cmd += ["--no-video", "--ytdl-format=bestaudio/best"]
    cmd += list(extra_args)
    cmd.append(target)
    return cmd


def choose_result(
    results: Sequence[SearchResult],
    menu: MenuProvider,
    title: str = "Search results",
) -> SearchResult | None:
    """Let the user pick one search result. None if cancelled or no results."""
    if not results:
        return None
    labels = [r.label for r in results]
    # Menu index -> video id; the menu only sees labels
    ids = {i: r.video_id for i, r in enumerate(results)}
    by_id = {r.video_id: r for r in results}

    index = menu.select(labels, title=title)
    if index is None:
        return None
    return by_id[ids[index]]


def play(
    url: str,
    *,
    mpv_path: str = "mpv",
    audio_only: bool = False,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> int:
    """Run mpv in the foreground and return its exit code."""
    cmd = build_mpv_command(url, mpv_path=mpv_path, audio_only=audio_only)
    logger.info("Launching mpv: %s", " ".join(cmd))
    try:
        result = runner(cmd)
    except FileNotFoundError as e:
        raise MediaToolError("mpv", f"executable not found ({mpv_path})") from e
    if result.returncode != 0:
        logger.warning("mpv exited with code %d", result.returncode)
    return result.returncode


def stream(
    target: str,
    *,
    menu: MenuProvider,
    config: Config,
    audio_only: bool = False,
    limit: int | None = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> int | None:
    """Play a URL directly, or search for `target` and play the picked result.

    Returns:
        mpv's exit code, or None when nothing was picked.
    """
    if is_url(target):
        url = target
    else:
        results = search_youtube(
            target,
            limit or config.search_limit,
            ytdlp_path=config.ytdlp_path,
            runner=runner,
        )
        if not results:
            logger.warning("No results for %r", target)
            return None
        picked = choose_result(results, menu, title=f"Results for: {target}")
        if picked is None:
            return None
        url = picked.url

    return play(url, mpv_path=config.mpv_path, audio_only=audio_only, runner=runner)
