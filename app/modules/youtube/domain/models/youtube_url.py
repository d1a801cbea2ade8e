"""
YouTube URL classification.

Playlist links are recognised before video links, so a watch URL that also
carries ``list=`` is treated as a playlist.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class YoutubeUrlType(str, Enum):
    VIDEO = "VIDEO"
    PLAYLIST = "PLAYLIST"
    INVALID = "INVALID"


@dataclass(frozen=True)
class ParsedYoutubeUrl:
    type: YoutubeUrlType
    original_url: str
    video_id: Optional[str] = None
    playlist_id: Optional[str] = None


class YoutubeUrlParser:
    """Extracts video or playlist ids from the common YouTube URL shapes."""

    VIDEO_PATTERNS = (
        re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]{11})"),
        re.compile(r"youtube\.com/embed/([a-zA-Z0-9_-]{11})"),
        re.compile(r"youtube\.com/v/([a-zA-Z0-9_-]{11})"),
    )
    PLAYLIST_PATTERN = re.compile(r"[?&]list=([a-zA-Z0-9_-]+)")

    def parse(self, url: Optional[str]) -> ParsedYoutubeUrl:
        if not url or not isinstance(url, str):
            return ParsedYoutubeUrl(type=YoutubeUrlType.INVALID, original_url=url or "")

        normalized = url.strip()

        playlist_match = self.PLAYLIST_PATTERN.search(normalized)
        if playlist_match:
            return ParsedYoutubeUrl(
                type=YoutubeUrlType.PLAYLIST,
                original_url=normalized,
                playlist_id=playlist_match.group(1),
            )

        for pattern in self.VIDEO_PATTERNS:
            match = pattern.search(normalized)
            if match:
                return ParsedYoutubeUrl(
                    type=YoutubeUrlType.VIDEO,
                    original_url=normalized,
                    video_id=match.group(1),
                )

        return ParsedYoutubeUrl(type=YoutubeUrlType.INVALID, original_url=normalized)

    def is_valid(self, url: Optional[str]) -> bool:
        return self.parse(url).type != YoutubeUrlType.INVALID
