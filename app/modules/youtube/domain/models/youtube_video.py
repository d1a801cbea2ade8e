# 📄 File: app/modules/youtube/domain/models/youtube_video.py
# 🧭 Purpose (Layman Explanation):
# What we know about a YouTube video (title, channel, length, pictures) and about a
# playlist made of such videos.
# 🧪 Purpose (Technical Summary):
# Immutable pydantic models for Data API video metadata and playlists, with duration
# formatting and best-thumbnail selection. Serialized as JSON into the cache.
# 🔗 Dependencies:
# pydantic, youtube duration parser
# 🔄 Connected Modules / Calls From:
# YoutubeService, DataApiYoutubeClient, youtube routes

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.modules.youtube.domain.services.duration_parser import YoutubeDurationParser


class YoutubeThumbnails(BaseModel):
    model_config = ConfigDict(frozen=True)

    default: Optional[str] = None
    medium: Optional[str] = None
    high: Optional[str] = None
    standard: Optional[str] = None
    maxres: Optional[str] = None


class YoutubeVideo(BaseModel):
    """Metadata of one video."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    channel_title: str
    published_at: datetime
    duration_seconds: int = 0
    thumbnails: YoutubeThumbnails = YoutubeThumbnails()
    view_count: Optional[int] = None

    @property
    def formatted_duration(self) -> str:
        return YoutubeDurationParser.format_seconds(self.duration_seconds)

    @property
    def best_thumbnail(self) -> str:
        """Largest available thumbnail URL, empty string when there is none."""
        t = self.thumbnails
        return t.maxres or t.standard or t.high or t.medium or t.default or ""


class YoutubePlaylist(BaseModel):
    """An ordered list of videos. Order follows the playlist, not the cache."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = "Playlist"
    description: str = ""
    channel_title: str = "Unknown"
    thumbnails: YoutubeThumbnails = YoutubeThumbnails()
    videos: List[YoutubeVideo] = []

    @property
    def video_count(self) -> int:
        return len(self.videos)

    @property
    def total_duration_seconds(self) -> int:
        return sum(video.duration_seconds for video in self.videos)

    @property
    def formatted_total_duration(self) -> str:
        total = self.total_duration_seconds
        hours, minutes = total // 3600, total % 3600 // 60
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"
