"""Response schemas for YouTube metadata lookups."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from app.modules.youtube.application.dto.youtube_dto import YoutubeMetadataDTO
from app.modules.youtube.domain.models.youtube_video import YoutubePlaylist, YoutubeVideo


class YoutubeVideoResponse(BaseModel):
    id: str
    title: str
    description: str
    channel_title: str
    published_at: datetime
    duration_seconds: int
    formatted_duration: str
    thumbnail_url: str
    view_count: Optional[int] = None

    @classmethod
    def from_domain(cls, video: YoutubeVideo) -> "YoutubeVideoResponse":
        return cls(
            id=video.id,
            title=video.title,
            description=video.description,
            channel_title=video.channel_title,
            published_at=video.published_at,
            duration_seconds=video.duration_seconds,
            formatted_duration=video.formatted_duration,
            thumbnail_url=video.best_thumbnail,
            view_count=video.view_count,
        )


class YoutubePlaylistResponse(BaseModel):
    id: str
    title: str
    channel_title: str
    video_count: int
    total_duration_seconds: int
    formatted_total_duration: str
    videos: List[YoutubeVideoResponse]

    @classmethod
    def from_domain(cls, playlist: YoutubePlaylist) -> "YoutubePlaylistResponse":
        return cls(
            id=playlist.id,
            title=playlist.title,
            channel_title=playlist.channel_title,
            video_count=playlist.video_count,
            total_duration_seconds=playlist.total_duration_seconds,
            formatted_total_duration=playlist.formatted_total_duration,
            videos=[YoutubeVideoResponse.from_domain(v) for v in playlist.videos],
        )


class YoutubeMetadataResponse(BaseModel):
    type: Literal["video", "playlist"]
    video: Optional[YoutubeVideoResponse] = None
    playlist: Optional[YoutubePlaylistResponse] = None

    @classmethod
    def from_dto(cls, dto: YoutubeMetadataDTO) -> "YoutubeMetadataResponse":
        return cls(
            type=dto.type,
            video=YoutubeVideoResponse.from_domain(dto.video) if dto.video else None,
            playlist=YoutubePlaylistResponse.from_domain(dto.playlist) if dto.playlist else None,
        )
