"""Result of a YouTube metadata lookup: exactly one of video or playlist is set."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from app.modules.youtube.domain.models.youtube_video import YoutubePlaylist, YoutubeVideo


class YoutubeMetadataDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["video", "playlist"]
    video: Optional[YoutubeVideo] = None
    playlist: Optional[YoutubePlaylist] = None
