"""Contract for fetching YouTube metadata from an upstream API."""

from abc import ABC, abstractmethod
from typing import List

from app.modules.youtube.domain.models.youtube_video import YoutubeVideo


class YoutubeApiClient(ABC):

    @abstractmethod
    async def get_video_details(self, video_id: str) -> YoutubeVideo:
        """
        Raises:
            NotFoundError: If the video does not exist or is private
        """
        pass

    @abstractmethod
    async def get_multiple_videos(self, video_ids: List[str]) -> List[YoutubeVideo]:
        """Bulk lookup; unknown ids are silently missing from the result."""
        pass

    @abstractmethod
    async def get_playlist_video_ids(self, playlist_id: str, max_results: int = 50) -> List[str]:
        pass
