# 📄 File: app/modules/youtube/infrastructure/api/data_api_client.py
# 🧭 Purpose (Layman Explanation):
# Talks to Google's YouTube service to read video and playlist details.
# 🧪 Purpose (Technical Summary):
# YouTube Data API v3 implementation of YoutubeApiClient on top of the shared APIClient
# (aiohttp + tenacity retries). videos.list is chunked by 50 ids; playlistItems.list is
# paged until max_results ids are collected.
# 🔗 Dependencies:
# APIClient, YoutubeDurationParser, app.shared.config.settings
# 🔄 Connected Modules / Calls From:
# YoutubeService (via ApplicationContainer)

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.modules.youtube.domain.models.youtube_video import YoutubeThumbnails, YoutubeVideo
from app.modules.youtube.domain.services.duration_parser import YoutubeDurationParser
from app.modules.youtube.domain.services.youtube_api_client import YoutubeApiClient
from app.shared.config.settings import Settings, get_settings
from app.shared.core.exceptions import NotFoundError
from app.shared.infrastructure.external_apis.api_client import APIClient

logger = logging.getLogger(__name__)

MAX_IDS_PER_REQUEST = 50
VIDEO_PARTS = "snippet,contentDetails,statistics"


class DataApiYoutubeClient(YoutubeApiClient):
    """YouTube Data API v3 client authenticated with an API key."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[APIClient] = None):
        settings = settings or get_settings()
        self._api_key = settings.YOUTUBE_API_KEY
        self._client = client or APIClient(
            base_url=settings.YOUTUBE_API_URL,
            api_name="youtube",
            timeout=settings.EXTERNAL_API_TIMEOUT,
        )

    async def get_video_details(self, video_id: str) -> YoutubeVideo:
        response = await self._client.get("videos", params=self._params(part=VIDEO_PARTS, id=video_id))
        items = response.get("items") or []
        if not items:
            raise NotFoundError(f"Video not found: {video_id}", resource_type="youtube_video", resource_id=video_id)
        return self._to_video(items[0])

    async def get_multiple_videos(self, video_ids: List[str]) -> List[YoutubeVideo]:
        videos: List[YoutubeVideo] = []
        for start in range(0, len(video_ids), MAX_IDS_PER_REQUEST):
            chunk = video_ids[start:start + MAX_IDS_PER_REQUEST]
            response = await self._client.get(
                "videos",
                params=self._params(part=VIDEO_PARTS, id=",".join(chunk)),
            )
            videos.extend(self._to_video(item) for item in response.get("items") or [])
        return videos

    async def get_playlist_video_ids(self, playlist_id: str, max_results: int = 50) -> List[str]:
        video_ids: List[str] = []
        page_token: Optional[str] = None

        while True:
            params = self._params(
                part="contentDetails",
                playlistId=playlist_id,
                maxResults=min(max_results - len(video_ids), MAX_IDS_PER_REQUEST),
            )
            if page_token:
                params["pageToken"] = page_token

            response = await self._client.get("playlistItems", params=params)
            for item in response.get("items") or []:
                video_id = (item.get("contentDetails") or {}).get("videoId")
                if video_id:
                    video_ids.append(video_id)

            page_token = response.get("nextPageToken")
            if not page_token or len(video_ids) >= max_results:
                break

        logger.debug(f"Playlist {playlist_id}: {len(video_ids)} video ids")
        return video_ids[:max_results]

    async def close(self) -> None:
        await self._client.close()

    def _params(self, **params: Any) -> Dict[str, Any]:
        return {"key": self._api_key, **params}

    @staticmethod
    def _to_video(item: Dict[str, Any]) -> YoutubeVideo:
        snippet = item.get("snippet") or {}
        content_details = item.get("contentDetails") or {}
        statistics = item.get("statistics") or {}
        thumbnails = snippet.get("thumbnails") or {}

        published_at = snippet.get("publishedAt")
        view_count = statistics.get("viewCount")
        return YoutubeVideo(
            id=item["id"],
            title=snippet.get("title") or "Untitled",
            description=snippet.get("description") or "",
            channel_title=snippet.get("channelTitle") or "Unknown Channel",
            published_at=published_at or datetime.now(timezone.utc),
            duration_seconds=YoutubeDurationParser.parse_to_seconds(content_details.get("duration") or "PT0S"),
            thumbnails=YoutubeThumbnails(**{
                size: (thumbnails.get(size) or {}).get("url")
                for size in ("default", "medium", "high", "standard", "maxres")
            }),
            view_count=int(view_count) if view_count is not None else None,
        )
