# 📄 File: app/modules/youtube/application/services/youtube_service.py
# 🧭 Purpose (Layman Explanation):
# Given any YouTube link, returns the details of the video or the whole playlist, remembering
# answers for a day so we do not keep asking Google the same thing.
#
# 🧪 Purpose (Technical Summary):
# Cache-first metadata lookup. Videos are cached under `youtube:video:{id}`; playlists cache
# only their ordered id list under `youtube:playlist:{id}`. Playlist lookups fetch the
# uncached videos in one bulk call and return them in playlist order.
#
# 🔗 Dependencies:
# - YoutubeApiClient, CacheService, YoutubeUrlParser, CacheConfig
#
# 🔄 Connected Modules / Calls From:
# - youtube routes, ApplicationContainer

import logging
from typing import Dict, List, Optional

from app.modules.youtube.application.dto.youtube_dto import YoutubeMetadataDTO
from app.modules.youtube.domain.models.youtube_url import YoutubeUrlParser, YoutubeUrlType
from app.modules.youtube.domain.models.youtube_video import YoutubePlaylist, YoutubeThumbnails, YoutubeVideo
from app.modules.youtube.domain.services.youtube_api_client import YoutubeApiClient
from app.shared.config.redis import CacheConfig
from app.shared.core.exceptions import ValidationError
from app.shared.core.result import ApplicationResult, result_boundary
from app.shared.infrastructure.cache import CacheService

logger = logging.getLogger(__name__)


class YoutubeService:
    """YouTube metadata with a read-through cache."""

    def __init__(
        self,
        api_client: YoutubeApiClient,
        cache: CacheService,
        url_parser: Optional[YoutubeUrlParser] = None,
        ttl: Optional[int] = None,
    ):
        self._api = api_client
        self._cache = cache
        self._parser = url_parser or YoutubeUrlParser()
        self._ttl = ttl or CacheConfig.get_ttl("youtube_video")

    @result_boundary("fetch youtube data")
    async def fetch_youtube_data(self, url: str, max_playlist_videos: int = 50) -> ApplicationResult[YoutubeMetadataDTO]:
        parsed = self._parser.parse(url)

        if parsed.type == YoutubeUrlType.VIDEO:
            video = await self._fetch_video(parsed.video_id)
            return YoutubeMetadataDTO(type="video", video=video)

        if parsed.type == YoutubeUrlType.PLAYLIST:
            playlist = await self._fetch_playlist(parsed.playlist_id, max_playlist_videos)
            return YoutubeMetadataDTO(type="playlist", playlist=playlist)

        raise ValidationError("Invalid Youtube URL", field="url", value=url)

    def is_valid_youtube_url(self, url: str) -> bool:
        return self._parser.is_valid(url)

    async def invalidate_video(self, video_id: str) -> None:
        await self._cache.delete(self._video_key(video_id))

    async def invalidate_playlist(self, playlist_id: str) -> None:
        await self._cache.delete(CacheConfig.get_cache_key("youtube_playlist", playlist_id=playlist_id))

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    async def _fetch_video(self, video_id: str) -> YoutubeVideo:
        cached = await self._cache.get(self._video_key(video_id))
        if cached:
            return YoutubeVideo.model_validate(cached)

        video = await self._api.get_video_details(video_id)
        await self._store_video(video)
        return video

    async def _fetch_playlist(self, playlist_id: str, max_videos: int) -> YoutubePlaylist:
        playlist_key = CacheConfig.get_cache_key("youtube_playlist", playlist_id=playlist_id)
        video_ids = await self._cache.get(playlist_key)
        if not video_ids:
            video_ids = await self._api.get_playlist_video_ids(playlist_id, max_videos)
            await self._cache.set(playlist_key, video_ids, ttl=CacheConfig.get_ttl("youtube_playlist"))

        videos = await self._fetch_videos(video_ids)
        first = videos[0] if videos else None
        return YoutubePlaylist(
            id=playlist_id,
            channel_title=first.channel_title if first else "Unknown",
            thumbnails=first.thumbnails if first else YoutubeThumbnails(),
            videos=videos,
        )

    async def _fetch_videos(self, video_ids: List[str]) -> List[YoutubeVideo]:
        found: Dict[str, YoutubeVideo] = {}
        uncached: List[str] = []

        for video_id in video_ids:
            cached = await self._cache.get(self._video_key(video_id))
            if cached:
                found[video_id] = YoutubeVideo.model_validate(cached)
            else:
                uncached.append(video_id)

        if uncached:
            logger.debug(f"Fetching {len(uncached)} uncached videos of {len(video_ids)}")
            for video in await self._api.get_multiple_videos(uncached):
                await self._store_video(video)
                found[video.id] = video

        # Deleted or private videos are dropped
        return [found[video_id] for video_id in video_ids if video_id in found]

    async def _store_video(self, video: YoutubeVideo) -> None:
        await self._cache.set(self._video_key(video.id), video.model_dump(mode="json"), ttl=self._ttl)

    @staticmethod
    def _video_key(video_id: str) -> str:
        return CacheConfig.get_cache_key("youtube_video", video_id=video_id)
