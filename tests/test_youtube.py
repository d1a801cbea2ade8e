"""Tests for YouTube URL parsing, durations and the cached metadata service."""

from typing import Any, Dict, List

import pytest

from app.modules.youtube.application.services.youtube_service import YoutubeService
from app.modules.youtube.domain.models.youtube_url import YoutubeUrlParser, YoutubeUrlType
from app.modules.youtube.domain.models.youtube_video import YoutubePlaylist
from app.modules.youtube.domain.services.duration_parser import YoutubeDurationParser
from app.modules.youtube.infrastructure.api.data_api_client import DataApiYoutubeClient
from app.shared.core.exceptions import ErrorKind, NotFoundError

from tests.fakes import FakeYoutubeClient, make_video

VIDEO_ID = "dQw4w9WgXcQ"
PLAYLIST_ID = "PLx0sYbCqOb8TBPRdmBHs5Iftvv9TPboYG"


class TestYoutubeUrlParser:
    """Tests for URL classification."""

    @pytest.fixture
    def parser(self):
        return YoutubeUrlParser()

    @pytest.mark.parametrize("url", [
        f"https://www.youtube.com/watch?v={VIDEO_ID}",
        f"https://youtu.be/{VIDEO_ID}",
        f"https://www.youtube.com/embed/{VIDEO_ID}",
        f"https://www.youtube.com/v/{VIDEO_ID}",
        f"  https://youtu.be/{VIDEO_ID}?t=42  ",
    ])
    def test_video_urls(self, parser, url):
        parsed = parser.parse(url)

        assert parsed.type == YoutubeUrlType.VIDEO
        assert parsed.video_id == VIDEO_ID

    def test_playlist_url(self, parser):
        parsed = parser.parse(f"https://www.youtube.com/playlist?list={PLAYLIST_ID}")

        assert parsed.type == YoutubeUrlType.PLAYLIST
        assert parsed.playlist_id == PLAYLIST_ID

    def test_watch_url_with_list_is_playlist(self, parser):
        parsed = parser.parse(f"https://www.youtube.com/watch?v={VIDEO_ID}&list={PLAYLIST_ID}")

        assert parsed.type == YoutubeUrlType.PLAYLIST
        assert parsed.playlist_id == PLAYLIST_ID

    @pytest.mark.parametrize("url", [None, "", "https://vimeo.com/12345", "https://youtu.be/short"])
    def test_invalid_urls(self, parser, url):
        assert not parser.is_valid(url)


class TestYoutubeDurationParser:
    """Tests for ISO-8601 duration handling."""

    @pytest.mark.parametrize("duration, seconds", [
        ("PT1H2M3S", 3723),
        ("PT15M", 900),
        ("PT45S", 45),
        ("PT2H", 7200),
        ("PT0S", 0),
        ("P1D", 0),
        ("", 0),
    ])
    def test_parse_to_seconds(self, duration, seconds):
        assert YoutubeDurationParser.parse_to_seconds(duration) == seconds

    def test_format_seconds(self):
        assert YoutubeDurationParser.format_seconds(3723) == "1:02:03"
        assert YoutubeDurationParser.format_seconds(65) == "1:05"
        assert YoutubeDurationParser.format_seconds(0) == "0:00"

    def test_is_valid_duration(self):
        assert YoutubeDurationParser.is_valid_duration("PT4M13S")
        assert not YoutubeDurationParser.is_valid_duration("4 minutes")
        assert not YoutubeDurationParser.is_valid_duration("")


class TestYoutubeService:
    """Tests for metadata lookups through the cache."""

    @pytest.fixture
    def api(self):
        return FakeYoutubeClient(
            videos=[make_video(VIDEO_ID, 213), make_video("aaaaaaaaaaa", 600), make_video("bbbbbbbbbbb", 3000)],
            playlists={PLAYLIST_ID: ["aaaaaaaaaaa", "deleted0000", "bbbbbbbbbbb"]},
        )

    @pytest.fixture
    def service(self, api, cache):
        return YoutubeService(api, cache)

    @pytest.mark.asyncio
    async def test_video_lookup_is_cached(self, service, api):
        first = (await service.fetch_youtube_data(f"https://youtu.be/{VIDEO_ID}")).unwrap()
        second = (await service.fetch_youtube_data(f"https://www.youtube.com/watch?v={VIDEO_ID}")).unwrap()

        assert first.type == "video"
        assert second.video == first.video
        assert first.video.formatted_duration == "3:33"
        assert api.calls == [("video", VIDEO_ID)]

    @pytest.mark.asyncio
    async def test_invalidated_video_is_fetched_again(self, service, api):
        await service.fetch_youtube_data(f"https://youtu.be/{VIDEO_ID}")

        await service.invalidate_video(VIDEO_ID)
        await service.fetch_youtube_data(f"https://youtu.be/{VIDEO_ID}")

        assert api.calls == [("video", VIDEO_ID), ("video", VIDEO_ID)]

    @pytest.mark.asyncio
    async def test_playlist_keeps_order_and_drops_missing_videos(self, service):
        result = await service.fetch_youtube_data(f"https://www.youtube.com/playlist?list={PLAYLIST_ID}")

        playlist: YoutubePlaylist = result.unwrap().playlist
        assert [video.id for video in playlist.videos] == ["aaaaaaaaaaa", "bbbbbbbbbbb"]
        assert playlist.video_count == 2
        assert playlist.total_duration_seconds == 3600
        assert playlist.formatted_total_duration == "1h 0m"
        assert playlist.channel_title == "LearnHub Channel"

    @pytest.mark.asyncio
    async def test_playlist_uses_cached_ids_and_videos(self, service, api):
        url = f"https://www.youtube.com/playlist?list={PLAYLIST_ID}"
        await service.fetch_youtube_data(url)

        await service.fetch_youtube_data(url)

        assert [call[0] for call in api.calls].count("playlist") == 1
        # only the video that does not exist is looked up again
        assert api.calls[-1] == ("videos", ("deleted0000",))

    @pytest.mark.asyncio
    async def test_invalid_url_is_validation_failure(self, service, api):
        result = await service.fetch_youtube_data("https://example.org/not-youtube")

        assert result.error_kind == ErrorKind.VALIDATION
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_unknown_video_is_not_found(self, service):
        result = await service.fetch_youtube_data("https://youtu.be/zzzzzzzzzzz")

        assert result.error_kind == ErrorKind.NOT_FOUND


class _RecordingApiClient:
    """Stands in for the shared APIClient: replays canned responses in order."""

    def __init__(self, responses: List[Dict[str, Any]]):
        self._responses = list(responses)
        self.requests: List[Dict[str, Any]] = []

    async def get(self, endpoint: str, params: Dict[str, Any] = None, headers: Dict[str, str] = None) -> Dict[str, Any]:
        self.requests.append({"endpoint": endpoint, "params": params})
        return self._responses.pop(0)

    async def close(self) -> None:
        pass


class TestDataApiYoutubeClient:
    """Tests for the YouTube Data API v3 adapter."""

    @pytest.mark.asyncio
    async def test_video_details_mapping(self, settings):
        api = _RecordingApiClient([{
            "items": [{
                "id": VIDEO_ID,
                "snippet": {
                    "title": "Intro to SQL",
                    "channelTitle": "DB Academy",
                    "publishedAt": "2023-05-01T12:00:00Z",
                    "thumbnails": {"high": {"url": "https://i.ytimg.com/vi/x/hq.jpg"}},
                },
                "contentDetails": {"duration": "PT12M30S"},
                "statistics": {"viewCount": "1024"},
            }],
        }])
        client = DataApiYoutubeClient(settings, client=api)

        video = await client.get_video_details(VIDEO_ID)

        assert video.title == "Intro to SQL"
        assert video.duration_seconds == 750
        assert video.view_count == 1024
        assert video.best_thumbnail == "https://i.ytimg.com/vi/x/hq.jpg"
        assert api.requests[0]["params"]["id"] == VIDEO_ID

    @pytest.mark.asyncio
    async def test_missing_video_raises_not_found(self, settings):
        client = DataApiYoutubeClient(settings, client=_RecordingApiClient([{"items": []}]))

        with pytest.raises(NotFoundError):
            await client.get_video_details(VIDEO_ID)

    @pytest.mark.asyncio
    async def test_playlist_ids_follow_pages(self, settings):
        def page(ids, next_token=None):
            response = {"items": [{"contentDetails": {"videoId": video_id}} for video_id in ids]}
            if next_token:
                response["nextPageToken"] = next_token
            return response

        api = _RecordingApiClient([page(["a1", "a2"], "page-2"), page(["b1"])])
        client = DataApiYoutubeClient(settings, client=api)

        video_ids = await client.get_playlist_video_ids(PLAYLIST_ID)

        assert video_ids == ["a1", "a2", "b1"]
        assert api.requests[1]["params"]["pageToken"] == "page-2"
