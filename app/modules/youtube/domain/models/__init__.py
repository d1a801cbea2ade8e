from .youtube_url import ParsedYoutubeUrl, YoutubeUrlParser, YoutubeUrlType
from .youtube_video import YoutubePlaylist, YoutubeThumbnails, YoutubeVideo

__all__ = [
    "ParsedYoutubeUrl",
    "YoutubePlaylist",
    "YoutubeThumbnails",
    "YoutubeUrlParser",
    "YoutubeUrlType",
    "YoutubeVideo",
]
