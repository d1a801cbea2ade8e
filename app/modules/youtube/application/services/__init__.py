from .youtube_service import YoutubeService

__all__ = ["YoutubeService"]
