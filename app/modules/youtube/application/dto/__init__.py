from .youtube_dto import YoutubeMetadataDTO

__all__ = ["YoutubeMetadataDTO"]
