from .data_api_client import DataApiYoutubeClient

__all__ = ["DataApiYoutubeClient"]
