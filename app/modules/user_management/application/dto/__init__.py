from .user_dto import LoginResultDTO

__all__ = ["LoginResultDTO"]
