from .user_commands import (
    ChangePasswordCommand,
    LoginCommand,
    RegisterUserCommand,
    UpdateProfileCommand,
)

__all__ = [
    "ChangePasswordCommand",
    "LoginCommand",
    "RegisterUserCommand",
    "UpdateProfileCommand",
]
