from .user_status_enum import UserStatus

__all__ = ["UserStatus"]
