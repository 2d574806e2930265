from .auth_views import (
    GuestLoginAPIView,
    LoginAPIView,
    LogoutAPIView,
    MeAPIView,
    RegisterAPIView,
    UserProfileAPIView,
)

__all__ = [
    "GuestLoginAPIView",
    "LoginAPIView",
    "LogoutAPIView",
    "MeAPIView",
    "RegisterAPIView",
    "UserProfileAPIView",
]
