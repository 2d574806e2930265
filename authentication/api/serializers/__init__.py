from .auth_serializers import LoginRequestSerializer, ProfileUpdateSerializer, UserRegistrationSerializer, UserSerializer
from .response_serializers import AuthResponseSerializer, ErrorResponseSerializer

__all__ = [
    "AuthResponseSerializer",
    "ErrorResponseSerializer",
    "LoginRequestSerializer",
    "ProfileUpdateSerializer",
    "UserRegistrationSerializer",
    "UserSerializer",
]
