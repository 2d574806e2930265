from .auth_service import AuthService
from .results import AuthResult

__all__ = ["AuthService", "AuthResult"]
