from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class AuthResult:
    """
    Outcome of an auth or profile call.

    ``error`` is an API error code (``validation_error``, ``invalid_credentials``,
    ``email_in_use``) and ``detail`` the message shown to the client.
    """

    success: bool
    user: Optional[Any] = None
    error: Optional[str] = None
    detail: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, user, message: str) -> "AuthResult":
        return cls(success=True, user=user, message=message)

    @classmethod
    def failed(cls, error: str, detail: str) -> "AuthResult":
        return cls(success=False, error=error, detail=detail)

    def error_payload(self) -> dict:
        return {"error": self.error, "detail": self.detail}
