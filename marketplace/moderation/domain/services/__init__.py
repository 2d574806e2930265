from .moderation_service import ModerationService
from .support_service import SupportService

__all__ = ["ModerationService", "SupportService"]
