# Marketplace API Serializers shared by every sub-app

from .response_serializers import ErrorResponseSerializer, MessageResponseSerializer, PaginationSerializer

__all__ = ["ErrorResponseSerializer", "MessageResponseSerializer", "PaginationSerializer"]
