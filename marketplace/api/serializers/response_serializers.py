from rest_framework import serializers


class ErrorResponseSerializer(serializers.Serializer):
    """Body of every error response."""

    error = serializers.CharField(help_text="Machine readable error code")
    detail = serializers.CharField(help_text="Human readable message")


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class PaginationSerializer(serializers.Serializer):
    currentPage = serializers.IntegerField()
    totalPages = serializers.IntegerField()
    hasNext = serializers.BooleanField()
    hasPrev = serializers.BooleanField()
