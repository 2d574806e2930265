from rest_framework import serializers

from marketplace.api.serializers import PaginationSerializer
from marketplace.models import BugReport


class BugReportSerializer(serializers.ModelSerializer):
    class Meta:
        model = BugReport
        fields = [
            "id",
            "user",
            "email",
            "name",
            "title",
            "description",
            "category",
            "priority",
            "status",
            "user_agent",
            "page_url",
            "screen_resolution",
            "admin_notes",
            "resolved_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BugReportCreateRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(min_length=2, max_length=100, trim_whitespace=True)
    title = serializers.CharField(min_length=5, max_length=200, trim_whitespace=True)
    description = serializers.CharField(min_length=10, max_length=2000, trim_whitespace=True)
    category = serializers.ChoiceField(choices=[choice for choice, _ in BugReport.CATEGORY_CHOICES], default="bug")
    priority = serializers.ChoiceField(
        choices=[choice for choice, _ in BugReport.PRIORITY_CHOICES], default="medium"
    )
    userAgent = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    url = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    screenResolution = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")


class BugReportUpdateRequestSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[choice for choice, _ in BugReport.STATUS_CHOICES], required=False)
    priority = serializers.ChoiceField(choices=[choice for choice, _ in BugReport.PRIORITY_CHOICES], required=False)
    adminNotes = serializers.CharField(max_length=1000, required=False, allow_blank=True, trim_whitespace=True)


class BugReportSubmittedSerializer(serializers.Serializer):
    message = serializers.CharField()
    reportId = serializers.UUIDField()


class BugReportPaginationSerializer(PaginationSerializer):
    totalBugReports = serializers.IntegerField()


class BugReportListResponseSerializer(serializers.Serializer):
    bugReports = BugReportSerializer(many=True)
    pagination = BugReportPaginationSerializer()
