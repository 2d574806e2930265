from django.http import HttpResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny


@api_view(["GET"])
@permission_classes([AllowAny])
@throttle_classes([])
def prometheus_metrics(request):
    """
    Exposes Prometheus metrics for every app in the process.
    """
    # Make sure every metric module is registered before the first scrape
    import marketplace.infra.observability.metrics  # noqa: F401
    import payment_system.infra.observability.metrics  # noqa: F401

    return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
