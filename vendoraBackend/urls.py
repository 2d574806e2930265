"""
URL configuration for vendoraBackend project.

All JSON endpoints live under /api/. Prometheus scrapes /metrics/.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from marketplace.api.views.prometheus_metrics import prometheus_metrics

urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # API endpoints
    path("api/auth/", include("authentication.urls")),
    path("api/payments/", include("payment_system.urls", namespace="payment_system")),
    path("api/admin/", include("payment_system.api.admin_urls", namespace="payment_admin")),
    path("api/", include("marketplace.urls")),
    # Prometheus metrics endpoint
    path("metrics/", prometheus_metrics, name="prometheus-metrics"),
]
