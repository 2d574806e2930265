from django.urls import path

from .api.views import payment_views

app_name = "payment_system"

urlpatterns = [
    path("order/<uuid:order_id>/", payment_views.order_payment_details, name="order_payment_details"),
    path("vendor/details/", payment_views.vendor_account_details, name="vendor_account_details"),
    path("vendor/setup/", payment_views.vendor_account_setup, name="vendor_account_setup"),
    path("vendor/earnings/", payment_views.vendor_earnings, name="vendor_earnings"),
]
