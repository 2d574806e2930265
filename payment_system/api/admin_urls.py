from django.urls import path

from .views import admin_views

app_name = "payment_admin"

urlpatterns = [
    path("payouts/<uuid:payout_id>/status/", admin_views.update_payout_status, name="payout_status"),
    path(
        "payment-accounts/<uuid:account_id>/verification/",
        admin_views.payment_account_verification,
        name="payment_account_verification",
    ),
]
