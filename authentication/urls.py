from django.urls import path

from authentication.api.views import (
    GuestLoginAPIView,
    LoginAPIView,
    LogoutAPIView,
    MeAPIView,
    RegisterAPIView,
    UserProfileAPIView,
)

app_name = "authentication"

urlpatterns = [
    path("register/", RegisterAPIView.as_view(), name="register"),
    path("login/", LoginAPIView.as_view(), name="login"),
    path("guest/", GuestLoginAPIView.as_view(), name="guest"),
    path("logout/", LogoutAPIView.as_view(), name="logout"),
    path("me/", MeAPIView.as_view(), name="me"),
    path("users/<uuid:user_id>/", UserProfileAPIView.as_view(), name="user-profile"),
]
