from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    AuthResponseSerializer,
    ErrorResponseSerializer,
    LoginRequestSerializer,
    ProfileUpdateSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from authentication.domain.services.auth_service import AuthService


def get_auth_service():
    """Factory to get AuthService instance."""
    return AuthService()


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_register",
        summary="Register a customer or vendor account",
        description="""
        Vendors must also send `company_name` and `store_name`; an unverified
        store profile is created for them. The new user is logged in.
        """,
        request=UserRegistrationSerializer,
        responses={
            201: OpenApiResponse(response=AuthResponseSerializer, description="Account created"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = get_auth_service()
        result = service.register(serializer.validated_data)
        if not result.success:
            return Response(result.error_payload(), status=status.HTTP_400_BAD_REQUEST)

        service.login(request, serializer.validated_data["email"], serializer.validated_data["password"])
        return Response(
            {"message": result.message, "user": UserSerializer(result.user).data},
            status=status.HTTP_201_CREATED,
        )


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(response=AuthResponseSerializer, description="Login successful"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = get_auth_service().login(
            request, serializer.validated_data["email"], serializer.validated_data["password"]
        )
        if not result.success:
            return Response(result.error_payload(), status=status.HTTP_401_UNAUTHORIZED)

        return Response({"message": result.message, "user": UserSerializer(result.user).data})


class GuestLoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_guest",
        summary="Start a guest session",
        request=None,
        responses={201: OpenApiResponse(response=AuthResponseSerializer, description="Guest session started")},
        tags=["Authentication"],
    )
    def post(self, request):
        result = get_auth_service().guest_login(request)
        return Response(
            {"message": result.message, "user": UserSerializer(result.user).data},
            status=status.HTTP_201_CREATED,
        )


class LogoutAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_logout",
        summary="End the current session",
        request=None,
        responses={200: OpenApiResponse(description="Logged out")},
        tags=["Authentication"],
    )
    def post(self, request):
        get_auth_service().logout(request)
        return Response({"message": "Logged out"})


class MeAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_me",
        summary="Current user",
        responses={200: UserSerializer, 401: OpenApiResponse(response=ErrorResponseSerializer)},
        tags=["Authentication"],
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)


class UserProfileAPIView(APIView):
    """Read or update a profile. Users only ever reach their own."""

    permission_classes = [permissions.IsAuthenticated]

    def _forbidden(self):
        return Response(
            {"error": "permission_denied", "detail": "You can only access your own profile"},
            status=status.HTTP_403_FORBIDDEN,
        )

    @extend_schema(
        operation_id="users_profile",
        summary="Get a user profile",
        responses={
            200: UserSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Another user's profile"),
        },
        tags=["Users"],
    )
    def get(self, request, user_id):
        if user_id != request.user.pk:
            return self._forbidden()
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        operation_id="users_profile_update",
        summary="Update a user profile",
        request=ProfileUpdateSerializer,
        responses={
            200: AuthResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Email already in use"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Another user's profile"),
        },
        tags=["Users"],
    )
    def put(self, request, user_id):
        if user_id != request.user.pk:
            return self._forbidden()

        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = get_auth_service().update_profile(request.user, serializer.validated_data)
        if not result.success:
            return Response(result.error_payload(), status=status.HTTP_400_BAD_REQUEST)
        return Response({"message": result.message, "user": UserSerializer(result.user).data})
