"""
AuthService - Session Authentication Business Logic.

Registration (customers and vendors), password login, guest login and logout
over Django's session framework, plus self-service profile updates.
"""

import logging
import uuid
from datetime import timedelta

from django.contrib.auth import authenticate, get_user_model, login, logout
from django.db import IntegrityError, transaction
from django.utils import timezone

from marketplace.vendors.domain.models import Vendor

from .results import AuthResult

User = get_user_model()
logger = logging.getLogger(__name__)

MODEL_BACKEND = "django.contrib.auth.backends.ModelBackend"


class AuthService:
    """
    Authentication service encapsulating all auth business logic.
    """

    def register(self, data: dict) -> AuthResult:
        """
        Create an account. Vendors get an unverified store profile in the same transaction.

        Args:
            data: validated registration payload (email, username, password, role,
                  and company_name/store_name for vendors)
        """
        role = data.get("role", "customer")
        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=data["username"],
                    email=data["email"],
                    password=data["password"],
                    first_name=data.get("first_name", ""),
                    last_name=data.get("last_name", ""),
                    role=role,
                )
                if role == "vendor":
                    Vendor.objects.create(
                        user=user,
                        company_name=data["company_name"],
                        store_name=data["store_name"],
                        description=data.get("description", ""),
                    )
        except IntegrityError:
            return AuthResult.failed("validation_error", "A user with this email or username already exists.")

        logger.info(f"Registered user {user.id} with role {role}")
        return AuthResult.ok(user, "Registration successful")

    def login(self, request, email: str, password: str) -> AuthResult:
        if not email or not password:
            return AuthResult.failed("validation_error", "Email and password are required.")

        user = authenticate(request, username=email, password=password)
        if user is None:
            logger.info(f"Failed login attempt for {email}")
            return AuthResult.failed("invalid_credentials", "Invalid email or password.")

        login(request, user)
        User.objects.filter(pk=user.pk).update(last_seen_at=timezone.now())
        logger.info(f"User {user.id} logged in")
        return AuthResult.ok(user, "Login successful")

    def guest_login(self, request) -> AuthResult:
        """Create a throwaway guest account and attach it to the session."""
        token = uuid.uuid4().hex[:12]
        user = User(
            username=f"guest_{token}",
            email=f"guest_{token}@guest.local",
            role="customer",
            is_guest=True,
            last_seen_at=timezone.now(),
        )
        user.set_unusable_password()
        user.save()

        login(request, user, backend=MODEL_BACKEND)
        logger.info(f"Guest session started for {user.id}")
        return AuthResult.ok(user, "Guest session started")

    def update_profile(self, user, data: dict) -> AuthResult:
        """
        Change the caller's name or email. Only keys present in ``data`` are applied.

        Args:
            data: validated payload with optional first_name, last_name and email
        """
        email = data.get("email")
        if email and User.objects.filter(email__iexact=email).exclude(pk=user.pk).exists():
            return AuthResult.failed("email_in_use", "Email already in use")

        changed = [name for name in ("first_name", "last_name", "email") if name in data]
        for name in changed:
            setattr(user, name, data[name])
        if changed:
            try:
                user.save(update_fields=changed)
            except IntegrityError:
                return AuthResult.failed("email_in_use", "Email already in use")

        logger.info(f"User {user.id} updated profile fields {changed}")
        return AuthResult.ok(user, "Profile updated successfully")

    def logout(self, request) -> None:
        user_id = getattr(request.user, "id", None)
        logout(request)
        logger.info(f"User {user_id} logged out")

    def cleanup_stale_guests(self, ttl_hours: int) -> int:
        """
        Delete guest accounts idle for longer than ``ttl_hours`` that never placed an order.

        Returns:
            Number of deleted users
        """
        threshold = timezone.now() - timedelta(hours=ttl_hours)
        stale = User.objects.filter(is_guest=True, last_seen_at__lt=threshold, orders__isnull=True)
        deleted, _ = stale.delete()
        if deleted:
            logger.info(f"Removed {deleted} stale guest rows older than {ttl_hours}h")
        return deleted
