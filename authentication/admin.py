from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from authentication.models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("email", "username", "role", "is_guest", "is_active", "date_joined")
    list_filter = ("role", "is_guest", "is_active", "is_superuser")
    search_fields = ("email", "username")
    ordering = ("-date_joined",)
    readonly_fields = ("date_joined", "last_login")
    fieldsets = UserAdmin.fieldsets + (("Marketplace", {"fields": ("role", "is_guest", "last_seen_at")}),)
