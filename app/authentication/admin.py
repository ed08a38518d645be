"""
Django admin configuration for authentication models.

Registers User, Profile and LinkedAccount with the Django admin site.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import LinkedAccount, Profile, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin configuration for User model.

    Customized for email-based authentication. Profile data (name, handle,
    address) is managed via ProfileAdmin.
    """

    list_display = (
        "email",
        "email_verified_at",
        "is_active",
        "is_staff",
        "date_joined",
    )
    list_filter = (
        "is_active",
        "is_staff",
        "is_superuser",
        "date_joined",
    )
    search_fields = ("email",)
    ordering = ("-date_joined",)

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            "Status",
            {"fields": ("email_verified_at", "is_active", "is_staff", "is_superuser")},
        ),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("date_joined", "last_login")},
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2"),
            },
        ),
    )

    readonly_fields = ("date_joined", "last_login")


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "handle", "first_name", "last_name", "created_at")
    list_filter = ("created_at",)
    search_fields = ("user__email", "handle", "first_name", "last_name")
    ordering = ("-created_at",)

    raw_id_fields = ("user",)
    readonly_fields = ("handle", "created_at", "updated_at")

    fieldsets = (
        ("User", {"fields": ("user", "handle")}),
        ("Identity", {"fields": ("first_name", "last_name", "address")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )


@admin.register(LinkedAccount)
class LinkedAccountAdmin(admin.ModelAdmin):
    """Authentication providers linked to a user."""

    list_display = ("user", "provider", "provider_user_id", "created_at")
    list_filter = ("provider", "created_at")
    search_fields = ("user__email", "provider_user_id")
    ordering = ("-created_at",)

    raw_id_fields = ("user",)
    readonly_fields = ("created_at", "updated_at")
