"""
Django admin configuration for one-time passwords.

Codes are read-only here and the code value itself is never shown;
support staff can only see whether a code exists and when it was issued.
"""

from django.contrib import admin

from otp.models import OneTimePassword


@admin.register(OneTimePassword)
class OneTimePasswordAdmin(admin.ModelAdmin):
    list_display = ("user", "operation", "is_active", "created_at")
    list_filter = ("operation", "is_active", "created_at")
    search_fields = ("user__email",)
    ordering = ("-created_at",)
    raw_id_fields = ("user",)
    fields = ("user", "operation", "is_active", "created_at", "updated_at")
    readonly_fields = fields

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
