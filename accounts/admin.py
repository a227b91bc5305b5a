from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from accounts.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "role", "station", "is_active")
    list_filter = ("role", "station", "is_active")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Station", {"fields": ("role", "station")}),
    )
