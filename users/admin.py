from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class LmsUserAdmin(UserAdmin):
    list_display = ('email', 'username', 'role', 'created_by', 'is_active')
    list_filter = ('role', 'is_active')
    fieldsets = UserAdmin.fieldsets + (
        ('Tenant', {'fields': ('role', 'created_by')}),
    )
