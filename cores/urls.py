from django.urls import path
from .views import PlatformSettingView, AuditLogListView

urlpatterns = [
    # --- Platform Administration ---
    path('platform/settings/', PlatformSettingView.as_view(), name='platform-settings'),
    path('platform/audit-logs/', AuditLogListView.as_view(), name='audit-logs'),
]
