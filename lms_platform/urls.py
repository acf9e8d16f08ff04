from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # --- Authentication & Profile ---
    path('api/', include('users.urls')),

    # --- Attempts, Resume, Results, Proctoring ---
    path('api/', include('assessments.urls')),

    # --- Tests & Question Bank ---
    path('api/', include('exams.urls')),

    # --- Platform Settings & Audit Logs ---
    path('api/', include('cores.urls')),
]
