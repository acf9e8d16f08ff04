from django.db import models
from django.core.cache import cache
from django.conf import settings


def platform_default_max_violations():
    return settings.LMS_DEFAULT_MAX_VIOLATIONS


class PlatformSetting(models.Model):
    # --- General ---
    site_name = models.CharField(max_length=100, default="LMS Assessments")
    support_email = models.EmailField(default="support@example.com")
    maintenance_mode = models.BooleanField(default=False)

    # --- Assessment Defaults ---
    default_max_violations = models.PositiveIntegerField(
        default=platform_default_max_violations,
        help_text="Proctoring tolerance for tests that do not set their own"
    )
    default_duration_minutes = models.PositiveIntegerField(
        null=True, blank=True, help_text="Default duration in minutes, empty = unlimited"
    )
    strict_proctoring = models.BooleanField(default=False)

    def save(self, *args, **kwargs):
        self.pk = 1  # Singleton pattern
        super().save(*args, **kwargs)
        cache.set('platform_settings', self)

    def delete(self, *args, **kwargs):
        pass

    @classmethod
    def load(cls):
        obj = cache.get('platform_settings')
        if obj is None:
            obj, created = cls.objects.get_or_create(pk=1)
            cache.set('platform_settings', obj)
        return obj

    def __str__(self):
        return "Platform Settings"


class AuditLog(models.Model):
    ACTION_CHOICES = [
        ('CREATE', 'Create'),
        ('UPDATE', 'Update'),
        ('DELETE', 'Delete'),
        ('PUBLISH', 'Test Published'),
        ('SUBMIT', 'Attempt Submitted'),
        ('SETTINGS', 'Settings Changed'),
    ]

    actor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    target_model = models.CharField(max_length=50, help_text="e.g., Exam, Question, Attempt")
    target_object_id = models.CharField(max_length=100, blank=True, null=True)
    details = models.TextField(blank=True, help_text="Description of changes")
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-timestamp']

    def __str__(self):
        return f"{self.actor} - {self.action} - {self.timestamp}"

    @classmethod
    def record(cls, actor, action, instance, details=''):
        return cls.objects.create(
            actor=actor,
            action=action,
            target_model=instance.__class__.__name__,
            target_object_id=str(instance.pk),
            details=details,
        )
