# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    class Role(models.TextChoices):
        LEARNER = "learner", "Learner"
        FACULTY = "faculty", "Faculty"
        ADMIN = "admin", "Admin"
        SUPERADMIN = "superadmin", "Super Admin"
        ROOTADMIN = "rootadmin", "Root Admin"

    # Enforce unique email for authentication
    email = models.EmailField(unique=True)

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.LEARNER)

    # The admin who provisioned this account; tests are scoped to it
    created_by = models.ForeignKey(
        'self', on_delete=models.SET_NULL, null=True, blank=True, related_name='created_users'
    )

    # Set email as the main field for authentication
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def __str__(self):
        return self.email

    @property
    def is_learner(self):
        return self.role == self.Role.LEARNER

    @property
    def is_platform_admin(self):
        """SuperAdmin and RootAdmin see across every tenant."""
        return self.is_superuser or self.role in (self.Role.SUPERADMIN, self.Role.ROOTADMIN)
