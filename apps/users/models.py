"""User domain models for Staybook.

Users sign up with a unique username and email and authenticate with a
password. Django's hasher stores only the salted hash. Identities are
never deleted by the listing and review workflows.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, UserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomUserManager(UserManager):
    """Manager that normalizes email and username before saving."""

    use_in_migrations = True

    def create_user(self, username: str, email: str | None = None, password: str | None = None, **extra_fields: Any):
        if not email:
            raise ValueError("Email is required to create a user.")
        return super().create_user(username, email=email, password=password, **extra_fields)


class CustomUser(AbstractUser):
    """Platform user: the owner of listings and the author of reviews."""

    email = models.EmailField(_("Email"), unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    REQUIRED_FIELDS = ["email"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.username


# Short alias used across apps and tests
User = CustomUser
