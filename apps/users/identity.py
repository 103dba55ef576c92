"""Identity store: registration and credential verification.

Credential checks go through a ``CredentialVerifier`` capability. Each
supported login method is one object satisfying the protocol, registered
under a method name. Only local passwords exist today.
"""

from __future__ import annotations

import logging
from typing import Protocol

from django.contrib.auth import authenticate, get_user_model  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore

from shared.domain.errors import DuplicateUser

logger = logging.getLogger(__name__)

User = get_user_model()


class CredentialVerifier(Protocol):
    """Resolves a username plus credential into a user, or ``None``."""

    def verify(self, username: str, credential: str, request=None):
        ...


class PasswordVerifier:
    """Checks a local password through Django's authentication backends."""

    def verify(self, username: str, credential: str, request=None):
        if not username or not credential:
            return None
        return authenticate(request, username=username, password=credential)


CREDENTIAL_VERIFIERS: dict[str, CredentialVerifier] = {
    "password": PasswordVerifier(),
}


def verify(username: str, credential: str, *, method: str = "password", request=None):
    """Return the matching active user, or ``None`` if the credential is wrong."""
    try:
        verifier = CREDENTIAL_VERIFIERS[method]
    except KeyError:
        raise ValueError(f"Unsupported credential method: {method}") from None
    user = verifier.verify(username, credential, request=request)
    if user is None:
        logger.info(f"Failed {method} login for {username!r}")
    return user


def register(username: str, email: str, password: str):
    """Create a user or raise ``DuplicateUser`` on a username/email collision."""
    if User.objects.filter(username__iexact=username).exists():
        raise DuplicateUser("That username is already taken.")
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateUser("An account with that email already exists.")
    try:
        with transaction.atomic():
            user = User.objects.create_user(username=username, email=email, password=password)
    except IntegrityError as exc:
        # Lost a race against a concurrent signup with the same name.
        raise DuplicateUser() from exc
    logger.info(f"Registered user {user.pk} ({user.username})")
    return user
