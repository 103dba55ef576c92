"""Ownership guard for listing mutations."""

from __future__ import annotations

from shared.domain.errors import Forbidden


def is_owner(identity, listing) -> bool:
    return identity is not None and listing.owner_id == identity.pk


def ensure_owner(identity, listing) -> None:
    if not is_owner(identity, listing):
        raise Forbidden("You are not the owner of this listing.")
