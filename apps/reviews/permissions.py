"""Authorship guard for review deletion."""

from __future__ import annotations

from shared.domain.errors import Forbidden


def is_author(identity, review) -> bool:
    return identity is not None and review.author_id == identity.pk


def ensure_author(identity, review) -> None:
    if not is_author(identity, review):
        raise Forbidden("You are not the author of this review.")
