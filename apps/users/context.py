"""Authentication gate.

``RequestContext`` is built once per request and threaded explicitly into
every guard and service call, so no service reads ambient auth state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shared.domain.errors import Unauthenticated

RETURN_PATH_SESSION_KEY = "return_to"


@dataclass(frozen=True)
class RequestContext:
    identity: Any = None
    session: Any = None
    path: str = ""

    @classmethod
    def from_request(cls, request) -> "RequestContext":
        user = getattr(request, "user", None)
        identity = user if user is not None and user.is_authenticated else None
        return cls(
            identity=identity,
            session=getattr(request, "session", None),
            path=request.get_full_path(),
        )

    def current_user(self):
        return self.identity

    def require_identity(self, *, remember: bool = True):
        """Return the identity or fail, remembering where the user was headed.

        Pass ``remember=False`` for destinations that must not be replayed
        after login, such as logout.
        """
        identity = self.current_user()
        if identity is not None:
            return identity
        if remember and self.session is not None and self.path:
            self.session[RETURN_PATH_SESSION_KEY] = self.path
        raise Unauthenticated()


def pop_return_path(session) -> str | None:
    """Consume the stored return path; it is honored at most once."""
    if session is None:
        return None
    return session.pop(RETURN_PATH_SESSION_KEY, None)
