"""
Credentials and the authenticated session value produced by the authenticator.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from egghead_cli.exceptions import NotAuthenticated

if TYPE_CHECKING:
    from egghead_cli.api.client import EggheadClient


@dataclass(frozen=True)
class Credentials:
    """An egghead.io account email address and password."""

    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class Session:
    """
    The result of a successful sign-in.

    Bundles the credentials, the durable access token used for course feeds and
    the HTTP client whose cookie jar holds the signed-in state. It is never
    mutated after construction and is shared read-only by every retrieval
    service.
    """

    credentials: Credentials
    access_token: str = field(repr=False)
    client: "EggheadClient" = field(repr=False, compare=False)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)


def require_authenticated(session: Optional[Session]) -> Session:
    """Returns the session if it is usable, otherwise raises NotAuthenticated."""
    if session is None or not session.is_authenticated:
        raise NotAuthenticated()
    return session
