"""Auth middleware - extracts user and groups from the bearer token or allows anonymous."""

from dataclasses import dataclass, field

import falcon
import falcon.asgi

from nsacl.application.dto.actor import Actor


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    username: str | None = None
    groups: list[str] = field(default_factory=list)
    is_admin: bool = False


class AuthMiddleware:
    """Middleware that validates the token and sets req.context.user.

    A missing token (or disabled authentication) yields an anonymous user without
    groups; an invalid token yields None.
    """

    def __init__(self, keycloak_provider=None, admin_group: str = "") -> None:
        self._keycloak = keycloak_provider
        self._admin_group = admin_group

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer ") and self._keycloak:
            user = self._keycloak.decode_token(auth[7:])
            if user:
                req.context.user = RequestUser(
                    user_id=user.user_id,
                    username=user.username,
                    groups=list(user.groups),
                    is_admin=bool(self._admin_group) and self._admin_group in user.groups,
                )
            else:
                req.context.user = None
        else:
            req.context.user = RequestUser(user_id="anonymous")


def actor_from_request(req: falcon.asgi.Request) -> Actor:
    """Actor for the use cases; 401 when the token was rejected."""
    user = getattr(req.context, "user", None)
    if not user:
        raise falcon.HTTPUnauthorized(title="Unauthorized")
    return Actor(user_id=user.user_id, groups=tuple(user.groups), is_admin=user.is_admin)
