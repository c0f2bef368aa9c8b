"""Keycloak OIDC provider for token introspection."""

import logging
from dataclasses import dataclass, field

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token."""

    user_id: str
    username: str | None
    groups: list[str] = field(default_factory=list)


def _normalize_group(group: str) -> str:
    # Keycloak group paths look like "/team-a"; the claim consumer uses bare names.
    return group.lstrip("/")


class KeycloakProvider:
    """Keycloak OIDC - validates tokens and extracts the caller's groups."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect token, return user info or None when inactive or rejected."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("auth.introspect.failed", extra={"error": str(e)})
            return None
        if not token_info.get("active"):
            return None
        return OIDCUser(
            user_id=token_info.get("sub", ""),
            username=token_info.get("preferred_username"),
            groups=[_normalize_group(g) for g in token_info.get("groups", []) if g],
        )
