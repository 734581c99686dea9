"""Keycloak token introspection: resolves a bearer token to the calling user."""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OIDCUser:
    """Caller identity taken from an active token. `user_id` is the `sub` claim."""

    user_id: UUID
    email: str | None = None
    username: str | None = None


def user_from_claims(claims: dict[str, Any]) -> OIDCUser | None:
    """Build the caller from introspection claims; None unless active with a UUID sub."""
    if not claims.get("active"):
        return None
    sub = claims.get("sub")
    try:
        user_id = UUID(str(sub))
    except ValueError:
        logger.warning("Rejecting token with non-UUID subject %r", sub)
        return None
    return OIDCUser(
        user_id=user_id,
        email=claims.get("email"),
        username=claims.get("preferred_username"),
    )


class KeycloakProvider:
    """Asks the realm's introspection endpoint who a token belongs to."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        client: KeycloakOpenID | None = None,
    ) -> None:
        self._client = client or KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def authenticate(self, token: str) -> OIDCUser | None:
        try:
            claims = self._client.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        return user_from_claims(claims)
