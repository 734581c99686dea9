"""Resolves the calling user for every request."""

import falcon.asgi

from pageperm.infrastructure.auth.keycloak_provider import KeycloakProvider, OIDCUser

# Resources read the caller as req.context.user; None means unauthenticated.
RequestUser = OIDCUser

_BEARER = "Bearer "


def bearer_token(header: str | None) -> str | None:
    if not header or not header.startswith(_BEARER):
        return None
    return header[len(_BEARER):].strip() or None


class AuthMiddleware:
    """Sets req.context.user from the bearer token, or None."""

    def __init__(self, keycloak_provider: KeycloakProvider | None = None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        req.context.user = None
        token = bearer_token(req.get_header("Authorization"))
        if token and self._keycloak:
            req.context.user = self._keycloak.authenticate(token)

