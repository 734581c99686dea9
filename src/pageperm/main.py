"""Application entry point and composition root."""

import logging

from pageperm import __version__
from pageperm.application.use_cases.page_permission.grant_permission import (
    GrantPagePermissionUseCase,
)
from pageperm.application.use_cases.page_permission.grant_permissions_batch import (
    GrantPagePermissionsBatchUseCase,
)
from pageperm.application.use_cases.page_permission.list_permissions import (
    ListPagePermissionsUseCase,
)
from pageperm.application.use_cases.page_permission.remove_permission import (
    RemovePagePermissionUseCase,
)
from pageperm.application.use_cases.page_permission.update_permission_role import (
    UpdatePagePermissionRoleUseCase,
)
from pageperm.config import Settings, get_settings
from pageperm.infrastructure.auth.keycloak_provider import KeycloakProvider
from pageperm.infrastructure.permission.page_access_resolver import (
    PagePermissionAccessResolver,
)
from pageperm.infrastructure.permission.space_ability import SpaceMemberAbilityChecker
from pageperm.infrastructure.persistence.postgres.connection import create_pool
from pageperm.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from pageperm.interfaces.api.app import create_app
from pageperm.interfaces.api.middleware.auth import AuthMiddleware
from pageperm.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from pageperm.interfaces.api.resources.health import HealthResource
from pageperm.interfaces.api.resources.page_permissions import (
    PageAccessResource,
    PagePermissionAddResource,
    PagePermissionBatchResource,
    PagePermissionGate,
    PagePermissionRemoveResource,
    PagePermissionsResource,
    PagePermissionUpdateResource,
)

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point - run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    logger.info("pageperm v%s starting (%s)", __version__, settings.environment)
    uvicorn.run(create_pageperm_app(settings), host="0.0.0.0", port=8000)


def create_pageperm_app(settings: Settings | None = None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET is not set; all requests are unauthenticated")

    gate = PagePermissionGate(uow_factory, SpaceMemberAbilityChecker(uow_factory))
    resolver = PagePermissionAccessResolver(uow_factory)

    return create_app(
        health_resource=HealthResource(pool),
        permissions_resource=PagePermissionsResource(
            gate, ListPagePermissionsUseCase(uow_factory)
        ),
        add_resource=PagePermissionAddResource(
            gate, GrantPagePermissionUseCase(uow_factory)
        ),
        batch_resource=PagePermissionBatchResource(
            gate,
            GrantPagePermissionsBatchUseCase(
                uow_factory, max_batch_size=settings.batch_max_size
            ),
        ),
        update_resource=PagePermissionUpdateResource(
            gate, UpdatePagePermissionRoleUseCase(uow_factory)
        ),
        remove_resource=PagePermissionRemoveResource(
            gate, RemovePagePermissionUseCase(uow_factory)
        ),
        access_resource=PageAccessResource(resolver),
        middleware=[
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )
