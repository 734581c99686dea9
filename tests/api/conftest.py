"""Fixtures for API tests."""

from uuid import UUID, uuid4

import pytest
from falcon.testing import TestClient

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
from pageperm.infrastructure.permission.page_access_resolver import (
    PagePermissionAccessResolver,
)
from pageperm.infrastructure.permission.space_ability import SpaceMemberAbilityChecker
from pageperm.interfaces.api.app import create_app
from pageperm.interfaces.api.middleware.auth import RequestUser
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


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing (None when user_id is None)."""

    def __init__(self, user_id: UUID | None) -> None:
        self._user_id = user_id

    async def process_request(self, req, resp):
        req.context.user = RequestUser(user_id=self._user_id) if self._user_id else None


@pytest.fixture
def caller_id() -> UUID:
    """Id of the authenticated API caller."""
    return uuid4()


def _build_app(uow_factory, caller_id):
    gate = PagePermissionGate(uow_factory, SpaceMemberAbilityChecker(uow_factory))
    return create_app(
        health_resource=HealthResource(),
        permissions_resource=PagePermissionsResource(
            gate, ListPagePermissionsUseCase(uow_factory)
        ),
        add_resource=PagePermissionAddResource(gate, GrantPagePermissionUseCase(uow_factory)),
        batch_resource=PagePermissionBatchResource(
            gate, GrantPagePermissionsBatchUseCase(uow_factory)
        ),
        update_resource=PagePermissionUpdateResource(
            gate, UpdatePagePermissionRoleUseCase(uow_factory)
        ),
        remove_resource=PagePermissionRemoveResource(
            gate, RemovePagePermissionUseCase(uow_factory)
        ),
        access_resource=PageAccessResource(PagePermissionAccessResolver(uow_factory)),
        middleware=[AuthBypassMiddleware(caller_id)],
    )


@pytest.fixture
def client(uow_factory, caller_id) -> TestClient:
    """Falcon ASGI test client authenticated as caller_id."""
    return TestClient(_build_app(uow_factory, caller_id))


@pytest.fixture
def anonymous_client(uow_factory) -> TestClient:
    """Falcon ASGI test client without an authenticated user."""
    return TestClient(_build_app(uow_factory, None))
