"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from pageperm.interfaces.api.resources.health import HealthResource
from pageperm.interfaces.api.resources.page_permissions import (
    PageAccessResource,
    PagePermissionAddResource,
    PagePermissionBatchResource,
    PagePermissionRemoveResource,
    PagePermissionsResource,
    PagePermissionUpdateResource,
)

logger = logging.getLogger(__name__)


async def _handle_unexpected(req, resp, ex, params) -> None:
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    health_resource: HealthResource,
    permissions_resource: PagePermissionsResource,
    add_resource: PagePermissionAddResource,
    batch_resource: PagePermissionBatchResource,
    update_resource: PagePermissionUpdateResource,
    remove_resource: PagePermissionRemoveResource,
    access_resource: PageAccessResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, _handle_unexpected)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/page-permissions", permissions_resource)
    app.add_route("/v1/page-permissions/add", add_resource)
    app.add_route("/v1/page-permissions/add-batch", batch_resource)
    app.add_route("/v1/page-permissions/update", update_resource)
    app.add_route("/v1/page-permissions/remove", remove_resource)
    app.add_route("/v1/page-permissions/access", access_resource)
    return app
