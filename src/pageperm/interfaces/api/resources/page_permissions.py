"""Page permissions API resources."""

from uuid import UUID

import falcon.asgi

from pageperm.application.dto.batch_result import BatchGrantResult
from pageperm.application.dto.pagination import PaginatedResult, PaginationOptions
from pageperm.application.ports import (
    PageAccessResolver,
    SpaceAbilityChecker,
    SpaceAction,
    SpaceSubject,
)
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
from pageperm.domain.entities import PagePermission, PagePermissionListItem
from pageperm.domain.exceptions import (
    DuplicateGrant,
    NotFound,
    PageNotFound,
    PagePermError,
    PermissionDenied,
    PermissionNotFound,
    RoleEscalation,
    ValidationError,
)
from pageperm.domain.value_objects import SpaceRole


class PagePermissionGate:
    """Space-level gate run before any page permission operation."""

    def __init__(self, unit_of_work_factory: type, ability: SpaceAbilityChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._ability = ability

    async def check_page(self, user_id: UUID, page_id: UUID, action: SpaceAction) -> None:
        async with self._uow_factory() as uow:
            page = await uow.pages.get_by_id(page_id)
        if not page:
            raise PageNotFound(page_id)
        allowed = await self._ability.can(
            user_id, page.space_id, action, SpaceSubject.PAGE_PERMISSION
        )
        if not allowed:
            raise PermissionDenied("Permission denied")

    async def check_permission(
        self, user_id: UUID, permission_id: UUID, action: SpaceAction
    ) -> None:
        async with self._uow_factory() as uow:
            permission = await uow.page_permissions.get_by_id(permission_id)
        if not permission:
            raise PermissionNotFound(permission_id)
        await self.check_page(user_id, permission.page_id, action)


def _permission_to_dict(p: PagePermission) -> dict:
    return {
        "id": str(p.id),
        "page_id": str(p.page_id),
        "user_id": str(p.user_id) if p.user_id else None,
        "group_id": str(p.group_id) if p.group_id else None,
        "role": p.role.value,
        "added_by_id": str(p.added_by_id) if p.added_by_id else None,
        "workspace_id": str(p.workspace_id),
        "created_at": p.created_at.isoformat(),
        "updated_at": p.updated_at.isoformat(),
    }


def _list_item_to_dict(item: PagePermissionListItem) -> dict:
    user = None
    if item.user:
        user = {
            "id": str(item.user.id),
            "name": item.user.name,
            "email": item.user.email,
            "avatar_url": item.user.avatar_url,
        }
    group = None
    if item.group:
        group = {
            "id": str(item.group.id),
            "name": item.group.name,
            "is_default": item.group.is_default,
        }
    return {
        "id": str(item.id),
        "role": item.role.value,
        "created_at": item.created_at.isoformat(),
        "user": user,
        "group": group,
    }


def _page_to_dict(result: PaginatedResult[PagePermissionListItem]) -> dict:
    return {
        "items": [_list_item_to_dict(i) for i in result.items],
        "meta": {
            "page": result.page,
            "per_page": result.per_page,
            "has_next_page": result.has_next_page,
            "has_prev_page": result.has_prev_page,
        },
    }


def _batch_to_dict(result: BatchGrantResult) -> dict:
    return {
        "added": result.added,
        "items": [
            {
                "type": item.principal.type.value,
                "id": str(item.principal.id),
                "outcome": item.outcome.value,
            }
            for item in result.items
        ],
    }


def _error(resp: falcon.asgi.Response, e: PagePermError) -> None:
    """Map a domain exception to status and body."""
    if isinstance(e, PermissionDenied):
        resp.status = falcon.HTTP_403
    elif isinstance(e, NotFound):
        resp.status = falcon.HTTP_404
    elif isinstance(e, (ValidationError, DuplicateGrant, RoleEscalation)):
        resp.status = falcon.HTTP_400
    else:
        resp.status = falcon.HTTP_500
    resp.media = {"error": str(e)}


def _unauthorized(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_401
    resp.media = {"error": "Unauthorized"}


def _uuid(body: dict, key: str) -> UUID:
    try:
        return UUID(str(body[key]))
    except ValueError:
        raise ValidationError(f"Invalid {key}") from None


def _optional_uuid(body: dict, key: str) -> UUID | None:
    if body.get(key) is None:
        return None
    return _uuid(body, key)


def _uuid_list(body: dict, key: str) -> list[UUID] | None:
    values = body.get(key)
    if values is None:
        return None
    if not isinstance(values, list):
        raise ValidationError(f"{key} must be an array")
    try:
        return [UUID(str(v)) for v in values]
    except ValueError:
        raise ValidationError(f"{key} must contain UUIDs") from None


async def _read_body(req: falcon.asgi.Request) -> dict:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


class PagePermissionsResource:
    """POST /v1/page-permissions - list grants on a page."""

    def __init__(
        self, gate: PagePermissionGate, list_permissions: ListPagePermissionsUseCase
    ) -> None:
        self._gate = gate
        self._list = list_permissions

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            return _unauthorized(resp)

        try:
            body = await _read_body(req)
            page_id = _uuid(body, "page_id")
            pagination = PaginationOptions(
                page=int(body.get("page", 1)), limit=int(body.get("limit", 20))
            )
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (TypeError, ValueError):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "page and limit must be integers"}
            return
        except ValidationError as e:
            return _error(resp, e)

        try:
            await self._gate.check_page(user.user_id, page_id, SpaceAction.READ)
            result = await self._list.execute(page_id, pagination)
        except PagePermError as e:
            return _error(resp, e)

        resp.media = _page_to_dict(result)
        resp.status = falcon.HTTP_200


class PagePermissionAddResource:
    """POST /v1/page-permissions/add - grant a role to one user or group."""

    def __init__(self, gate: PagePermissionGate, grant: GrantPagePermissionUseCase) -> None:
        self._gate = gate
        self._grant = grant

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            return _unauthorized(resp)

        try:
            body = await _read_body(req)
            page_id = _uuid(body, "page_id")
            role = SpaceRole.parse(body["role"])
            user_id = _optional_uuid(body, "user_id")
            group_id = _optional_uuid(body, "group_id")
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except ValidationError as e:
            return _error(resp, e)

        try:
            await self._gate.check_page(user.user_id, page_id, SpaceAction.MANAGE)
            permission = await self._grant.execute(
                user.user_id, page_id, role, user_id=user_id, group_id=group_id
            )
        except PagePermError as e:
            return _error(resp, e)

        resp.media = _permission_to_dict(permission)
        resp.status = falcon.HTTP_200


class PagePermissionBatchResource:
    """POST /v1/page-permissions/add-batch - grant a role to many principals."""

    def __init__(
        self, gate: PagePermissionGate, grant_batch: GrantPagePermissionsBatchUseCase
    ) -> None:
        self._gate = gate
        self._grant_batch = grant_batch

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            return _unauthorized(resp)

        try:
            body = await _read_body(req)
            page_id = _uuid(body, "page_id")
            role = SpaceRole.parse(body["role"])
            user_ids = _uuid_list(body, "user_ids")
            group_ids = _uuid_list(body, "group_ids")
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except ValidationError as e:
            return _error(resp, e)

        try:
            await self._gate.check_page(user.user_id, page_id, SpaceAction.MANAGE)
            result = await self._grant_batch.execute(
                user.user_id, page_id, role, user_ids=user_ids, group_ids=group_ids
            )
        except PagePermError as e:
            return _error(resp, e)

        resp.media = _batch_to_dict(result)
        resp.status = falcon.HTTP_200


class PagePermissionUpdateResource:
    """POST /v1/page-permissions/update - change the role of a grant."""

    def __init__(
        self, gate: PagePermissionGate, update_role: UpdatePagePermissionRoleUseCase
    ) -> None:
        self._gate = gate
        self._update_role = update_role

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            return _unauthorized(resp)

        try:
            body = await _read_body(req)
            permission_id = _uuid(body, "permission_id")
            role = SpaceRole.parse(body["role"])
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except ValidationError as e:
            return _error(resp, e)

        try:
            await self._gate.check_permission(user.user_id, permission_id, SpaceAction.MANAGE)
            permission = await self._update_role.execute(permission_id, role)
        except PagePermError as e:
            return _error(resp, e)

        resp.media = _permission_to_dict(permission)
        resp.status = falcon.HTTP_200


class PagePermissionRemoveResource:
    """POST /v1/page-permissions/remove - delete a grant."""

    def __init__(self, gate: PagePermissionGate, remove: RemovePagePermissionUseCase) -> None:
        self._gate = gate
        self._remove = remove

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            return _unauthorized(resp)

        try:
            body = await _read_body(req)
            permission_id = _uuid(body, "permission_id")
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except ValidationError as e:
            return _error(resp, e)

        try:
            await self._gate.check_permission(user.user_id, permission_id, SpaceAction.MANAGE)
            await self._remove.execute(permission_id)
        except PagePermError as e:
            return _error(resp, e)

        resp.status = falcon.HTTP_204


class PageAccessResource:
    """POST /v1/page-permissions/access - the caller's own access to a page."""

    def __init__(self, resolver: PageAccessResolver) -> None:
        self._resolver = resolver

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            return _unauthorized(resp)

        try:
            body = await _read_body(req)
            page_id = _uuid(body, "page_id")
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except ValidationError as e:
            return _error(resp, e)

        role = await self._resolver.highest_role(user.user_id, page_id)
        resp.media = {
            "page_id": str(page_id),
            "has_access": await self._resolver.has_access(user.user_id, page_id),
            "role": role.value if role else None,
        }
        resp.status = falcon.HTTP_200
