"""Grant page permissions in batch use case."""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID, uuid4

from pageperm.application.dto.batch_result import (
    BatchGrantResult,
    BatchItemResult,
    GrantOutcome,
)
from pageperm.application.use_cases.page_permission.space_role import resolve_space_role
from pageperm.domain.entities import Page, PagePermission
from pageperm.domain.exceptions import BatchTooLarge, EmptyBatch, PageNotFound
from pageperm.domain.value_objects import Principal, SpaceRole, role_exceeds

logger = logging.getLogger(__name__)

DEFAULT_BATCH_MAX_SIZE = 25


class GrantPagePermissionsBatchUseCase:
    """Grant one role on a page to many users and groups, best effort.

    Principals that already hold a grant, or whose space role is below the
    requested role, are skipped and reported per item; the batch itself does
    not fail once its input is valid.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        max_batch_size: int = DEFAULT_BATCH_MAX_SIZE,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._max_batch_size = max_batch_size

    async def execute(
        self,
        actor_id: UUID,
        page_id: UUID,
        role: SpaceRole,
        user_ids: Sequence[UUID] | None = None,
        group_ids: Sequence[UUID] | None = None,
    ) -> BatchGrantResult:
        """Insert every eligible candidate in one bulk write."""
        user_ids = _dedupe(user_ids)
        group_ids = _dedupe(group_ids)

        async with self._uow_factory() as uow:
            page = await uow.pages.get_by_id(page_id)
            if not page:
                raise PageNotFound(page_id)

            if not user_ids and not group_ids:
                raise EmptyBatch("Either userIds or groupIds must be provided")
            for name, ids in (("userIds", user_ids), ("groupIds", group_ids)):
                if len(ids) > self._max_batch_size:
                    raise BatchTooLarge(
                        f"{name} must contain at most {self._max_batch_size} items"
                    )

            outcomes: dict[Principal, GrantOutcome] = {}
            candidates: list[PagePermission] = []
            now = datetime.now(UTC)

            if user_ids:
                existing = await uow.page_permissions.find_existing_user_ids(
                    page_id, user_ids
                )
                for user_id in user_ids:
                    principal = Principal.user(user_id)
                    outcomes[principal] = await self._screen(
                        uow, page, principal, role, existing
                    )
                    if outcomes[principal] is GrantOutcome.ADDED:
                        candidates.append(
                            _new_permission(page, principal, role, actor_id, now)
                        )

            if group_ids:
                existing = await uow.page_permissions.find_existing_group_ids(
                    page_id, group_ids
                )
                for group_id in group_ids:
                    principal = Principal.group(group_id)
                    outcomes[principal] = await self._screen(
                        uow, page, principal, role, existing
                    )
                    if outcomes[principal] is GrantOutcome.ADDED:
                        candidates.append(
                            _new_permission(page, principal, role, actor_id, now)
                        )

            inserted: set[Principal] = set()
            if candidates:
                created = await uow.page_permissions.create_batch(candidates)
                inserted = {p.principal for p in created}

        # Candidates dropped by the store lost a race with a concurrent grant.
        for p in candidates:
            if p.principal not in inserted:
                outcomes[p.principal] = GrantOutcome.DUPLICATE

        result = BatchGrantResult(
            items=[BatchItemResult(principal, outcome) for principal, outcome in outcomes.items()]
        )
        logger.info(
            "Batch page permission grant: page=%s role=%s added=%d duplicate=%d escalation=%d",
            page_id,
            role,
            result.added,
            result.count(GrantOutcome.DUPLICATE),
            result.count(GrantOutcome.ESCALATION),
        )
        return result

    async def _screen(
        self,
        uow,
        page: Page,
        principal: Principal,
        role: SpaceRole,
        existing: set[UUID],
    ) -> GrantOutcome:
        if principal.id in existing:
            logger.debug("Skipping %s %s: already granted", principal.type, principal.id)
            return GrantOutcome.DUPLICATE
        space_role = await resolve_space_role(uow, principal, page.space_id)
        if role_exceeds(role, space_role):
            logger.debug(
                "Skipping %s %s: role %s exceeds space role %s",
                principal.type,
                principal.id,
                role,
                space_role,
            )
            return GrantOutcome.ESCALATION
        return GrantOutcome.ADDED


def _dedupe(ids: Sequence[UUID] | None) -> list[UUID]:
    return list(dict.fromkeys(ids or ()))


def _new_permission(
    page: Page,
    principal: Principal,
    role: SpaceRole,
    actor_id: UUID,
    now: datetime,
) -> PagePermission:
    return PagePermission(
        id=uuid4(),
        page_id=page.id,
        user_id=principal.user_id,
        group_id=principal.group_id,
        role=role,
        added_by_id=actor_id,
        workspace_id=page.workspace_id,
        created_at=now,
        updated_at=now,
    )
