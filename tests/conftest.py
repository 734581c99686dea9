"""Pytest fixtures for pageperm tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from pageperm.application.dto.pagination import PaginatedResult, PaginationOptions
from pageperm.domain.entities import (
    Page,
    PagePermission,
    PagePermissionListItem,
    PermissionGroup,
    PermissionUser,
)
from pageperm.domain.exceptions import DuplicateGrant
from pageperm.domain.value_objects import SpaceRole


# --- Fake repositories ---


class FakePageRepository:
    """In-memory page repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Page] = {}

    async def get_by_id(self, page_id: UUID) -> Page | None:
        return self._by_id.get(page_id)

    def add_page(self, page: Page) -> None:
        """Helper to add page for tests."""
        self._by_id[page.id] = page


class FakeSpaceMemberRepository:
    """In-memory space membership: user roles and group roles per space."""

    def __init__(self, group_users: dict[UUID, set[UUID]]) -> None:
        self._user_roles: dict[tuple[UUID, UUID], SpaceRole] = {}
        self._group_roles: dict[tuple[UUID, UUID], SpaceRole] = {}
        self._group_users = group_users

    async def get_user_space_roles(self, user_id: UUID, space_id: UUID) -> list[SpaceRole]:
        roles = []
        if (space_id, user_id) in self._user_roles:
            roles.append(self._user_roles[(space_id, user_id)])
        for group_id, members in self._group_users.items():
            if user_id in members and (space_id, group_id) in self._group_roles:
                roles.append(self._group_roles[(space_id, group_id)])
        return roles

    async def get_group_space_role(self, group_id: UUID, space_id: UUID) -> SpaceRole | None:
        return self._group_roles.get((space_id, group_id))

    def add_user(self, space_id: UUID, user_id: UUID, role: SpaceRole) -> None:
        """Helper to add a direct user membership."""
        self._user_roles[(space_id, user_id)] = role

    def add_group(self, space_id: UUID, group_id: UUID, role: SpaceRole) -> None:
        """Helper to add a group membership."""
        self._group_roles[(space_id, group_id)] = role


class FakePagePermissionRepository:
    """In-memory page permission repository with the store's uniqueness rules."""

    def __init__(self, group_users: dict[UUID, set[UUID]]) -> None:
        self._by_id: dict[UUID, PagePermission] = {}
        self._group_users = group_users
        self.users: dict[UUID, PermissionUser] = {}
        self.groups: dict[UUID, PermissionGroup] = {}
        # Simulates a concurrent writer: lookups miss rows the store still has.
        self.stale_reads = False

    def _live(self) -> list[PagePermission]:
        return [p for p in self._by_id.values() if p.deleted_at is None]

    def _conflicts(self, permission: PagePermission) -> bool:
        for p in self._live():
            if p.page_id != permission.page_id:
                continue
            if permission.user_id and p.user_id == permission.user_id:
                return True
            if permission.group_id and p.group_id == permission.group_id:
                return True
        return False

    async def get_by_id(self, permission_id: UUID) -> PagePermission | None:
        p = self._by_id.get(permission_id)
        if not p or p.deleted_at:
            return None
        return p

    async def get_by_page_and_user(
        self, page_id: UUID, user_id: UUID
    ) -> PagePermission | None:
        if self.stale_reads:
            return None
        for p in self._live():
            if p.page_id == page_id and p.user_id == user_id:
                return p
        return None

    async def get_by_page_and_group(
        self, page_id: UUID, group_id: UUID
    ) -> PagePermission | None:
        if self.stale_reads:
            return None
        for p in self._live():
            if p.page_id == page_id and p.group_id == group_id:
                return p
        return None

    async def find_existing_user_ids(
        self, page_id: UUID, user_ids: Iterable[UUID]
    ) -> set[UUID]:
        if self.stale_reads:
            return set()
        wanted = set(user_ids)
        return {p.user_id for p in self._live() if p.page_id == page_id and p.user_id in wanted}

    async def find_existing_group_ids(
        self, page_id: UUID, group_ids: Iterable[UUID]
    ) -> set[UUID]:
        if self.stale_reads:
            return set()
        wanted = set(group_ids)
        return {
            p.group_id for p in self._live() if p.page_id == page_id and p.group_id in wanted
        }

    async def create(self, permission: PagePermission) -> PagePermission:
        if self._conflicts(permission):
            raise DuplicateGrant("Permission already exists")
        self._by_id[permission.id] = permission
        return permission

    async def create_batch(self, permissions: list[PagePermission]) -> list[PagePermission]:
        created = []
        for p in permissions:
            if self._conflicts(p):
                continue
            self._by_id[p.id] = p
            created.append(p)
        return created

    async def update_role(
        self, permission_id: UUID, role: SpaceRole
    ) -> PagePermission | None:
        p = await self.get_by_id(permission_id)
        if not p:
            return None
        updated = replace(p, role=role, updated_at=datetime.now(UTC))
        self._by_id[permission_id] = updated
        return updated

    async def delete(self, permission_id: UUID) -> None:
        self._by_id.pop(permission_id, None)

    async def list_by_page(
        self, page_id: UUID, pagination: PaginationOptions
    ) -> PaginatedResult[PagePermissionListItem]:
        rows = sorted(
            (p for p in self._live() if p.page_id == page_id),
            key=lambda p: (p.created_at, p.id),
        )
        window = rows[pagination.offset : pagination.offset + pagination.limit + 1]
        items = [
            PagePermissionListItem(
                id=p.id,
                role=p.role,
                created_at=p.created_at,
                user=self.users.get(p.user_id) if p.user_id else None,
                group=self.groups.get(p.group_id) if p.group_id else None,
            )
            for p in window[: pagination.limit]
        ]
        return PaginatedResult(
            items=items,
            page=pagination.page,
            per_page=pagination.limit,
            has_next_page=len(window) > pagination.limit,
            has_prev_page=pagination.page > 1,
        )

    async def get_user_page_roles(self, user_id: UUID, page_id: UUID) -> list[SpaceRole]:
        roles = [
            p.role for p in self._live() if p.page_id == page_id and p.user_id == user_id
        ]
        for p in self._live():
            if p.page_id == page_id and p.group_id and user_id in self._group_users.get(
                p.group_id, set()
            ):
                roles.append(p.role)
        return roles

    def all(self) -> list[PagePermission]:
        """Helper returning every stored row."""
        return list(self._by_id.values())


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.group_users: dict[UUID, set[UUID]] = {}
        self.pages = FakePageRepository()
        self.page_permissions = FakePagePermissionRepository(self.group_users)
        self.space_members = FakeSpaceMemberRepository(self.group_users)
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

    def add_group_member(self, group_id: UUID, user_id: UUID) -> None:
        """Helper to put a user into a group."""
        self.group_users.setdefault(group_id, set()).add(user_id)


def make_permission(
    page: Page,
    role: SpaceRole = SpaceRole.READER,
    *,
    user_id: UUID | None = None,
    group_id: UUID | None = None,
    created_at: datetime | None = None,
) -> PagePermission:
    """Build a stored grant for page."""
    now = created_at or datetime.now(UTC)
    return PagePermission(
        id=uuid4(),
        page_id=page.id,
        user_id=user_id,
        group_id=group_id,
        role=role,
        added_by_id=None,
        workspace_id=page.workspace_id,
        created_at=now,
        updated_at=now,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields the test's FakeUnitOfWork."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        try:
            yield fake_uow
            await fake_uow.commit()
        except BaseException:
            await fake_uow.rollback()
            raise

    return _factory


@pytest.fixture
def page(fake_uow: FakeUnitOfWork) -> Page:
    """A page registered in the fake page repository."""
    p = Page(id=uuid4(), space_id=uuid4(), workspace_id=uuid4())
    fake_uow.pages.add_page(p)
    return p


@pytest.fixture
def actor_id() -> UUID:
    """Id of the user performing grant operations."""
    return uuid4()
