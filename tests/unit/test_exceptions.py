"""Unit tests for domain exceptions."""

import pytest

from pageperm.domain.exceptions import (
    BatchTooLarge,
    DuplicateGrant,
    EmptyBatch,
    InvalidGrantShape,
    NotFound,
    PageNotFound,
    PagePermError,
    PermissionDenied,
    PermissionNotFound,
    RoleEscalation,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc",
    [PermissionDenied, NotFound, ValidationError, DuplicateGrant, RoleEscalation],
)
def test_inherits_pageperm_error(exc: type) -> None:
    assert issubclass(exc, PagePermError)


def test_not_found_kinds() -> None:
    assert issubclass(PageNotFound, NotFound)
    assert issubclass(PermissionNotFound, NotFound)


def test_validation_kinds() -> None:
    for exc in (InvalidGrantShape, EmptyBatch, BatchTooLarge):
        assert issubclass(exc, ValidationError)


def test_not_found_messages() -> None:
    assert str(PageNotFound("p1")) == "Page not found"
    err = PermissionNotFound("x1")
    assert str(err) == "Permission not found"
    assert err.permission_id == "x1"


def test_message_preserved() -> None:
    with pytest.raises(RoleEscalation, match="cannot exceed"):
        raise RoleEscalation("Page role cannot exceed existing space role")
