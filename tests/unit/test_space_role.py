"""Unit tests for the space role lattice."""

from itertools import product

import pytest

from pageperm.domain.exceptions import InvalidRole, ValidationError
from pageperm.domain.value_objects import SpaceRole, highest_role, role_exceeds

ROLES = list(SpaceRole)


@pytest.mark.parametrize("a,b,c", list(product(ROLES, repeat=3)))
def test_exceeds_is_transitive(a: SpaceRole, b: SpaceRole, c: SpaceRole) -> None:
    if role_exceeds(a, b) and role_exceeds(b, c):
        assert role_exceeds(a, c)


@pytest.mark.parametrize("role", ROLES)
def test_exceeds_is_irreflexive(role: SpaceRole) -> None:
    assert not role_exceeds(role, role)


@pytest.mark.parametrize("a,b", list(product(ROLES, repeat=2)))
def test_order_is_total(a: SpaceRole, b: SpaceRole) -> None:
    """Exactly one of a>b, b>a, a==b holds."""
    assert [role_exceeds(a, b), role_exceeds(b, a), a == b].count(True) == 1


def test_reader_writer_admin_order() -> None:
    assert SpaceRole.ADMIN.exceeds(SpaceRole.WRITER)
    assert SpaceRole.WRITER.exceeds(SpaceRole.READER)
    assert not SpaceRole.READER.exceeds(SpaceRole.ADMIN)


def test_order_does_not_follow_string_order() -> None:
    """'admin' < 'reader' alphabetically, but admin ranks highest."""
    assert SpaceRole.ADMIN.value < SpaceRole.READER.value
    assert role_exceeds(SpaceRole.ADMIN, SpaceRole.READER)


@pytest.mark.parametrize("role", ROLES)
def test_missing_compare_role_never_blocks(role: SpaceRole) -> None:
    assert role_exceeds(role, None) is False


def test_highest_role_picks_max() -> None:
    roles = [SpaceRole.READER, SpaceRole.ADMIN, SpaceRole.WRITER]
    assert highest_role(roles) is SpaceRole.ADMIN


def test_highest_role_with_repeats() -> None:
    assert highest_role([SpaceRole.WRITER, SpaceRole.WRITER]) is SpaceRole.WRITER


def test_highest_role_empty_is_none() -> None:
    assert highest_role([]) is None


def test_parse_accepts_values() -> None:
    assert SpaceRole.parse("writer") is SpaceRole.WRITER
    assert SpaceRole.parse(SpaceRole.ADMIN) is SpaceRole.ADMIN


def test_parse_unknown_raises_invalid_role() -> None:
    with pytest.raises(InvalidRole):
        SpaceRole.parse("owner")
    assert issubclass(InvalidRole, ValidationError)
