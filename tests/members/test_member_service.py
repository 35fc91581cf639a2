from __future__ import annotations

import pytest

from gym_membership.core.enums import MemberStatus
from gym_membership.core.exceptions import ConflictError, NotFoundError, ValidationError


def test_register_defaults_to_active(container):
    member = container.member_service.register(name="John Doe", email="John@Example.com", phone=" 555-1234 ")

    assert member.status == MemberStatus.ACTIVE
    assert member.email == "john@example.com"
    assert member.phone == "555-1234"


def test_duplicate_email_is_case_insensitive(container):
    container.member_service.register(name="John", email="john@example.com")

    with pytest.raises(ConflictError):
        container.member_service.register(name="Johnny", email="JOHN@EXAMPLE.COM")


@pytest.mark.parametrize("name, email", [("", "a@b.co"), ("A", ""), (None, "a@b.co"), ("A", "not-an-email")])
def test_register_requires_name_and_valid_email(container, name, email):
    with pytest.raises(ValidationError):
        container.member_service.register(name=name, email=email)


def test_register_with_unknown_plan(container):
    with pytest.raises(NotFoundError):
        container.member_service.register(name="John", email="john@example.com", plan_id=3)


def test_update_status(container):
    member = container.member_service.register(name="John", email="john@example.com")

    updated = container.member_service.update(member.member_id, name="John", email="john@example.com", status="suspended")

    assert updated.status == MemberStatus.SUSPENDED
    assert updated.can_check_in is False


def test_update_rejects_unknown_status(container):
    member = container.member_service.register(name="John", email="john@example.com")

    with pytest.raises(ValidationError):
        container.member_service.update(member.member_id, name="John", email="john@example.com", status="frozen")


def test_update_rejects_email_of_other_member(container):
    container.member_service.register(name="Jane", email="jane@example.com")
    john = container.member_service.register(name="John", email="john@example.com")

    with pytest.raises(ConflictError):
        container.member_service.update(john.member_id, name="John", email="Jane@example.com")

    # Re-saving one's own address is fine.
    container.member_service.update(john.member_id, name="John D", email="JOHN@example.com")


def test_update_and_delete_missing_member(container):
    with pytest.raises(NotFoundError):
        container.member_service.update(9, name="X", email="x@example.com")
    with pytest.raises(NotFoundError):
        container.member_service.delete(9)
