"""Unit tests for role checks"""

from boxschool_billing.domain.permissions import BILLING_ROLES, has_any_role, parse_role_spec


def test_parse_role_spec_separators():
    assert parse_role_spec("admin|attendance_controller") == {"admin", "attendance_controller"}
    assert parse_role_spec("admin, cashier") == {"admin", "cashier"}
    assert parse_role_spec(" admin ||, ") == {"admin"}
    assert parse_role_spec("") == frozenset()


def test_has_any_role():
    assert has_any_role({"admin"}, {"admin", "attendance_controller"})
    assert has_any_role(["trainer", "cashier"], BILLING_ROLES)
    assert not has_any_role({"student"}, BILLING_ROLES)
    assert not has_any_role(set(), {"admin"})
