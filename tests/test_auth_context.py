import pytest

from lifecycle.auth import AuthContext, permissions_for
from lifecycle.errors import Forbidden
from models import RoleEnum


def test_dealer_admin_can_do_anything():
    auth = AuthContext.for_role(1, RoleEnum.dealer_admin)
    assert auth.can("employees", "delete")
    assert auth.can("audit-logs", "view")
    assert auth.permission_list() == ["*:*"]


def test_sales_executive_scope():
    auth = AuthContext.for_role(2, RoleEnum.sales_executive)
    assert auth.can("leads", "create")
    assert auth.can("vehicles", "view")
    assert not auth.can("vehicles", "delete")
    assert not auth.can("employees", "view")
    assert auth.can("notifications", "edit")


def test_resource_wildcard_grants_every_action():
    auth = AuthContext.for_role(3, RoleEnum.hr_admin)
    for action in ("view", "create", "edit", "delete"):
        assert auth.can("payroll", action)
    assert not auth.can("invoices", "view")


def test_require_raises_forbidden():
    auth = AuthContext.for_role(4, RoleEnum.customer_support)
    with pytest.raises(Forbidden) as excinfo:
        auth.require("payroll", "view")
    assert excinfo.value.status_code == 403
    assert excinfo.value.code == "FORBIDDEN"


def test_unknown_role_has_no_permissions():
    assert permissions_for(None) == frozenset()
    auth = AuthContext.for_role(5, None)
    assert not auth.can("notifications", "view")
    assert auth.permission_list() == []


def test_client_details_are_carried():
    auth = AuthContext.for_role(6, RoleEnum.finance_manager, ip_address="10.0.0.1", user_agent="pytest")
    assert auth.ip_address == "10.0.0.1"
    assert auth.user_agent == "pytest"
    assert ("ledger-entries", "*") in auth.permissions
