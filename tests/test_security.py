import pytest
from starlette.requests import Request

from app.core.security import AuthorizationDecision, RoleHeaderPolicy


def _request(headers):
    raw = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
    return Request({"type": "http", "method": "POST", "path": "/api/movies", "headers": raw})


def test_admin_role_allowed():
    policy = RoleHeaderPolicy()
    assert policy.authorize(_request({"role": "admin"})) is AuthorizationDecision.ALLOWED


def test_header_name_is_case_insensitive():
    policy = RoleHeaderPolicy()
    assert policy.authorize(_request({"Role": "admin"})) is AuthorizationDecision.ALLOWED


@pytest.mark.parametrize("value", ["Admin", "ADMIN", "admin ", "administrator", "user", ""])
def test_role_value_must_match_exactly(value):
    policy = RoleHeaderPolicy()
    assert policy.authorize(_request({"role": value})) is AuthorizationDecision.DENIED


def test_missing_header_denied():
    policy = RoleHeaderPolicy()
    assert policy.authorize(_request({})) is AuthorizationDecision.DENIED


def test_custom_header_and_role():
    policy = RoleHeaderPolicy(header_name="x-catalog-role", required_role="editor")
    assert policy.authorize(_request({"x-catalog-role": "editor"})) is AuthorizationDecision.ALLOWED
    assert policy.authorize(_request({"role": "admin"})) is AuthorizationDecision.DENIED
