import uuid

import pytest

from app.core.config import settings
from app.core.gateway import extract_bearer_token
from app.core.policy import AccessDecision, Identity, RoutePolicy
from app.models import UserRole

USER = Identity(user_id=uuid.uuid4(), email="a@x.com", role=UserRole.USER)
ADMIN = Identity(user_id=uuid.uuid4(), email="admin@x.com", role=UserRole.ADMIN)

@pytest.fixture
def policy():
    return RoutePolicy(settings.PUBLIC_PATH_PREFIXES)

@pytest.mark.parametrize("path", ["/api/auth/login", "/api/auth/register", "/health", "/api/docs"])
def test_public_paths_allow_anyone(policy, path):
    assert policy.evaluate(path, None) == AccessDecision.ALLOW
    assert policy.evaluate(path, USER) == AccessDecision.ALLOW

@pytest.mark.parametrize(
    "path, identity, expected",
    [
        ("/api/user/profile", None, AccessDecision.UNAUTHENTICATED),
        ("/api/user/profile", USER, AccessDecision.ALLOW),
        ("/api/user/profile", ADMIN, AccessDecision.FORBIDDEN),
        ("/api/admin/users", None, AccessDecision.UNAUTHENTICATED),
        ("/api/admin/users", ADMIN, AccessDecision.ALLOW),
        ("/api/admin/users", USER, AccessDecision.FORBIDDEN),
        ("/api/tasks", None, AccessDecision.UNAUTHENTICATED),
        ("/api/tasks", USER, AccessDecision.FORBIDDEN),
        ("/api/tasks", ADMIN, AccessDecision.FORBIDDEN),
    ],
)
def test_route_table(policy, path, identity, expected):
    assert policy.evaluate(path, identity) == expected

def test_prefix_matches_whole_segments_only(policy):
    assert policy.match("/api/user").required_role == UserRole.USER
    assert policy.match("/api/username") is None
    assert policy.evaluate("/api/authx", None) == AccessDecision.UNAUTHENTICATED

def test_first_matching_rule_wins():
    policy = RoutePolicy(["/api/user/public"])

    assert policy.evaluate("/api/user/public/info", None) == AccessDecision.ALLOW
    assert policy.evaluate("/api/user/profile", None) == AccessDecision.UNAUTHENTICATED

@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("Bearer ", None),
        ("Basic dXNlcjpwYXNz", None),
        ("bearer abc", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected
