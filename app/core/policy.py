"""
Route Policy - Static table of path prefixes and the role each requires
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple
from uuid import UUID
import enum

from app.models.user import UserRole

@dataclass(frozen=True)
class Identity:
    """Authenticated caller, attached once per request by the auth gateway"""
    user_id: UUID
    email: str
    role: UserRole

@dataclass(frozen=True)
class RouteRule:
    """A path prefix and the role required to reach it (None = public)"""
    prefix: str
    required_role: Optional[UserRole] = None

    @property
    def is_public(self) -> bool:
        return self.required_role is None

    def matches(self, path: str) -> bool:
        # Segment-aware: /api/user matches /api/user/... but not /api/username
        prefix = self.prefix.rstrip("/")
        return path == prefix or path.startswith(prefix + "/")

class AccessDecision(str, enum.Enum):
    ALLOW = "ALLOW"
    UNAUTHENTICATED = "UNAUTHENTICATED"  # No identity, route needs one -> 401
    FORBIDDEN = "FORBIDDEN"  # Identity present but not allowed -> 403

PROTECTED_RULES: Tuple[RouteRule, ...] = (
    RouteRule("/api/user", UserRole.USER),
    RouteRule("/api/admin", UserRole.ADMIN),
)

class RoutePolicy:
    """
    Ordered route table, first match wins:
        public prefixes -> allow
        /api/user/**    -> role USER
        /api/admin/**   -> role ADMIN
        anything else   -> deny
    """

    def __init__(self, public_prefixes: Iterable[str], rules: Sequence[RouteRule] = PROTECTED_RULES):
        self.rules: Tuple[RouteRule, ...] = tuple(RouteRule(p) for p in public_prefixes) + tuple(rules)

    def is_public(self, path: str) -> bool:
        rule = self.match(path)
        return rule is not None and rule.is_public

    def match(self, path: str) -> Optional[RouteRule]:
        for rule in self.rules:
            if rule.matches(path):
                return rule
        return None

    def evaluate(self, path: str, identity: Optional[Identity]) -> AccessDecision:
        rule = self.match(path)

        if rule is not None and rule.is_public:
            return AccessDecision.ALLOW

        if identity is None:
            return AccessDecision.UNAUTHENTICATED

        if rule is not None and identity.role == rule.required_role:
            return AccessDecision.ALLOW

        return AccessDecision.FORBIDDEN
