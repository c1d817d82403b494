"""
Connection Authenticator

Decides whether a freshly accepted connection may stay open, and in which
role.

Admission rules:
1. A token must be presented
2. Tenant id and role must be presented
3. The token must equal the shared secret (valid for any tenant) or the
   claimed tenant id itself (tenant-scoped credential)
4. The role must be "agent" or "saas"

The tenant-scoped rule is weak on purpose: an agent authenticates with its
own restaurant id. It is kept as-is until a stronger credential scheme is
decided.
"""

import hmac
import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class ConnectionRole(str, Enum):
    """Role a client declares when connecting."""
    AGENT = "agent"
    SAAS = "saas"


class AuthDecision(str, Enum):
    """Authentication result."""
    ADMIT = "admit"
    REJECT = "reject"


# Close reasons sent with the policy-violation close code
REASON_UNAUTHORIZED = "Unauthorized"
REASON_MISSING_PARAMS = "Missing params"
REASON_INVALID_ROLE = "Invalid role"


@dataclass
class Credentials:
    """
    Connection parameters as presented by the client.

    Any of them may be missing; the authenticator decides what that means.
    """
    token: str | None = None
    tenant_id: str | None = None
    role: str | None = None


@dataclass
class AuthResult:
    """
    Result of an authentication attempt.
    """
    decision: AuthDecision
    reason: str | None = None
    role: ConnectionRole | None = None
    tenant_id: str | None = None

    @property
    def is_admitted(self) -> bool:
        return self.decision == AuthDecision.ADMIT


def _tokens_match(presented: str, expected: str) -> bool:
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


class Authenticator:
    """
    Validates connection credentials against the shared secret.

    Stateless apart from the secret: no counters, no lockout.
    """

    def __init__(self, shared_secret: str):
        """
        Initialize the authenticator.

        Args:
            shared_secret: Master credential accepted for every tenant
        """
        if not shared_secret:
            raise ValueError("shared_secret must not be empty")
        self._secret = shared_secret

    def authenticate(self, credentials: Credentials) -> AuthResult:
        """
        Evaluate credentials.

        Returns:
            AuthResult with ADMIT (and the bound role/tenant) or REJECT
            (and the close reason)
        """
        token = credentials.token
        tenant_id = credentials.tenant_id
        role = credentials.role

        if not token:
            return self._reject(REASON_UNAUTHORIZED, credentials)

        if not tenant_id or not role:
            return self._reject(REASON_MISSING_PARAMS, credentials)

        if not (_tokens_match(token, self._secret) or _tokens_match(token, tenant_id)):
            return self._reject(REASON_UNAUTHORIZED, credentials)

        try:
            bound_role = ConnectionRole(role)
        except ValueError:
            return self._reject(REASON_INVALID_ROLE, credentials)

        return AuthResult(
            decision=AuthDecision.ADMIT,
            role=bound_role,
            tenant_id=tenant_id
        )

    def _reject(self, reason: str, credentials: Credentials) -> AuthResult:
        logger.warning(
            f"Connection rejected ({reason}): "
            f"role={credentials.role} restaurantId={credentials.tenant_id}"
        )
        return AuthResult(decision=AuthDecision.REJECT, reason=reason)
