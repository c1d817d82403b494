# Authentication
# Shared-secret / tenant-token check and role binding, executed on connect

from print_relay.auth.authenticator import (
    Authenticator,
    AuthDecision,
    AuthResult,
    ConnectionRole,
    Credentials,
    REASON_UNAUTHORIZED,
    REASON_MISSING_PARAMS,
    REASON_INVALID_ROLE,
)

__all__ = [
    "Authenticator",
    "AuthDecision",
    "AuthResult",
    "ConnectionRole",
    "Credentials",
    "REASON_UNAUTHORIZED",
    "REASON_MISSING_PARAMS",
    "REASON_INVALID_ROLE",
]
