"""API Middleware"""

from .auth import (
    expected_authorization,
    authorization_matches,
    verify_logs_token
)

from .features import (
    require_cloudwatch_logs,
    require_local_logs
)

__all__ = [
    # Auth
    "expected_authorization",
    "authorization_matches",
    "verify_logs_token",
    # Feature flags
    "require_cloudwatch_logs",
    "require_local_logs"
]
