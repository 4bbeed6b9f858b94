"""
Authentication Middleware
Optional shared bearer token for the log endpoints
"""

import hmac
from typing import Optional
from fastapi import Request

from testbench.core.config import settings
from testbench.core.logging import get_logger
from testbench.core.exceptions import AuthenticationError

logger = get_logger(__name__)


def expected_authorization(token: str) -> str:
    return f"Bearer {token}"


def authorization_matches(header: Optional[str], token: str) -> bool:
    """Exact, constant-time comparison of the Authorization header"""
    return hmac.compare_digest(
        (header or "").encode("utf-8"),
        expected_authorization(token).encode("utf-8")
    )


async def verify_logs_token(request: Request) -> None:
    """
    Dependency enforcing CLOUDWATCH_LOGS_TOKEN when one is configured

    Usage:
        @router.get("/endpoint", dependencies=[Depends(verify_logs_token)])

    Raises:
        AuthenticationError: If the Authorization header does not match
    """
    token = settings.cloudwatch_logs_token
    if not token:
        return

    if not authorization_matches(request.headers.get("Authorization"), token):
        client = request.client.host if request.client else "unknown"
        logger.warning(f"Rejected log request from {client}: bad or missing bearer token")
        raise AuthenticationError()
