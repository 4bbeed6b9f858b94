"""
Feature flag gates
Endpoints behind a disabled flag answer 404 before doing any work
"""

from testbench.core.config import settings
from testbench.core.exceptions import FeatureUnavailableError


async def require_cloudwatch_logs() -> None:
    """Dependency gating the CloudWatch log endpoint"""
    if not settings.enable_cloudwatch_logs:
        raise FeatureUnavailableError("cloudwatch_logs")


async def require_local_logs() -> None:
    """Dependency gating the local docker log endpoint; never enabled in production"""
    if settings.is_production or not settings.enable_local_logs:
        raise FeatureUnavailableError("local_logs")
