"""
Environment diagnostics
"""

from fastapi import APIRouter

from testbench.core.config import settings
from testbench.services.env_report import build_env_report

router = APIRouter(tags=["debug"])


@router.get("/debug")
async def environment_report():
    """
    Which settings are present, with value lengths only

    Secrets and URLs are never echoed back.
    """
    return build_env_report(settings)
