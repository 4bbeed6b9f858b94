"""
SIP and agent configuration routes, the number view and dashboard stats
"""

import asyncio
from fastapi import APIRouter, Depends

from testbench.core.logging import get_logger
from testbench.core.exceptions import TestBenchException
from testbench.models.activity import ActivityAction, ActivityStatus
from testbench.models.configs import (
    SipTrunkConfig,
    AgentConfig,
    AgentConfigList,
    NumberListResponse,
    DashboardStats
)
from testbench.api.dependencies import get_control_api, get_room_service, get_activity_store
from testbench.services.control_api import ControlAPIService
from testbench.services.livekit import LiveKitRoomService
from testbench.services.activity_log import ActivityLogStore, NUMBERS_ACTIVITY
from testbench.services.numbers import extract_records, merge_numbers

logger = get_logger(__name__)

router = APIRouter(tags=["configs"])


@router.get("/sip-configs")
async def list_sip_configs(control_api: ControlAPIService = Depends(get_control_api)):
    """SIP trunk configs as returned by the Control API"""
    return await control_api.list_sip_configs()


@router.post("/sip-configs")
async def save_sip_config(
    config: SipTrunkConfig,
    control_api: ControlAPIService = Depends(get_control_api),
    activity: ActivityLogStore = Depends(get_activity_store)
):
    """Create or update a SIP trunk config"""
    result = await control_api.save_sip_config(config.model_dump(by_alias=True, exclude_unset=True))
    activity.add(
        NUMBERS_ACTIVITY,
        ActivityAction.CONFIG_SAVED.value,
        ActivityStatus.SUCCESS,
        details=f"SIP config saved for {config.phone_number or 'unknown number'}"
    )
    return result


@router.get("/agent-configs", response_model=AgentConfigList)
async def list_agent_configs(control_api: ControlAPIService = Depends(get_control_api)):
    """Saved agent configs, normalized to {configs, count}"""
    configs = extract_records(await control_api.list_agent_configs())
    return AgentConfigList(configs=configs, count=len(configs))


@router.post("/agent-configs")
async def save_agent_config(
    config: AgentConfig,
    control_api: ControlAPIService = Depends(get_control_api),
    activity: ActivityLogStore = Depends(get_activity_store)
):
    """Create or update an agent config"""
    result = await control_api.save_agent_config(config.model_dump(by_alias=True, exclude_unset=True))
    label = config.name or config.phone_number or "agent config"
    activity.add(
        NUMBERS_ACTIVITY,
        ActivityAction.CONFIG_SAVED.value,
        ActivityStatus.SUCCESS,
        details=f"Saved {label}"
    )
    return result


@router.get("/agent-configs/phone/{phone_number}")
async def get_agent_config_by_phone(
    phone_number: str,
    control_api: ControlAPIService = Depends(get_control_api)
):
    """
    Look up the agent config applied to calls on a phone number
    """
    return await control_api.get_config_by_phone(phone_number)


@router.get("/numbers", response_model=NumberListResponse)
async def list_numbers(control_api: ControlAPIService = Depends(get_control_api)):
    """
    Registered phone numbers with their SIP and agent configs
    """
    sip_data, agent_data = await asyncio.gather(
        control_api.list_sip_configs(),
        control_api.list_agent_configs()
    )
    sip_configs = extract_records(sip_data)
    agent_configs = extract_records(agent_data)
    numbers = merge_numbers(sip_configs, agent_configs)

    return NumberListResponse(
        numbers=numbers,
        count=len(numbers),
        sip_count=len(sip_configs),
        agent_count=len(agent_configs)
    )


def _failure_message(exc: BaseException) -> str:
    return exc.message if isinstance(exc, TestBenchException) else str(exc)


@router.get("/stats", response_model=DashboardStats)
async def get_statistics(
    rooms: LiveKitRoomService = Depends(get_room_service),
    control_api: ControlAPIService = Depends(get_control_api)
):
    """
    Dashboard counters

    Each source is queried independently; a failing source leaves its
    counters at zero and is reported under `errors`.
    """
    room_result, sip_result, agent_result = await asyncio.gather(
        rooms.list_rooms(),
        control_api.list_sip_configs(),
        control_api.list_agent_configs(),
        return_exceptions=True
    )

    stats = DashboardStats()

    if isinstance(room_result, BaseException):
        stats.errors["livekit"] = _failure_message(room_result)
    else:
        stats.active_rooms = len(room_result)
        stats.total_participants = sum(room.num_participants for room in room_result)

    if isinstance(sip_result, BaseException):
        stats.errors["sipConfigs"] = _failure_message(sip_result)
    if isinstance(agent_result, BaseException):
        stats.errors["agentConfigs"] = _failure_message(agent_result)
    else:
        stats.agent_configs = len(extract_records(agent_result))

    if not isinstance(sip_result, BaseException):
        sip_configs = extract_records(sip_result)
        agent_configs = [] if isinstance(agent_result, BaseException) else extract_records(agent_result)
        stats.registered_numbers = len(merge_numbers(sip_configs, agent_configs))

    if stats.errors:
        logger.warning(f"Stats computed with failing sources: {sorted(stats.errors)}")
    return stats
