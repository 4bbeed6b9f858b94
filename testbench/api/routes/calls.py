"""
Outbound call and browser web session API routes
"""

from typing import Any, Dict
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from testbench.core.logging import get_logger
from testbench.core.exceptions import (
    TestBenchException,
    ValidationError,
    InvalidPhoneNumberError
)
from testbench.models.activity import ActivityAction, ActivityStatus
from testbench.models.session import (
    AgentSelection,
    MakeCallRequest,
    WebSessionRequest,
    MakeCallResponse,
    WebSessionResponse,
    CallConfiguration,
    ProxyHealth
)
from testbench.api.dependencies import get_control_api, get_activity_store
from testbench.services.control_api import ControlAPIService
from testbench.services.activity_log import (
    ActivityLogStore,
    OUTBOUND_ACTIVITY,
    WEB_SESSION_ACTIVITY
)
from testbench.services.model_catalog import is_known_option
from testbench.utils.helpers import normalize_phone_number, is_valid_e164, mask_phone_number

logger = get_logger(__name__)

router = APIRouter(tags=["calls"])


def _validated_number(raw: str, field: str) -> str:
    phone = normalize_phone_number(raw)
    if not is_valid_e164(phone):
        raise InvalidPhoneNumberError(raw, field=field)
    return phone


def _warn_unknown_models(selection: AgentSelection) -> None:
    for kind in ("stt", "llm", "tts"):
        value = getattr(selection, kind)
        if value and not is_known_option(kind, value):
            logger.warning(f"{kind} model {value!r} is not in the catalog; forwarding anyway")


def _agent_fields(selection: AgentSelection) -> Dict[str, Any]:
    return {
        "stt": selection.stt,
        "llm": selection.llm,
        "tts": selection.tts,
        "agent_instructions": selection.agent_instructions,
    }


@router.post("/make-call", response_model=MakeCallResponse)
async def make_call(
    request: MakeCallRequest,
    control_api: ControlAPIService = Depends(get_control_api),
    activity: ActivityLogStore = Depends(get_activity_store)
):
    """
    Place an outbound call through the Control API

    - **phoneNumber**: Number to call (E.164 format, e.g., +14155551234)
    - **callerNumber**: Optional caller ID override
    - **stt / llm / tts**: Optional model selections
    - **agent_instructions**: Optional system instructions for the agent
    """
    if not request.phone_number or not request.phone_number.strip():
        raise ValidationError("Phone number is required", field="phoneNumber")

    phone_number = _validated_number(request.phone_number, "phoneNumber")
    caller_number = None
    if request.caller_number and request.caller_number.strip():
        caller_number = _validated_number(request.caller_number, "callerNumber")

    _warn_unknown_models(request)

    payload = {"phone_number": phone_number, "caller_number": caller_number}
    payload.update(_agent_fields(request))

    try:
        data = await control_api.place_outbound_call(payload)
    except TestBenchException as e:
        activity.add(
            OUTBOUND_ACTIVITY,
            ActivityAction.CALL_INITIATED.value,
            ActivityStatus.ERROR,
            details=e.message
        )
        raise

    data = data if isinstance(data, dict) else {}
    response = MakeCallResponse(
        room_name=data.get("room_name"),
        value_sources=data.get("value_sources"),
        defaults_used=data.get("defaults_used"),
        configuration=CallConfiguration(
            stt=data.get("stt_model"),
            llm=data.get("llm_model"),
            tts=data.get("tts_voice")
        )
    )

    activity.add(
        OUTBOUND_ACTIVITY,
        ActivityAction.CALL_INITIATED.value,
        ActivityStatus.SUCCESS,
        details=f"Calling {mask_phone_number(phone_number)}",
        room_name=response.room_name,
        api_response=data
    )
    logger.info(f"Outbound call initiated in room {response.room_name}")
    return response


@router.get("/make-call", response_model=ProxyHealth)
async def make_call_health(control_api: ControlAPIService = Depends(get_control_api)):
    """Report which backend the call proxy forwards to"""
    return ProxyHealth(service="livekit-call-trigger", backend_url=control_api.display_url)


async def _read_json_object(request: Request) -> Dict[str, Any]:
    """Request body as a dict; an empty or malformed body reads as {}"""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.post("/start-web-session", response_model=WebSessionResponse)
async def start_web_session(
    request: Request,
    control_api: ControlAPIService = Depends(get_control_api),
    activity: ActivityLogStore = Depends(get_activity_store)
):
    """
    Start a browser voice session through the Control API

    Body fields (all optional): **stt**, **llm**, **tts**, **agent_instructions**.
    Returns the LiveKit join token, room name and server URL.
    """
    try:
        selection = WebSessionRequest.model_validate(await _read_json_object(request))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid web session request: {e.errors()[0]['msg']}")

    _warn_unknown_models(selection)

    try:
        data = await control_api.create_web_session(_agent_fields(selection))
    except TestBenchException as e:
        activity.add(
            WEB_SESSION_ACTIVITY,
            ActivityAction.SESSION_STARTED.value,
            ActivityStatus.ERROR,
            details=e.message
        )
        raise

    data = data if isinstance(data, dict) else {}
    response = WebSessionResponse(
        token=data.get("token"),
        room_name=data.get("room_name"),
        livekit_url=data.get("livekit_url"),
        metadata=data.get("metadata"),
        value_sources=data.get("value_sources"),
        defaults_used=data.get("defaults_used")
    )

    activity.add(
        WEB_SESSION_ACTIVITY,
        ActivityAction.SESSION_STARTED.value,
        ActivityStatus.SUCCESS,
        details="Web session created",
        room_name=response.room_name,
        api_response={k: v for k, v in data.items() if k != "token"}
    )
    logger.info(f"Web session created: room={response.room_name} url={response.livekit_url}")
    return response


@router.get("/start-web-session", response_model=ProxyHealth)
async def start_web_session_health(control_api: ControlAPIService = Depends(get_control_api)):
    """Report which backend the web session proxy forwards to"""
    return ProxyHealth(service="livekit-web-session", backend_url=control_api.display_url)
