"""
Control API Service
Forwards call, web session and configuration requests to the backend Control API
"""

import httpx
from typing import Optional, Dict, Any
from urllib.parse import quote

from testbench.core.config import settings
from testbench.core.logging import get_logger
from testbench.core.exceptions import ConfigurationError, ControlAPIError
from testbench.utils.helpers import mask_phone_number

logger = get_logger(__name__)


class ControlAPIService:
    """Thin client for the backend Control API; one request per operation, no retries"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.control_api_base
        self.configured = settings.control_api_configured
        self.timeout = settings.control_api_timeout
        self.headers = {"Content-Type": "application/json"}
        self._transport = transport

    @property
    def display_url(self) -> str:
        return self.base_url if self.configured else "(not configured)"

    def _ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError(
                "Backend API URL not configured",
                missing=["CONTROL_API_URL"],
                hint="Set CONTROL_API_URL (or NEXT_PUBLIC_CONTROL_API_URL) to your backend URL"
            )

    @staticmethod
    def _error_message(response: httpx.Response, fallback: str) -> str:
        """Pick the most useful error text from an upstream error response"""
        try:
            data = response.json()
        except ValueError:
            return response.text.strip() or fallback

        if isinstance(data, dict):
            message = data.get("detail") or data.get("error")
            if message:
                return message if isinstance(message, str) else str(message)
        return fallback

    async def _request(
        self,
        method: str,
        path: str,
        action: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Send one request to the Control API

        Args:
            method: HTTP method
            path: Path below the base URL, with leading slash
            action: Human-readable action for error messages
            payload: Optional JSON body

        Returns:
            Decoded JSON response body

        Raises:
            ConfigurationError: If no backend URL is set
            ControlAPIError: On upstream errors or transport failures
        """
        self._ensure_configured()
        url = f"{self.base_url}{path}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True
            ) as client:
                response = await client.request(method, url, headers=self.headers, json=payload)
                response.raise_for_status()
                return response.json() if response.content else {}

        except httpx.HTTPStatusError as e:
            message = self._error_message(e.response, f"Failed to {action}")
            logger.warning(f"Control API {method} {path} returned {e.response.status_code}: {message}")
            raise ControlAPIError(message, url=url, upstream_status=e.response.status_code) from e

        except httpx.RequestError as e:
            logger.error(f"Control API {method} {path} failed: {e}")
            raise ControlAPIError(
                f"Failed to {action}: {e}",
                url=url,
                hint=f"Check if backend is running at {self.base_url}"
            ) from e

        except ValueError as e:
            logger.error(f"Control API {method} {path} returned invalid JSON")
            raise ControlAPIError(f"Failed to {action}: invalid JSON response", url=url) from e

    async def place_outbound_call(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Ask the backend to create a room, dispatch the agent and dial out"""
        logger.info(f"Placing outbound call to {mask_phone_number(payload.get('phone_number', ''))}")
        return await self._request("POST", "/calls/outbound", "initiate call", payload)

    async def create_web_session(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Ask the backend for a browser session room and join token"""
        logger.info("Creating web session")
        return await self._request("POST", "/sessions/web", "start web session", payload)

    async def list_sip_configs(self) -> Any:
        return await self._request("GET", "/sip-configs", "fetch SIP configs")

    async def save_sip_config(self, config: Dict[str, Any]) -> Any:
        return await self._request("POST", "/sip-configs", "save SIP config", config)

    async def list_agent_configs(self) -> Any:
        return await self._request("GET", "/configs", "fetch agent configs")

    async def save_agent_config(self, config: Dict[str, Any]) -> Any:
        return await self._request("POST", "/configs", "save agent config", config)

    async def get_config_by_phone(self, phone_number: str) -> Any:
        """Look up the config the agent applies to calls on a number"""
        path = f"/configs/phone/{quote(phone_number, safe='')}"
        return await self._request("GET", path, "look up config")
