"""
Journal API client for dream analysis

Calls the dream analysis endpoint and falls back to the local keyword
analysis whenever the API cannot produce a result.
"""
import asyncio
import logging
import time
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.config import get_settings
from .errors import (
    DreamAnalysisError,
    InternalError,
    RateLimitError,
    UpstreamFormatError,
    UpstreamTimeoutError,
)
from .fallback_analysis import analyze_locally
from .models.dream_analysis import DreamAnalysisResult

logger = logging.getLogger(__name__)

ANALYZE_DREAM_ENDPOINT = "/api/analyzeDream"
HEALTH_ENDPOINT = "/api/health"
REQUEST_TIMEOUT_SECONDS = 30.0


class JournalAPI:
    """HTTP client for the dream analysis API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or get_settings().dream_api_base_url
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def analyze_dream(self, dream_text: str, user_id: Optional[str] = None) -> DreamAnalysisResult:
        """
        Analyze a dream using the API.

        Raises:
            DreamAnalysisError: any failure, mapped to the error taxonomy
        """
        payload: Dict[str, Any] = {
            "dreamText": dream_text.strip(),
            "timestamp": int(time.time() * 1000),
        }
        headers = {"Content-Type": "application/json"}
        if user_id:
            payload["userId"] = user_id
            headers["X-User-ID"] = user_id

        body = await self._request("POST", ANALYZE_DREAM_ENDPOINT, json=payload, headers=headers)

        if not body.get("success"):
            raise InternalError(body.get("error") or "Dream analysis failed")
        if "data" not in body or body["data"] is None:
            raise UpstreamFormatError("Invalid response: missing analysis data")

        try:
            return DreamAnalysisResult.model_validate(body["data"])
        except PydanticValidationError as e:
            logger.error(f"Invalid analysis data from API: {e}")
            raise UpstreamFormatError()

    async def check_health(self) -> bool:
        try:
            body = await self._request("GET", HEALTH_ENDPOINT)
        except DreamAnalysisError as e:
            logger.error(f"Health check failed: {e}")
            return False
        return body.get("success") is True

    async def _request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        try:
            async with self._client() as client:
                # httpx timeouts bound each phase; this bounds the whole call
                response = await asyncio.wait_for(
                    client.request(method, endpoint, **kwargs), timeout=self.timeout
                )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error(f"Request to {endpoint} timed out after {self.timeout}s")
            raise UpstreamTimeoutError("Request timeout. Please try again.")
        except httpx.HTTPError as e:
            logger.error(f"Network error calling {endpoint}: {e}")
            raise InternalError("Network error: Unable to connect to dream analysis service")

        if response.is_error:
            error_message = f"HTTP {response.status_code}"
            try:
                error_body = response.json()
            except ValueError:
                error_body = None
            if isinstance(error_body, dict) and error_body.get("error"):
                error_message = error_body["error"]
            if response.status_code == 429:
                raise RateLimitError(error_message)
            raise InternalError(error_message)

        try:
            body = response.json()
        except ValueError:
            raise UpstreamFormatError("Invalid response: body is not JSON")
        if not isinstance(body, dict):
            raise UpstreamFormatError("Invalid response: body is not an object")
        return body


async def analyze_dream_with_fallback(
    api: JournalAPI,
    dream_text: str,
    user_id: Optional[str] = None,
) -> DreamAnalysisResult:
    """Try the API first; on any failure use the local keyword analysis"""
    try:
        return await api.analyze_dream(dream_text, user_id)
    except DreamAnalysisError as e:
        logger.warning(f"API analysis failed, falling back to local analysis: {e.message}")
        return analyze_locally(dream_text)
