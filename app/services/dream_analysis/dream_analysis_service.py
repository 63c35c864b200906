"""Dream Analysis Gateway - validates input, calls the LLM, validates its answer"""
import asyncio
import json
import logging
import secrets
import string
import time
from typing import Any, Callable, Optional

import openai
from langchain_openai import ChatOpenAI
from pydantic import ValidationError as PydanticValidationError

from app.config import get_settings
from .errors import (
    DreamAnalysisError,
    InternalError,
    UpstreamFormatError,
    UpstreamQuotaError,
    UpstreamTimeoutError,
    ValidationError,
)
from .models.dream_analysis import (
    DREAM_TEXT_MAX_LENGTH,
    DREAM_TEXT_MIN_LENGTH,
    DreamAnalysis,
    DreamAnalysisResult,
)
from .prompts import prompt_template
from .rate_limiter import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

_REQUEST_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_request_id() -> str:
    suffix = "".join(secrets.choice(_REQUEST_ID_ALPHABET) for _ in range(9))
    return f"req_{int(time.time() * 1000)}_{suffix}"


def validate_dream_text(dream_text: Any) -> str:
    """
    Check the raw dream text length and return the text to send to the model.

    Bounds apply to the text as received; surrounding whitespace is only
    stripped afterwards.
    """
    if not isinstance(dream_text, str):
        raise ValidationError("dreamText", "must be a string")
    if len(dream_text) < DREAM_TEXT_MIN_LENGTH:
        raise ValidationError("dreamText", f"Dream text must be at least {DREAM_TEXT_MIN_LENGTH} characters")
    if len(dream_text) > DREAM_TEXT_MAX_LENGTH:
        raise ValidationError("dreamText", f"Dream text cannot exceed {DREAM_TEXT_MAX_LENGTH} characters")
    return dream_text.strip()


def parse_model_output(raw: str) -> DreamAnalysis:
    """
    Parse the model's reply and validate it against the five-key schema.

    Raises:
        UpstreamFormatError: reply is not JSON or does not match the schema
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        logger.error(f"Failed to parse dream analysis response: {e}")
        raise UpstreamFormatError("Failed to parse dream analysis response")

    try:
        return DreamAnalysis.model_validate(data)
    except PydanticValidationError as e:
        logger.error(f"Dream analysis response validation failed: {e}")
        raise UpstreamFormatError()


def _default_llm(model: str, timeout_seconds: float):
    llm = ChatOpenAI(
        model=model,
        temperature=0.7,
        max_tokens=500,
        timeout=timeout_seconds,
        max_retries=0,
    )
    return llm.bind(response_format={"type": "json_object"})


class DreamAnalysisService:
    """
    Gateway to the external completion model.

    Failures are always one of the DreamAnalysisError kinds with a stable
    message; upstream error text is logged and never returned.
    """

    def __init__(
        self,
        llm=None,
        rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        settings = get_settings()
        self._llm = llm
        self._model = settings.dream_analysis_model
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.dream_analysis_timeout_seconds
        )
        self.rate_limiter = rate_limiter or SlidingWindowRateLimiter(
            max_requests=settings.dream_rate_limit_max,
            window_seconds=settings.dream_rate_limit_window_seconds,
        )
        self._clock = clock

    @property
    def llm(self):
        if self._llm is None:
            self._llm = _default_llm(self._model, self.timeout_seconds)
        return self._llm

    async def analyze(
        self,
        dream_text: str,
        user_id: Optional[str] = None,
        client_id: str = "unknown",
    ) -> DreamAnalysisResult:
        """
        Analyze a dream with the LLM.

        Args:
            dream_text: Dream description, 20-2000 characters
            user_id: Optional user ID (reserved for per-user quotas)
            client_id: Client network origin used as the rate limit key

        Returns:
            DreamAnalysisResult with a generation timestamp attached
        """
        text = validate_dream_text(dream_text)
        self.rate_limiter.acquire(client_id)

        logger.info(f"Analyzing dream for client {client_id} (user: {user_id or 'anonymous'}, {len(text)} chars)")
        raw = await self._complete(text)
        analysis = parse_model_output(raw)

        return DreamAnalysisResult(
            **analysis.model_dump(),
            timestamp=int(self._clock() * 1000),
        )

    async def _complete(self, text: str) -> str:
        messages = prompt_template.format_messages(dream_text=text)
        try:
            response = await asyncio.wait_for(self.llm.ainvoke(messages), timeout=self.timeout_seconds)
        except DreamAnalysisError:
            raise
        except (asyncio.TimeoutError, openai.APITimeoutError):
            logger.error(f"Dream analysis timed out after {self.timeout_seconds}s")
            raise UpstreamTimeoutError()
        except openai.RateLimitError as e:
            logger.error(f"OpenAI rate limit or quota error: {e}")
            if getattr(e, "code", None) == "insufficient_quota":
                raise UpstreamQuotaError()
            raise UpstreamQuotaError("Rate limit exceeded. Please try again in a moment.")
        except Exception as e:
            logger.error(f"Dream analysis upstream error: {e}")
            raise InternalError()

        content = getattr(response, "content", response)
        if not isinstance(content, str):
            logger.error(f"Unexpected dream analysis content type: {type(content).__name__}")
            raise UpstreamFormatError()
        return content
