"""Dream analysis endpoint"""
import logging

from fastapi import APIRouter, Depends, Request

from app.api.responses import error_response, success_response
from app.dependencies import get_dream_analysis_service
from app.services.dream_analysis import DreamAnalysisService, new_request_id
from app.services.dream_analysis.errors import DreamAnalysisError, RateLimitError
from app.services.dream_analysis.models import DreamAnalysisRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["dreams"])


def client_origin(request: Request) -> str:
    """Rate limit key: the client's network address"""
    return request.client.host if request.client else "unknown"


@router.post("/analyzeDream")
async def analyze_dream(
    body: DreamAnalysisRequest,
    request: Request,
    service: DreamAnalysisService = Depends(get_dream_analysis_service),
):
    """
    Analyze a dream with the LLM.

    Returns:
        200 {success: true, data, requestId}
        400/429/500/504 {success: false, error, requestId}
    """
    request_id = new_request_id()
    try:
        result = await service.analyze(
            body.dream_text,
            user_id=body.user_id,
            client_id=client_origin(request),
        )
    except RateLimitError as e:
        return error_response(e.status_code, e.message, None)
    except DreamAnalysisError as e:
        logger.error(f"Dream analysis failed [{request_id}]: {type(e).__name__}: {e.message}")
        return error_response(e.status_code, e.message, request_id)

    logger.info(f"Dream analysis completed [{request_id}]")
    return success_response(result.model_dump(), request_id)
