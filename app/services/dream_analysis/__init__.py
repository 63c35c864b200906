from .dream_analysis_service import DreamAnalysisService, new_request_id
from .fallback_analysis import analyze_locally
from .journal_client import JournalAPI, analyze_dream_with_fallback
from .rate_limiter import SlidingWindowRateLimiter

__all__ = [
    "DreamAnalysisService",
    "JournalAPI",
    "SlidingWindowRateLimiter",
    "analyze_dream_with_fallback",
    "analyze_locally",
    "new_request_id",
]
