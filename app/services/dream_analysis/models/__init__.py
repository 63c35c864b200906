from .dream_analysis import (
    DREAM_TEXT_MAX_LENGTH,
    DREAM_TEXT_MIN_LENGTH,
    DreamAnalysis,
    DreamAnalysisRequest,
    DreamAnalysisResult,
)

__all__ = [
    "DREAM_TEXT_MAX_LENGTH",
    "DREAM_TEXT_MIN_LENGTH",
    "DreamAnalysis",
    "DreamAnalysisRequest",
    "DreamAnalysisResult",
]
