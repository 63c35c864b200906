"""Dream analysis models for AI processing and API responses"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DREAM_TEXT_MIN_LENGTH = 20
DREAM_TEXT_MAX_LENGTH = 2000


class DreamAnalysis(BaseModel):
    """Strict shape the model must return. Extra keys are rejected."""
    model_config = ConfigDict(extra="forbid", strict=True)

    emotions: List[str] = Field(description="Detected emotions, e.g. fear, joy, anxiety")
    themes: List[str] = Field(description="Dream themes, e.g. flying, falling, chase")
    interpretation: str = Field(description="2-3 sentence psychological interpretation")
    symbols: List[str] = Field(description="Concrete objects, people and places mentioned")
    confidence: float = Field(ge=0.0, le=1.0, description="0.0-1.0, clarity and detail of the dream")


class DreamAnalysisResult(BaseModel):
    """Normalized analysis returned to the UI, whichever path produced it"""
    emotions: List[str]
    themes: List[str]
    interpretation: str
    symbols: List[str]
    confidence: float = Field(ge=0.0, le=1.0)
    timestamp: int = Field(description="Generation time in epoch milliseconds")


class DreamAnalysisRequest(BaseModel):
    """POST /api/analyzeDream body. Length bounds are checked by the service."""
    model_config = ConfigDict(populate_by_name=True)

    dream_text: str = Field(alias="dreamText")
    user_id: Optional[str] = Field(None, alias="userId")
    timestamp: Optional[float] = None

