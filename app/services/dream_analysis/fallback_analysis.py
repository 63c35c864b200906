"""Local keyword analysis used when the dream analysis API is unavailable"""
import time
from typing import Dict, List, Optional, Tuple

from .models.dream_analysis import DreamAnalysisResult

# Fixed confidence for keyword matches so results always carry the field
FALLBACK_CONFIDENCE = 0.3
MAX_SYMBOLS = 3

EMOTION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "fear": ("scared", "afraid", "terrified", "frightened", "panic"),
    "joy": ("happy", "excited", "elated", "cheerful", "delighted"),
    "sadness": ("sad", "depressed", "crying", "tears", "mourning"),
    "anger": ("angry", "mad", "furious", "rage", "hostile"),
    "anxiety": ("worried", "nervous", "anxious", "stressed", "uneasy"),
}

THEME_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "flying": ("flying", "soaring", "airplane", "wings", "sky"),
    "falling": ("falling", "dropping", "plunging", "descending"),
    "chase": ("chasing", "running", "pursuing", "escaping"),
    "water": ("water", "ocean", "swimming", "drowning", "waves"),
    "home": ("home", "house", "family", "childhood", "room"),
}

SYMBOL_VOCABULARY: Tuple[str, ...] = (
    "house", "car", "animal", "person", "tree", "water", "fire", "door", "window",
)

INTERPRETATIONS: Dict[str, str] = {
    "fear": "This dream may reflect underlying anxieties or concerns in your waking life.",
    "joy": "This dream suggests positive emotions and a sense of well-being.",
    "sadness": "This dream may indicate processing of difficult emotions or experiences.",
    "anger": "This dream could represent unresolved conflicts or frustrations.",
    "anxiety": "This dream may reflect stress or worry about current life situations.",
    "flying": "Flying dreams often represent freedom, ambition, or a desire to escape limitations.",
    "falling": "Falling dreams may indicate feelings of losing control or insecurity.",
    "chase": "Being chased in dreams often represents avoidance of something in waking life.",
    "water": "Water in dreams can symbolize emotions, cleansing, or life transitions.",
    "home": "Dreams about home often relate to security, identity, or childhood memories.",
}

INTERPRETATION_PREFIX = "Dream analysis suggests: "
GENERIC_INTERPRETATION = "This dream may reflect your subconscious processing of daily experiences."

DEFAULT_EMOTIONS = ["neutral"]
DEFAULT_THEMES = ["general"]


def match_categories(text: str, table: Dict[str, Tuple[str, ...]]) -> List[str]:
    """Categories (in table order) with at least one keyword in `text`"""
    lowered = text.lower()
    return [
        category
        for category, keywords in table.items()
        if any(keyword in lowered for keyword in keywords)
    ]


def extract_symbols(text: str, limit: int = MAX_SYMBOLS) -> List[str]:
    lowered = text.lower()
    return [symbol for symbol in SYMBOL_VOCABULARY if symbol in lowered][:limit]


def build_interpretation(emotions: List[str], themes: List[str]) -> str:
    sentences = [INTERPRETATIONS[item] for item in [*emotions, *themes] if item in INTERPRETATIONS]
    if not sentences:
        return INTERPRETATION_PREFIX + GENERIC_INTERPRETATION
    return INTERPRETATION_PREFIX + " ".join(sentences)


def analyze_locally(dream_text: str, now_ms: Optional[int] = None) -> DreamAnalysisResult:
    """
    Keyword-based analysis. Never fails.

    Args:
        dream_text: Raw dream text
        now_ms: Timestamp to attach (defaults to the current time)

    Returns:
        DreamAnalysisResult with the same shape as the API path
    """
    emotions = match_categories(dream_text, EMOTION_KEYWORDS)
    themes = match_categories(dream_text, THEME_KEYWORDS)

    return DreamAnalysisResult(
        emotions=emotions or list(DEFAULT_EMOTIONS),
        themes=themes or list(DEFAULT_THEMES),
        interpretation=build_interpretation(emotions, themes),
        symbols=extract_symbols(dream_text),
        confidence=FALLBACK_CONFIDENCE,
        timestamp=now_ms if now_ms is not None else int(time.time() * 1000),
    )
