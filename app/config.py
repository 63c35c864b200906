import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str]
    dream_analysis_model: str
    dream_analysis_timeout_seconds: float
    dream_rate_limit_max: int
    dream_rate_limit_window_seconds: int
    timer_snapshot_path: str
    dream_api_base_url: str
    api_version: str


@lru_cache
def get_settings() -> Settings:
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        dream_analysis_model=os.getenv("DREAM_ANALYSIS_MODEL", "gpt-3.5-turbo"),
        dream_analysis_timeout_seconds=float(os.getenv("DREAM_ANALYSIS_TIMEOUT_SECONDS", "30")),
        dream_rate_limit_max=int(os.getenv("DREAM_RATE_LIMIT_MAX", "10")),
        dream_rate_limit_window_seconds=int(os.getenv("DREAM_RATE_LIMIT_WINDOW_SECONDS", str(15 * 60))),
        timer_snapshot_path=os.getenv("TIMER_SNAPSHOT_PATH", ".lifeclock/timer_snapshot.json"),
        dream_api_base_url=os.getenv("DREAM_API_BASE_URL", "http://localhost:3000"),
        api_version=os.getenv("API_VERSION", "1.0.0"),
    )
