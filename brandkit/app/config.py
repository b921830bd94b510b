"""Runtime configuration read from the environment (and an optional .env file)."""
import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    return int(value) if value else default


class Settings(BaseModel):
    """All tunables for a run. Construct directly in tests, from_env() elsewhere."""
    color_strategy: str = Field(default="vision", description="vision, palette, or a comma list tried in order")
    output_path: str = Field(default="brandkit.json", description="Where the brand kit document is written")

    llm_provider: Literal["auto", "openai", "google", "ollama"] = Field(default="auto")
    openai_api_key: Optional[str] = Field(default=None)
    openai_model: str = Field(default="gpt-4o")
    google_api_key: Optional[str] = Field(default=None)
    gemini_model: str = Field(default="gemini-2.5-flash")
    ollama_model: str = Field(default="llava")
    llm_timeout: float = Field(default=60.0, description="Seconds before an enrichment call counts as failed")
    max_tokens: int = Field(default=300)

    render_timeout_ms: int = Field(default=60000)
    settle_ms: int = Field(default=1500, description="Extra wait after navigation for late JS")
    full_page_screenshot: bool = Field(default=True)
    viewport_width: int = Field(default=1440)
    viewport_height: int = Field(default=900)

    summary_max_chars: int = Field(default=6000)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            color_strategy=os.getenv("BRANDKIT_COLOR_STRATEGY", "vision"),
            output_path=os.getenv("BRANDKIT_OUTPUT_PATH", "brandkit.json"),
            llm_provider=os.getenv("BRANDKIT_LLM_PROVIDER", "auto").lower(),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o"),
            google_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            ollama_model=os.getenv("OLLAMA_MODEL", "llava"),
            llm_timeout=float(os.getenv("BRANDKIT_LLM_TIMEOUT", "60")),
            max_tokens=_env_int("BRANDKIT_MAX_TOKENS", 300),
            render_timeout_ms=_env_int("BRANDKIT_RENDER_TIMEOUT_MS", 60000),
            settle_ms=_env_int("BRANDKIT_SETTLE_MS", 1500),
            full_page_screenshot=_env_bool("BRANDKIT_FULL_PAGE", True),
            summary_max_chars=_env_int("BRANDKIT_SUMMARY_MAX_CHARS", 6000),
        )
