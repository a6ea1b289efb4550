"""
Configuration and environment handling for Prospector.
"""
import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


class SerpApiConfig(BaseModel):
    """SerpApi place-search configuration."""
    api_key: str = Field(default_factory=lambda: os.getenv("SERPAPI_KEY", ""))
    base_url: str = Field(default="https://serpapi.com/search.json")
    engine: str = Field(default="google_maps")
    page_size: int = Field(default=20, description="Provider's per-page maximum")
    timeout: float = Field(default=30.0)
    signal_results: int = Field(default=8, description="Organic results fetched for enrichment")


class OpenAIConfig(BaseModel):
    """OpenAI API configuration."""
    api_key: str = Field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    model: str = Field(default_factory=lambda: os.getenv("PROSPECTOR_AI_MODEL", "gpt-4o-mini"))
    max_tokens: int = Field(default=2048)
    temperature: float = Field(default=0.1)


class ClassifierConfig(BaseModel):
    """AI batch classification configuration."""
    max_batch_size: int = Field(default=20, description="Listings sent per AI call")


class RankingConfig(BaseModel):
    """Ranking defaults."""
    default_sort_mode: Literal["relevance", "quality"] = Field(default="relevance")
    default_niche_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("PROSPECTOR_NICHE") or None
    )


class Config(BaseModel):
    """Main configuration."""
    serpapi: SerpApiConfig = Field(default_factory=SerpApiConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)

    # Feature flags
    enable_ai_classification: bool = Field(default=True)
    enable_enrichment: bool = Field(default=True)


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
