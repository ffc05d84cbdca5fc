"""
Configuration and environment handling for the ScholarMatch advisor.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


class SupabaseConfig(BaseModel):
    """Hosted Postgres (PostgREST) backend configuration."""
    url: str = Field(default_factory=lambda: os.getenv("SUPABASE_URL", ""))
    service_role_key: str = Field(
        default_factory=lambda: os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
    )
    timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("SUPABASE_TIMEOUT", "10"))
    )


class OpenAIConfig(BaseModel):
    """OpenAI API configuration."""
    api_key: str = Field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    model: str = Field(default="gpt-4o")
    max_tokens: int = Field(default=1024)
    temperature: float = Field(default=0.5)


class AdvisorConfig(BaseModel):
    """Limits and horizons used by the advisor actions."""
    brand_candidate_limit: int = Field(default=20, description="Brands fetched for on-the-fly matching")
    recommendation_limit: int = Field(default=10, description="Brand matches returned")
    top_recommendations_shown: int = Field(default=5, description="Matches rendered in the message")
    blocked_lookahead_days: int = Field(default=180, description="Blocked periods fetched ahead of today")
    schedule_horizon_days: int = Field(default=90, description="Days scanned for deal windows")
    max_deal_windows: int = Field(default=5)
    recent_deal_limit: int = Field(default=10)
    academic_record_limit: int = Field(default=8)


class Config(BaseModel):
    """Main configuration."""
    supabase: SupabaseConfig = Field(default_factory=SupabaseConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)

    # Feature flags
    enable_ai_chat: bool = Field(
        default_factory=lambda: os.getenv("SCHOLARMATCH_AI_CHAT", "false").lower() == "true"
    )
    enable_activity_log: bool = Field(
        default_factory=lambda: os.getenv("SCHOLARMATCH_ACTIVITY_LOG", "true").lower() == "true"
    )


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None
