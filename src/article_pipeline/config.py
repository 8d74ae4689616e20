"""Pipeline configuration: per-call options and process settings via pydantic-settings."""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineOptions(BaseModel):
    """Options for one ContentPipeline. Every field is optional; defaults below."""

    # Fetching
    timeout_seconds: float = Field(default=15.0, gt=0)
    max_retries: int = Field(default=3, ge=1)

    # Extraction
    include_images: bool = True
    sanitize_content: bool = True
    fallback_to_rss: bool = True
    use_browser_automation: bool = False
    use_api_extraction: bool = False
    use_ai_generation: bool = False
    use_visual_fallbacks: bool = True
    strict_mode: bool = False
    min_text_length: int = Field(default=200, gt=0)
    max_content_length: int = Field(default=10_000, gt=3)

    # Caching
    enable_caching: bool = True
    cache_timeout_seconds: float = Field(default=3600.0, gt=0)
    cache_max_entries: int = Field(default=1024, gt=0)

    # Images
    max_images: int = Field(default=5, ge=1)
    min_width: int = Field(default=300, ge=0)
    min_height: int = Field(default=200, ge=0)
    prefer_high_quality: bool = True
    enable_direct_image_fetch: bool = True


class Settings(BaseSettings):
    """Process-level defaults loaded from ARTICLE_PIPELINE_* environment variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="ARTICLE_PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"

    # Pipeline defaults
    timeout_seconds: float = 15.0
    max_retries: int = 3
    enable_caching: bool = True
    cache_timeout_seconds: float = 3600.0
    use_browser_automation: bool = False
    use_api_extraction: bool = False
    use_ai_generation: bool = False
    max_images: int = 5

    def pipeline_options(self, **overrides) -> PipelineOptions:
        """Build PipelineOptions from these settings, with per-call overrides on top."""
        values = {
            "timeout_seconds": self.timeout_seconds,
            "max_retries": self.max_retries,
            "enable_caching": self.enable_caching,
            "cache_timeout_seconds": self.cache_timeout_seconds,
            "use_browser_automation": self.use_browser_automation,
            "use_api_extraction": self.use_api_extraction,
            "use_ai_generation": self.use_ai_generation,
            "max_images": self.max_images,
        }
        values.update(overrides)
        return PipelineOptions(**values)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings. Lazy initialization to avoid import-time errors."""
    return Settings()
