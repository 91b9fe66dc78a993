"""
Application configuration settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from signage.domain_core.value_objects.slide_limits import SlideLimits


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=[".env", "../.env"],
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field("Signage Slides", alias="APP_NAME")

    # Environment
    environment: str = Field("development", alias="ENVIRONMENT")

    # Storage
    slides_dir: str = Field("data/slides", alias="SLIDES_DIR")
    users_dir: str = Field("data/users", alias="USERS_DIR")

    # Slide limits
    slide_name_max_len: int = Field(32, alias="SLIDE_NAME_MAX_LEN")
    slide_markup_max_len: int = Field(2048, alias="SLIDE_MARKUP_MAX_LEN")
    slide_max_index: int = Field(65536, alias="SLIDE_MAX_INDEX")
    slide_min_time: int = Field(1000, alias="SLIDE_MIN_TIME")
    slide_max_time: int = Field(20000, alias="SLIDE_MAX_TIME")
    slide_id_max_tries: int = Field(16, alias="SLIDE_ID_MAX_TRIES")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("json", alias="LOG_FORMAT")

    def slide_limits(self) -> SlideLimits:
        """Build the slide limits value object from settings."""
        return SlideLimits(
            name_max_len=self.slide_name_max_len,
            markup_max_len=self.slide_markup_max_len,
            max_index=self.slide_max_index,
            min_time=self.slide_min_time,
            max_time=self.slide_max_time,
            id_max_tries=self.slide_id_max_tries,
        )


_settings = None


def get_settings() -> Settings:
    """Get settings instance (useful for dependency injection)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
