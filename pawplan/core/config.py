"""Configuration management for pawplan."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PAWPLAN_",
        case_sensitive=False,
        extra="ignore",
    )

    # Household time
    default_timezone: str = Field(
        default="UTC",
        description="IANA timezone used when a household has no (or an unknown) timezone",
    )

    # Recurrence
    gate_recurrence: bool = Field(
        default=True,
        description=(
            "Restrict weekly/monthly tasks to their weekday/day of month. "
            "Disable to show every recurring task every day (legacy behaviour)"
        ),
    )

    # Streaks
    hot_streak_threshold: int = Field(default=3, ge=1, description="Current streak at which a streak counts as hot")
    streak_cache_ttl_seconds: int = Field(default=300, ge=0, description="TTL for cached streak rows (0 = no expiry)")
    max_streak_history_days: int = Field(
        default=730, ge=1, description="Maximum number of days walked back when deriving a streak"
    )

    # Activity feed
    activity_feed_days: int = Field(default=30, ge=1, description="Default look-back window for the activity feed")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment reported to Logfire")


# Application Constants
class Constants:
    """Application-wide constants."""

    # Time-of-day buckets (local hour boundaries, start inclusive)
    MORNING_START_HOUR: int = 5
    AFTERNOON_START_HOUR: int = 12
    EVENING_START_HOUR: int = 17

    # Recurrence rule keys
    RULE_TIME_KEY: str = "time"
    RULE_DATE_KEY: str = "date"
    RULE_DAY_OF_MONTH_KEY: str = "day_of_month"
    RULE_WEEKDAY_KEY: str = "weekday"
    RULE_DAYS_OF_WEEK_KEY: str = "days_of_week"
    RULE_CRON_KEY: str = "cron"

    # Day of month bounds
    MIN_DAY_OF_MONTH: int = 1
    MAX_DAY_OF_MONTH: int = 31

    # Cache
    STREAK_CACHE_KEY_PREFIX: str = "pawplan:streaks"

    # Activity feed section titles
    FEED_TODAY_TITLE: str = "Today"
    FEED_YESTERDAY_TITLE: str = "Yesterday"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
