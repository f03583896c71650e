"""Application configuration pulled from environment variables via pydantic."""
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the toll calculator service."""
    model_config = SettingsConfigDict(env_prefix="TOLL_", extra="ignore")

    timezone: str = "Europe/Stockholm"
    include_moving_holidays: bool = False  # Easter-based holidays are opt-in
    currency: str = "SEK"
    api_key: str | None = None
    log_level: str = "INFO"
    job_name: str = "toll_calculator"

    @field_validator("timezone", mode="after")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject timezone names that zoneinfo cannot resolve."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Invalid timezone: {v}") from exc
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lower-case level names."""
        return str(v).upper()

    @property
    def tzinfo(self) -> ZoneInfo:
        """Timezone in which passages are priced."""
        return ZoneInfo(self.timezone)


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
