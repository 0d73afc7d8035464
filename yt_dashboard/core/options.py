"""DashboardOptions settings model for yt-dashboard."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource
from pydantic_settings import YamlConfigSettingsSource


# Reason codes in a YouTube error payload that mean the API is unusable for
# the configured key, as opposed to a single bad request.
DEFAULT_UNAVAILABLE_REASONS = [
    "accessNotConfigured",
    "SERVICE_DISABLED",
    "keyInvalid",
    "API_KEY_INVALID",
    "quotaExceeded",
    "dailyLimitExceeded",
]


class DashboardOptions(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="YT_DASHBOARD_",
        yaml_file="yt_dashboard.yaml",
        yaml_file_encoding="utf-8",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    api_key: str | None = None
    api_base_url: str = "https://www.googleapis.com/youtube/v3"
    search_path: str = "search"
    channels_path: str = "channels"
    playlist_items_path: str = "playlistItems"
    videos_path: str = "videos"
    probe_channel_id: str = "UC_x5XG1OV2P6uZZ5FSM9Ttw"
    unavailable_reasons: list[str] = DEFAULT_UNAVAILABLE_REASONS
    timeout: float = 5.0
    retries: int = 2
    rate_limit: float = 5.0
    max_channels: int = Field(default=10, ge=1)
    recent_video_count: int = Field(default=10, ge=1, le=50)
    monthly_page_size: int = Field(default=50, ge=1, le=50)
    lookback_months: int | None = Field(default=None, ge=1)
    synthetic_mode: Literal["seeded", "random"] = "seeded"
    verbose: bool = False
