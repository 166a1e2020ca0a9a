from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from health_ai.ai_assistant.health_assistant_agent import HealthAssistantConfig


class BotSettings(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__")

    telegram_bot_api_key: str
    my_telegram_user_id: int
    read_timeout_s: int = 30
    write_timeout_s: int = 30
    out_dir: Path = Path("./out")
    garmin_token_dir: Path = Path("./out/garmin_tokens")
    use_mock_data: bool = False
    lookback_days: int = Field(default=30, ge=1)
    default_range_days: int = Field(default=7, ge=1)
    llm: HealthAssistantConfig = Field(default_factory=HealthAssistantConfig)
