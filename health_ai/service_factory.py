from functools import cached_property

from health_ai.config import BotSettings
from health_ai.health.fetcher import HealthDataFetcher
from health_ai.health.metric_store import MetricStore
from health_ai.health.sources import GarminHealthSource, HealthDataSource, MockHealthSource
from health_ai.service.garmin_account_manager import GarminAccountManager
from health_ai.service.health_chat_service import HealthChatService
from health_ai.service.llm_service import LLMService


class ServiceFactory:
    def __init__(self, bot_settings: BotSettings):
        self.bot_settings = bot_settings

    @cached_property
    def metric_store(self) -> MetricStore:
        return MetricStore()

    @cached_property
    def garmin_account_manager(self) -> GarminAccountManager:
        return GarminAccountManager(self.bot_settings.garmin_token_dir)

    @cached_property
    def health_data_source(self) -> HealthDataSource:
        if self.bot_settings.use_mock_data:
            return MockHealthSource()
        return GarminHealthSource(self.garmin_account_manager, self.bot_settings.my_telegram_user_id)

    @cached_property
    def health_data_fetcher(self) -> HealthDataFetcher:
        return HealthDataFetcher(self.health_data_source, lookback_days=self.bot_settings.lookback_days)

    @cached_property
    def llm_service(self) -> LLMService:
        return LLMService(self.bot_settings.llm)

    @cached_property
    def health_chat_service(self) -> HealthChatService:
        return HealthChatService(self.metric_store, self.health_data_fetcher, self.llm_service)
