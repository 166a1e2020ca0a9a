import pytest
from pydantic import ValidationError

from health_ai.config import BotSettings
from health_ai.health.sources import GarminHealthSource, MockHealthSource
from health_ai.service_factory import ServiceFactory


@pytest.fixture
def settings(tmp_path):
    return BotSettings(
        telegram_bot_api_key="123:abc",
        my_telegram_user_id=12345,
        out_dir=tmp_path,
        garmin_token_dir=tmp_path / "garmin_tokens",
        lookback_days=14,
    )


class TestServiceFactory:
    def test_uses_garmin_by_default(self, settings):
        source = ServiceFactory(settings).health_data_source

        assert isinstance(source, GarminHealthSource)
        assert source.user_id == 12345
        assert not source.is_available()

    def test_mock_data_switch(self, settings):
        settings.use_mock_data = True

        assert isinstance(ServiceFactory(settings).health_data_source, MockHealthSource)

    def test_services_share_one_store(self, settings):
        factory = ServiceFactory(settings)

        assert factory.health_chat_service.store is factory.metric_store
        assert factory.health_chat_service.fetcher is factory.health_data_fetcher
        assert factory.health_data_fetcher.lookback_days == 14

    def test_nested_llm_settings_from_environment(self, monkeypatch, settings):
        monkeypatch.setenv("TELEGRAM_BOT_API_KEY", "123:abc")
        monkeypatch.setenv("MY_TELEGRAM_USER_ID", "12345")
        monkeypatch.setenv("LLM__MODEL_NAME", "gpt-4o-mini")
        monkeypatch.setenv("LLM__MODEL_PROVIDER", "openai")

        loaded = BotSettings()

        assert loaded.llm.model_name == "gpt-4o-mini"
        assert loaded.llm.model_provider.value == "openai"

    def test_window_must_be_positive(self):
        with pytest.raises(ValidationError):
            BotSettings(telegram_bot_api_key="123:abc", my_telegram_user_id=1, default_range_days=0)
