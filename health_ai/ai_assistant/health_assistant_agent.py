from typing import Optional

from agents import Agent, ModelSettings, set_tracing_disabled
from pydantic import BaseModel

from health_ai.ai_assistant.model_factory import ModelFactory, ModelProvider


class HealthAssistantConfig(BaseModel):
    model_provider: ModelProvider = ModelProvider.OPENROUTER
    model_name: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout_s: float = 60.0
    max_tokens: Optional[int] = None
    instructions: str = (
        "You are a concise, no-fluff health assistant. Use the provided health data to respond clearly and "
        "directly. Always reference actual numbers (e.g., 'You've walked 0 steps today'). Keep responses under "
        "2 sentences. Avoid general advice unless directly asked. Do not use markdown, emojis, or filler phrases. "
        "Do not repeat motivational language unless necessary."
    )


def get_health_assistant_agent(config: HealthAssistantConfig) -> Agent:
    # Traces would be uploaded to OpenAI with the provider's key otherwise
    set_tracing_disabled(True)

    model = ModelFactory.build_model(
        config.model_provider,
        api_key=config.api_key,
        model_name=config.model_name,
        base_url=config.base_url,
        client_kwargs={"timeout": config.timeout_s},
    )
    return Agent(
        name="HealthAssistant",
        instructions=config.instructions,
        model=model,
        model_settings=ModelSettings(max_tokens=config.max_tokens),
    )
