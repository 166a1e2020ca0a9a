import enum
import os
from typing import Any, Optional

from agents import OpenAIChatCompletionsModel
from loguru import logger
from openai import AsyncOpenAI


class ModelProvider(enum.Enum):
    OPENROUTER = "openrouter"
    OPENAI = "openai"
    GEMINI = "gemini"
    OLLAMA = "ollama"


class ModelFactory:
    """
    Builds chat-completions models for OpenAI-compatible providers.

    Every supported provider exposes the OpenAI chat completions API, so the
    same client type is used throughout and only the endpoint, default model
    and API key source differ.
    """

    # Default base URLs and model names (can be overridden)
    _DEFAULT_CONFIG = {
        ModelProvider.OPENROUTER: {
            "base_url": "https://openrouter.ai/api/v1",
            "model_name": "agentica-org/deepcoder-14b-preview:free",
            "api_key_env": "OPENROUTER_API_KEY",
        },
        ModelProvider.OPENAI: {
            "base_url": None,  # Standard OpenAI client uses default base URL
            "model_name": "gpt-4o",
            "api_key_env": "OPENAI_API_KEY",
        },
        ModelProvider.GEMINI: {
            "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
            "model_name": "gemini-2.0-flash",
            "api_key_env": "GEMINI_API_KEY",
        },
        ModelProvider.OLLAMA: {
            "base_url": "http://localhost:11434/v1",
            "model_name": "qwen3:4b",
            "api_key_env": None,  # Local server ignores the key
        },
    }

    @staticmethod
    def build_model(
        model_type: ModelProvider,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        base_url: Optional[str] = None,
        client_kwargs: Optional[dict[str, Any]] = None,
    ) -> OpenAIChatCompletionsModel:
        """
        Builds and returns a model configuration instance.

        Args:
            model_type: The provider to talk to.
            api_key: The API key for the provider. If None, read from the
                     provider's environment variable (e.g. OPENROUTER_API_KEY).
            model_name: The model identifier. If None, uses the provider default.
            base_url: The API endpoint. If None, uses the provider default.
            client_kwargs: Extra keyword arguments for the AsyncOpenAI client
                           (e.g. timeout, max_retries).

        Returns:
            An OpenAIChatCompletionsModel bound to the provider.

        Raises:
            ValueError: If the provider is unsupported or no API key is available.
        """
        if model_type not in ModelFactory._DEFAULT_CONFIG:
            raise ValueError(f"Unsupported model type: {model_type}")

        config = ModelFactory._DEFAULT_CONFIG[model_type]

        api_key_env = config["api_key_env"]
        resolved_api_key = api_key or (os.getenv(api_key_env) if api_key_env else model_type.value)
        if not resolved_api_key:
            raise ValueError(
                f"API key for {model_type.value} not provided and environment variable '{api_key_env}' not set."
            )

        resolved_model_name = model_name or config["model_name"]
        resolved_base_url = base_url if base_url is not None else config["base_url"]
        client_args = client_kwargs or {}

        logger.debug(f"--- Building Model: {model_type.name} ---")
        logger.debug(f"Model Name: {resolved_model_name}")
        logger.debug(f"Base URL: {resolved_base_url if resolved_base_url else 'Default OpenAI'}")
        logger.debug(f"API Key Source: {'Provided Argument' if api_key else 'Environment Variable'}")
        logger.debug(f"Client Kwargs: {client_args}")

        client = AsyncOpenAI(
            api_key=resolved_api_key,
            base_url=resolved_base_url,
            **client_args,
        )
        return OpenAIChatCompletionsModel(
            model=resolved_model_name,
            openai_client=client,
        )
