from typing import Optional

from agents import Agent, Runner
from loguru import logger

from health_ai.ai_assistant.health_assistant_agent import HealthAssistantConfig, get_health_assistant_agent


class LLMService:
    """Sends a single prompt to the configured LLM and returns its text reply."""

    def __init__(self, config: HealthAssistantConfig) -> None:
        self.config = config
        self._agent: Optional[Agent] = None

    @property
    def agent(self) -> Agent:
        if self._agent is None:
            logger.info(f"Initializing health assistant agent ({self.config.model_provider.value})")
            self._agent = get_health_assistant_agent(self.config)
        return self._agent

    async def fetch_insight(self, prompt: str) -> Optional[str]:
        """
        Ask the LLM to continue the prompt.

        Returns:
            The reply text, or None when the request fails or the reply is empty.
        """
        logger.debug(f"Sending prompt to LLM ({len(prompt)} chars)")
        try:
            result = await Runner.run(self.agent, input=prompt)
        except Exception as e:
            logger.exception(f"LLM request failed: {e}")
            return None

        final_output = result.final_output
        if not isinstance(final_output, str) or not final_output.strip():
            logger.warning(f"LLM returned no usable text: {final_output!r}")
            return None

        logger.debug(f"LLM response: {final_output}")
        return final_output.strip()
