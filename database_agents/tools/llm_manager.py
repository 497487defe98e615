import openai
import logging
from database_agents.config.config import Config

logger = logging.getLogger(__name__)


class LLMManager:
    """Manager for OpenAI LLM interactions"""

    def __init__(self, client: openai.OpenAI = None):
        self.client = client or openai.OpenAI(
            api_key=Config.OPENAI_API_KEY,
            timeout=Config.REQUEST_TIMEOUT,
            max_retries=Config.MAX_RETRIES,
        )
        self.model = Config.OPENAI_MODEL
        self.temperature = Config.TEMPERATURE
        self.max_tokens = Config.MAX_TOKENS

    def get_completion(self, system_prompt: str, user_prompt: str) -> str:
        """Send a system/user prompt pair and return the text of the first choice ('' if empty)"""
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt}
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens
            )

            if response.usage:
                logger.debug(f"Completion used {response.usage.total_tokens} tokens")

            # content is None when the model returns no text
            return response.choices[0].message.content or ""

        except Exception as e:
            logger.error(f"Error getting completion from OpenAI: {e}")
            raise
