"""
OpenAI LLM client for batch listing classification.
"""
import logging
from typing import Optional

from openai import OpenAI

from ..config import get_config


logger = logging.getLogger(__name__)


class LLMClient:
    """
    Thin OpenAI chat client. Returns raw response text; parsing and
    validation belong to the caller.
    """

    def __init__(self, model: Optional[str] = None):
        config = get_config()
        self.api_key = config.openai.api_key
        self.model = model or config.openai.model
        self.max_tokens = config.openai.max_tokens
        self.temperature = config.openai.temperature

        if not self.api_key:
            logger.warning("No OpenAI API key configured")
            self.client = None
        else:
            self.client = OpenAI(api_key=self.api_key)

    def is_available(self) -> bool:
        """Check if the LLM client is properly configured."""
        return self.client is not None

    def complete(self, prompt: str) -> str:
        """Make an API call and return the response text."""
        if not self.client:
            raise RuntimeError("LLM client not configured")

        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        return response.choices[0].message.content or ""
