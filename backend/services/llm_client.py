import logging
from typing import Optional

import anthropic

from config import Config
from services.errors import UpstreamError

logger = logging.getLogger(__name__)


class LLMClient:
    """Explicitly constructed text-completion client used by every model-backed service"""

    def __init__(self, api_key: Optional[str], model: str, timeout: float = 60,
                 max_tokens: int = 4000, temperature: float = 0.3):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature

        if self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key, timeout=self.timeout)
        else:
            self.client = None

    @classmethod
    def from_config(cls) -> 'LLMClient':
        return cls(
            api_key=Config.ANTHROPIC_API_KEY,
            model=Config.ANTHROPIC_MODEL,
            timeout=Config.LLM_TIMEOUT,
            max_tokens=Config.ANTHROPIC_MAX_TOKENS,
            temperature=Config.ANTHROPIC_TEMPERATURE
        )

    def is_configured(self) -> bool:
        """Check if the client has credentials"""
        return self.client is not None

    def complete(self, system: str, user: str, max_tokens: int = None) -> str:
        """Send one system + user exchange and return the text of the reply"""
        if not self.client:
            raise UpstreamError("AI analysis not configured. ANTHROPIC_API_KEY is missing.")

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens or self.max_tokens,
                temperature=self.temperature,
                system=system,
                messages=[
                    {"role": "user", "content": user}
                ]
            )
        except anthropic.RateLimitError:
            raise UpstreamError("Rate limit exceeded. Please try again later.", upstream_status=429)
        except anthropic.AuthenticationError:
            raise UpstreamError("AI service authentication failed. Check API key configuration.",
                                upstream_status=401)
        except anthropic.APIError as e:
            raise UpstreamError(f"AI service error: {str(e)}")

        logger.debug("Model %s used %s input / %s output tokens", self.model,
                     response.usage.input_tokens, response.usage.output_tokens)
        return "".join(block.text for block in response.content if getattr(block, 'type', 'text') == 'text')
