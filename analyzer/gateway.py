import logging
from typing import Dict, List, Optional

import anthropic
from django.conf import settings

from .exceptions import GenerationError

logger = logging.getLogger(__name__)

ANALYSIS_MAX_TOKENS = 4096
CHAT_MAX_TOKENS = 1024


class ModelGateway:
    """Thin wrapper around the hosted text-generation endpoint.

    A call either returns the text of the reply or raises GenerationError.
    There is no retry here; callers decide what a failed call means.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.AI_API_KEY
        self.model = model or settings.AI_MODEL
        if not self.api_key:
            logger.warning("AI_API_KEY is not set. AI features will not work.")

    def _client(self) -> anthropic.Anthropic:
        if not self.api_key:
            logger.error("Cannot call the model: AI_API_KEY is not set")
            raise GenerationError()
        try:
            return anthropic.Anthropic(api_key=self.api_key, max_retries=0)
        except Exception as e:
            logger.error(f"Failed to initialize Anthropic client: {e}")
            raise GenerationError() from e

    def generate(
        self,
        messages: List[Dict[str, str]],
        system: Optional[str] = None,
        max_tokens: int = CHAT_MAX_TOKENS,
    ) -> str:
        kwargs = {
            'model': self.model,
            'max_tokens': max_tokens,
            'messages': messages,
        }
        if system:
            kwargs['system'] = system

        logger.info(f"Calling {self.model} with {len(messages)} message(s), max_tokens={max_tokens}")
        client = self._client()
        try:
            response = client.messages.create(**kwargs)
        except Exception as e:
            logger.error(f"Generation request failed: {e}")
            raise GenerationError() from e

        return "".join(block.text for block in response.content if block.type == 'text')
