"""OpenAI vendor adapter for Chat Completions."""

import logging
from typing import List, Dict, Any, Optional
from openai import AsyncOpenAI
from nexflow.infra.config import config
from nexflow.infra.errors import wrap_llm_error

logger = logging.getLogger(__name__)


class OpenAIChatClient:
    """Thin async wrapper over ``chat.completions.create``."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = api_key
        self._model = model
        self._client = None

    @property
    def model(self) -> str:
        return self._model or config.OPENAI_MODEL

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            api_key = self._api_key or config.OPENAI_API_KEY
            if not api_key:
                raise ValueError("OPENAI_API_KEY not configured")
            self._client = AsyncOpenAI(
                api_key=api_key,
                timeout=config.UPSTREAM_TIMEOUT,
                max_retries=0,
            )
        return self._client

    async def complete(
        self,
        messages: List[Dict[str, Any]],
        json_mode: bool = False,
    ) -> str:
        """
        Run one chat completion and return the first choice's content.

        Args:
            messages: Chat messages (role/content dicts)
            json_mode: Request the structured-JSON response format

        Returns:
            Message content, '' when the model returned none

        Raises:
            UpstreamError: If the completion call fails
        """
        request_params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }
        if json_mode:
            request_params["response_format"] = {"type": "json_object"}

        try:
            response_obj = await self.client.chat.completions.create(**request_params)
        except Exception as e:
            logger.error(
                f"OpenAI completion failed for {self.model}: {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise wrap_llm_error(e, "openai") from e

        if response_obj.usage:
            logger.debug(
                "OpenAI completion usage",
                extra={
                    "model": response_obj.model,
                    "prompt_tokens": response_obj.usage.prompt_tokens,
                    "completion_tokens": response_obj.usage.completion_tokens,
                },
            )
        return response_obj.choices[0].message.content or ""


openai_chat_client = OpenAIChatClient()
