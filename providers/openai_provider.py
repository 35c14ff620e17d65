"""
OpenAI Provider - Chat Completions over httpx
Interline Translate - Provider Support
"""

from typing import Optional

import httpx

from config.constants import BATCH_DELIMITER, OPENAI_CHAT_URL, OPENAI_DEFAULT_MODEL
from interline.language import get_language_name
from .base import (
    BaseTranslationProvider,
    ProviderType,
    TranslateFailed,
    TranslateOk,
    TranslateRequest,
    TranslateResult,
    describe_http_error,
)

from config.logging_config import get_logger
logger = get_logger(__name__)


class OpenAITranslateProvider(BaseTranslationProvider):
    """
    OpenAI GPT Provider

    Every input line is a separate phrase; the prompt asks for exactly one
    output line per input line so results can be paired back by position.
    """

    MODELS = {
        "gpt-4o": "GPT-4o",
        "gpt-4o-mini": "GPT-4o Mini (Fast)",
        "gpt-4-turbo": "GPT-4 Turbo",
    }

    def __init__(
        self,
        api_key: str,
        model: str = OPENAI_DEFAULT_MODEL,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 120.0,
        url: str = OPENAI_CHAT_URL,
    ):
        super().__init__(client=client, timeout=timeout)
        self.api_key = api_key
        self.model = model
        self.url = url

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.OPENAI

    @property
    def supported_languages(self):
        return None

    def build_prompt(self, request: TranslateRequest) -> str:
        source_name = get_language_name(request.source_lang)
        target_name = get_language_name(request.target_lang)
        line_count = len(request.text.split(BATCH_DELIMITER))
        return "\n".join([
            f"Translate each line of the user's message from {source_name} to {target_name}.",
            "Every line is an independent short phrase taken from a source document.",
            f"Return exactly {line_count} lines, one translation per input line, in the same order.",
            "Output the translations only. No numbering, no quotes, no explanations.",
        ])

    async def translate(self, request: TranslateRequest) -> TranslateResult:
        if not self.api_key:
            return TranslateFailed("OpenAI API key is not configured (set OPENAI_API_KEY)")

        logger.info(f" Calling OpenAI API: model={self.model}, text_length={len(request.text)} chars")

        headers = {"Authorization": f"Bearer {self.api_key}"}
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.build_prompt(request)},
                {"role": "user", "content": request.text}
            ],
            "temperature": 0.2,
        }

        try:
            response = await self.client.post(
                self.url,
                headers=headers,
                json=payload,
                timeout=self.timeout
            )
            response.raise_for_status()

            data = response.json()
            result = data["choices"][0]["message"]["content"].strip()
        except httpx.HTTPStatusError as e:
            error_detail = describe_http_error(e)
            logger.error(f" OpenAI API error: {error_detail}")
            return TranslateFailed(f"OpenAI translation failed: {error_detail}", e)
        except httpx.HTTPError as e:
            logger.error(f" OpenAI API exception: {type(e).__name__}: {str(e)}")
            return TranslateFailed(f"OpenAI request failed: {e}", e)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            return TranslateFailed("OpenAI returned an unexpected payload", e)

        logger.info(f" OpenAI API success: returned {len(result)} chars")
        return TranslateOk(result)
