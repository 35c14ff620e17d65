"""
Google Translate Provider
Interline Translate - Provider Support

Uses the public translate_a/single endpoint. `proxy` replaces the host
(a mirror of translate.googleapis.com); `cors_proxy` is prefixed to the full
URL, which is what browser-hosted editors need.
"""

from typing import FrozenSet, Optional

import httpx

from config.constants import GOOGLE_TRANSLATE_HOST, GOOGLE_TRANSLATE_PATH
from interline.language import GOOGLE_SUPPORTED_LANGUAGES
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


class GoogleTranslateProvider(BaseTranslationProvider):
    """Google Translate (no API key)"""

    def __init__(
        self,
        proxy: str = "",
        cors_proxy: str = "",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        super().__init__(client=client, timeout=timeout)
        self.proxy = proxy.strip().rstrip("/")
        self.cors_proxy = cors_proxy.strip()

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GOOGLE

    @property
    def supported_languages(self) -> FrozenSet[str]:
        return GOOGLE_SUPPORTED_LANGUAGES

    @property
    def endpoint(self) -> str:
        host = self.proxy or GOOGLE_TRANSLATE_HOST
        if "://" not in host:
            host = f"https://{host}"
        return f"{self.cors_proxy}{host}{GOOGLE_TRANSLATE_PATH}"

    async def translate(self, request: TranslateRequest) -> TranslateResult:
        if not self.supports(request.target_lang):
            return TranslateFailed(f"Unsupported target language: {request.target_lang}")

        params = {
            "client": "gtx",
            "sl": request.source_lang or "auto",
            "tl": request.target_lang,
            "dt": "t",
        }
        logger.info(f" Calling Google Translate: {request.source_lang}->{request.target_lang}, text_length={len(request.text)} chars")

        try:
            response = await self.client.post(
                self.endpoint,
                params=params,
                data={"q": request.text},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            message = describe_http_error(e)
            logger.error(f" Google Translate error: {message}")
            return TranslateFailed(f"Google Translate failed: {message}", e)
        except httpx.HTTPError as e:
            logger.error(f" Google Translate exception: {type(e).__name__}: {e}")
            return TranslateFailed(f"Google Translate request failed: {e}", e)
        except ValueError as e:
            return TranslateFailed("Google Translate returned an invalid response", e)

        try:
            text = "".join(
                segment[0]
                for segment in data[0]
                if isinstance(segment, list) and segment and isinstance(segment[0], str)
            )
        except (IndexError, KeyError, TypeError) as e:
            return TranslateFailed("Google Translate returned an unexpected payload", e)

        logger.info(f" Google Translate success: returned {len(text)} chars")
        return TranslateOk(text)
