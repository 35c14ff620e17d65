"""
Base Translation Provider - Abstract Interface
Interline Translate - Provider Support
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Union

import httpx


class ProviderType(Enum):
    """Supported translation providers"""
    GOOGLE = "google"
    OPENAI = "openai"


@dataclass(frozen=True)
class TranslateRequest:
    """One provider call; text may hold several newline-separated phrases"""
    text: str
    source_lang: str
    target_lang: str


@dataclass(frozen=True)
class TranslateOk:
    """Successful translation"""
    text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class TranslateFailed:
    """Failed translation (network, auth, rate limit, unsupported language...)"""
    message: str
    original_error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return False


TranslateResult = Union[TranslateOk, TranslateFailed]


class BaseTranslationProvider(ABC):
    """
    Abstract base class for translation providers.

    Providers never raise for translation failures; they return
    TranslateFailed so the caller decides what to surface. Retrying is the
    caller's business.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    @abstractmethod
    def provider_type(self) -> ProviderType:
        """Return the provider type"""
        pass

    @property
    @abstractmethod
    def supported_languages(self) -> Optional[FrozenSet[str]]:
        """Target languages the provider accepts, None when it accepts any"""
        pass

    @property
    def name(self) -> str:
        return self.provider_type.value

    def supports(self, lang: str) -> bool:
        languages = self.supported_languages
        return languages is None or lang in languages

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    @abstractmethod
    async def translate(self, request: TranslateRequest) -> TranslateResult:
        """
        Translate request.text from request.source_lang to request.target_lang.

        Returns:
            TranslateOk with the translated text, or TranslateFailed.
        """
        pass

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


def describe_http_error(error: httpx.HTTPStatusError) -> str:
    """Human-readable detail of an HTTP error response"""
    detail = f"HTTP {error.response.status_code}"
    try:
        body = error.response.json()
    except ValueError:
        return f"{detail}: {error.response.text[:200]}"
    if isinstance(body, dict):
        message = body.get("error", {})
        if isinstance(message, dict):
            message = message.get("message", str(body))
        return f"{detail}: {message}"
    return f"{detail}: {str(body)[:200]}"
