"""
Translation Provider Registry
Interline Translate - Provider Support

Maps provider names from settings to provider classes.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Type

import httpx

from .base import BaseTranslationProvider, ProviderType
from .google_provider import GoogleTranslateProvider
from .openai_provider import OpenAITranslateProvider


@dataclass(frozen=True)
class ProviderInfo:
    """Information about a translation provider"""
    type: ProviderType
    name: str
    description: str
    env_key: Optional[str] = None  # Environment variable holding the API key


# Registry of all available providers
PROVIDER_REGISTRY: Dict[ProviderType, Type[BaseTranslationProvider]] = {
    ProviderType.GOOGLE: GoogleTranslateProvider,
    ProviderType.OPENAI: OpenAITranslateProvider,
}

# Provider information
PROVIDER_INFO: Dict[ProviderType, ProviderInfo] = {
    ProviderType.GOOGLE: ProviderInfo(
        type=ProviderType.GOOGLE,
        name="Google Translate",
        description="Powered by Google Translate",
    ),
    ProviderType.OPENAI: ProviderInfo(
        type=ProviderType.OPENAI,
        name="OpenAI GPT",
        description="Phrase translation with GPT models",
        env_key="OPENAI_API_KEY",
    ),
}


def create_provider(
    name: str,
    settings=None,
    client: Optional[httpx.AsyncClient] = None,
) -> BaseTranslationProvider:
    """
    Build the provider called `name`, configured from settings.

    Raises:
        ValueError: If no provider has that name.
    """
    try:
        provider_type = ProviderType(name.lower())
    except ValueError:
        available = ", ".join(t.value for t in PROVIDER_REGISTRY)
        raise ValueError(f"Unknown provider: {name}. Available: {available}") from None

    if settings is None:
        from config.settings import settings

    if provider_type is ProviderType.OPENAI:
        return OpenAITranslateProvider(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            client=client,
            timeout=max(settings.request_timeout, 60.0),
        )
    return GoogleTranslateProvider(
        proxy=settings.google_proxy,
        cors_proxy=settings.cors_proxy,
        client=client,
        timeout=settings.request_timeout,
    )
