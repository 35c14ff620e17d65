"""
Translation Providers Package
Interline Translate - Provider Support

Supports:
- Google Translate (default, no API key)
- OpenAI GPT (gpt-4o-mini, gpt-4o, ...)

Usage:
    from providers import create_provider, TranslateRequest

    provider = create_provider("google")
    result = await provider.translate(
        TranslateRequest(text="Hello world", source_lang="en", target_lang="zh-CN")
    )
    if result.ok:
        print(result.text)
    else:
        print(result.message)
"""

from .base import (
    BaseTranslationProvider,
    ProviderType,
    TranslateFailed,
    TranslateOk,
    TranslateRequest,
    TranslateResult,
)

from .google_provider import GoogleTranslateProvider
from .openai_provider import OpenAITranslateProvider

from .manager import (
    PROVIDER_INFO,
    PROVIDER_REGISTRY,
    ProviderInfo,
    create_provider,
)

__all__ = [
    # Base classes
    "BaseTranslationProvider",
    "ProviderType",
    "TranslateFailed",
    "TranslateOk",
    "TranslateRequest",
    "TranslateResult",

    # Providers
    "GoogleTranslateProvider",
    "OpenAITranslateProvider",

    # Registry
    "PROVIDER_INFO",
    "PROVIDER_REGISTRY",
    "ProviderInfo",
    "create_provider",
]

__version__ = "1.0.0"
