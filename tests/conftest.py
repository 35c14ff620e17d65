"""
Pytest configuration and shared fixtures for Interline Translate tests.
"""
import sys
import pytest
from pathlib import Path
from typing import Callable, List, Optional, Union

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Settings
from interline.cache import TranslationCacheStore
from interline.document import TextDocument
from interline.exclusion import PhraseFilter
from providers.base import (
    BaseTranslationProvider,
    ProviderType,
    TranslateFailed,
    TranslateOk,
    TranslateRequest,
    TranslateResult,
)


# ============================================================================
# Fake provider
# ============================================================================

class FakeProvider(BaseTranslationProvider):
    """
    In-memory provider.

    `reply` is either a fixed TranslateResult or a callable turning the
    request into one. The default upper-cases every line.
    """

    def __init__(self, reply: Optional[Union[TranslateResult, Callable[[TranslateRequest], TranslateResult]]] = None):
        super().__init__()
        self.reply = reply
        self.requests: List[TranslateRequest] = []
        self.closed = False

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GOOGLE

    @property
    def supported_languages(self):
        return None

    async def translate(self, request: TranslateRequest) -> TranslateResult:
        self.requests.append(request)
        if self.reply is None:
            return TranslateOk(request.text.upper())
        if callable(self.reply):
            return self.reply(request)
        return self.reply

    async def aclose(self) -> None:
        self.closed = True


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def provider_factory():
    """The FakeProvider class, for tests that need custom replies"""
    return FakeProvider


@pytest.fixture
def failing_provider() -> FakeProvider:
    return FakeProvider(TranslateFailed("Service unavailable", RuntimeError("boom")))


@pytest.fixture
def phrase_filter() -> PhraseFilter:
    """Default exclusion rules, no known words"""
    return PhraseFilter(min_word_length=4)


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "translation_cache.json"


@pytest.fixture
def store(cache_path: Path) -> TranslationCacheStore:
    return TranslationCacheStore(cache_path)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings isolated from the environment and the project .env"""
    return Settings(
        _env_file=None,
        source_language="en",
        default_target_language="zh-CN",
        provider="google",
        min_word_length=4,
        known_words=[],
        known_popular_word_count=0,
        custom_translations={},
        cache_dir=tmp_path / "cache",
    )


@pytest.fixture
def make_document() -> Callable[..., TextDocument]:
    def _make(text: str, language_id: str = "plaintext", uri: str = "file:///test") -> TextDocument:
        return TextDocument(text, uri=uri, language_id=language_id)
    return _make
