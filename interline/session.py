#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
TranslationSession - long-lived state shared by translation passes

Holds the settings, the provider and the cache store for the lifetime of a
host (editor, CLI run). Passes over the same document URI are serialised;
passes over different documents run independently.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional

from config.constants import CACHE_FILE_NAME
from providers.base import BaseTranslationProvider
from providers.manager import create_provider
from .cache import TranslationCacheStore, load_translation_cache
from .exclusion import PhraseFilter
from .translator import DocumentTranslation, translate_document

from config.logging_config import get_logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class TranslationMeta:
    """Language pair used for a translation pass"""
    source_lang: str
    target_lang: str


class TranslationSession:
    """
    Translation session.

    Args:
        settings: Settings instance (defaults to the global settings).
        provider: Translation provider (defaults to settings.provider).
        store: Cache store (defaults to the JSON file in settings.cache_dir).
    """

    def __init__(
        self,
        settings=None,
        provider: Optional[BaseTranslationProvider] = None,
        store: Optional[TranslationCacheStore] = None,
    ):
        if settings is None:
            from config.settings import settings
        self.settings = settings

        self.provider = provider or create_provider(settings.provider, settings)
        if store is None:
            store = load_translation_cache(
                settings.cache_dir / CACHE_FILE_NAME,
                custom_translations=settings.custom_translations,
            )
        self.store = store
        self.phrase_filter = PhraseFilter.from_settings(settings)

        # key -> [lock, passes holding or waiting on it]
        self._locks: Dict[Any, List[Any]] = {}

        logger.info(f"Translation session ready: provider={self.provider.name}, cached={len(self.store)}")

    def translation_meta(self, target_lang: Optional[str] = None) -> TranslationMeta:
        return TranslationMeta(
            source_lang=self.settings.source_language or "en",
            target_lang=target_lang or self.settings.default_target_language or "zh-CN",
        )

    @asynccontextmanager
    async def _document_lock(self, key) -> AsyncIterator[None]:
        entry = self._locks.get(key)
        if entry is None:
            entry = self._locks[key] = [asyncio.Lock(), 0]
        entry[1] += 1
        try:
            async with entry[0]:
                yield
        finally:
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    async def translate(
        self,
        document,
        target_lang: Optional[str] = None,
        *,
        notify=None,
        persist: bool = True,
    ) -> DocumentTranslation:
        meta = self.translation_meta(target_lang)
        # Documents without a URI are locked on the object itself
        key = getattr(document, "uri", None) or document

        async with self._document_lock(key):
            return await translate_document(
                document,
                meta.source_lang,
                meta.target_lang,
                store=self.store,
                provider=self.provider,
                phrase_filter=self.phrase_filter,
                notify=notify,
                persist=persist,
            )

    async def aclose(self) -> None:
        await self.provider.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
