"""
Cache Module - per language pair translation cache

Exports:
- TranslationCacheStore (session-wide store of pair caches)
- PairCache (phrase -> translation mapping of one language pair)
- persist_translation_cache, load_translation_cache (JSON persistence)
- CacheStats (hit/miss statistics)
"""

from .base import CacheStats
from .translation_cache import (
    CacheKey,
    PairCache,
    TranslationCacheStore,
    load_translation_cache,
    normalize_phrase,
    persist_translation_cache,
)

__all__ = [
    'CacheKey',
    'CacheStats',
    'PairCache',
    'TranslationCacheStore',
    'load_translation_cache',
    'normalize_phrase',
    'persist_translation_cache',
]
