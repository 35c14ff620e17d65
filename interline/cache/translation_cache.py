#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
TranslationCache - per language pair phrase translations

One TranslationCacheStore lives for the whole session: it is loaded from disk
at start-up, passed to every translation pass, and flushed after each
successful batch. Entries never expire; a newer translation of the same
phrase overwrites the old one.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from config.constants import CACHE_PAIR_SEPARATOR
from .base import CacheStats

from config.logging_config import get_logger
logger = get_logger(__name__)


# (source language, target language), case-sensitive
CacheKey = Tuple[str, str]


def normalize_phrase(phrase: str) -> str:
    return phrase.lower()


class PairCache:
    """Phrase -> translation mapping for one language pair"""

    def __init__(self, key: CacheKey, custom_translations: Optional[Mapping[str, str]] = None):
        self.key = key
        self._entries: Dict[str, str] = {}
        self._custom = {
            normalize_phrase(phrase): translation
            for phrase, translation in (custom_translations or {}).items()
        }
        self._stats = CacheStats()

    def has(self, phrase: str) -> bool:
        normalized = normalize_phrase(phrase)
        found = normalized in self._custom or normalized in self._entries
        if found:
            self._stats.hits += 1
        else:
            self._stats.misses += 1
        return found

    def get(self, phrase: str) -> Optional[str]:
        normalized = normalize_phrase(phrase)
        if normalized in self._custom:
            return self._custom[normalized]
        return self._entries.get(normalized)

    def set(self, phrase: str, translation: str) -> None:
        self._entries[normalize_phrase(phrase)] = translation

    def items(self) -> Iterator[Tuple[str, str]]:
        """Learned entries only; custom translations are not included"""
        return iter(self._entries.items())

    def stats(self) -> CacheStats:
        self._stats.size = len(self._entries)
        return self._stats

    def __contains__(self, phrase: str) -> bool:
        normalized = normalize_phrase(phrase)
        return normalized in self._custom or normalized in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<PairCache {self.key[0]}->{self.key[1]} entries={len(self._entries)}>"


class TranslationCacheStore:
    """
    All pair caches of a session.

    Args:
        path: JSON file used by persist_translation_cache; None keeps the
            store in memory only.
        custom_translations: User-provided translations, applied to every
            pair and never written to disk.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        custom_translations: Optional[Mapping[str, str]] = None,
    ):
        self.path = Path(path) if path is not None else None
        self.custom_translations = dict(custom_translations or {})
        self._caches: Dict[CacheKey, PairCache] = {}

    def cache_for(self, source_lang: str, target_lang: str) -> PairCache:
        key = (source_lang, target_lang)
        cache = self._caches.get(key)
        if cache is None:
            cache = PairCache(key, self.custom_translations)
            self._caches[key] = cache
        return cache

    # Name used by hosts that think in "get or create"
    get_or_create_cache = cache_for

    def pairs(self) -> Iterator[CacheKey]:
        return iter(list(self._caches))

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {
            f"{source}{CACHE_PAIR_SEPARATOR}{target}": dict(cache.items())
            for (source, target), cache in self._caches.items()
        }

    def update_from_dict(self, data: Mapping[str, Mapping[str, str]]) -> int:
        """Merge persisted entries into the store, returns entries loaded"""
        loaded = 0
        for pair, entries in data.items():
            source, sep, target = pair.partition(CACHE_PAIR_SEPARATOR)
            if not sep or not isinstance(entries, Mapping):
                logger.warning(f"Ignoring malformed cache pair {pair!r}")
                continue
            cache = self.cache_for(source, target)
            for phrase, translation in entries.items():
                if isinstance(phrase, str) and isinstance(translation, str) and translation:
                    cache.set(phrase, translation)
                    loaded += 1
        return loaded

    def __len__(self) -> int:
        return sum(len(cache) for cache in self._caches.values())


def persist_translation_cache(store: TranslationCacheStore) -> bool:
    """Write every pair cache to store.path; failures are logged, not raised"""
    if store.path is None:
        return False
    tmp_path = None
    try:
        store.path.parent.mkdir(parents=True, exist_ok=True)
        # Write next to the target, then swap it in so a failed write keeps the old file
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=store.path.parent,
            prefix=f".{store.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            json.dump(store.to_dict(), f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, store.path)
        logger.debug(f"Saved {len(store)} cached translations to {store.path}")
        return True
    except OSError as e:
        logger.warning(f"Cannot save translation cache: {e}")
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        return False


def load_translation_cache(
    path: Union[str, Path],
    custom_translations: Optional[Mapping[str, str]] = None,
) -> TranslationCacheStore:
    """Create a store backed by `path`, seeded with what is on disk"""
    store = TranslationCacheStore(path, custom_translations)
    if not store.path.exists():
        return store

    try:
        data = json.loads(store.path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Cannot load translation cache {store.path}: {e}")
        return store

    if not isinstance(data, dict):
        logger.warning(f"Translation cache {store.path} is not a JSON object, ignoring")
        return store

    loaded = store.update_from_dict(data)
    logger.info(f"Loaded {loaded} cached translations")
    return store
