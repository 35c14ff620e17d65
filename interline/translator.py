#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Document Translation Orchestrator for Interline Translate.

Turns a raw document into one deduplicated batch of phrases, sends it to the
translation provider and folds the results back into the pair cache.

Translation flow:
1. Tokenize the document into scope-tagged tokens
2. Stream phrase matches over the full text
3. Drop annotated, excluded, already queued and cached phrases
4. Classify the rest: comments and strings are skipped as a whole region,
   keywords one occurrence at a time, code phrases are queued
5. Translate the batch in one provider call (phrases joined by newlines)
6. Pair results back by position, update and persist the cache

Usage:
    from interline.translator import translate_document

    result = await translate_document(
        document, "en", "zh-CN", store=store, provider=provider
    )
    if not result.ok:
        print(result.error)
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional

from config.constants import BATCH_DELIMITER
from providers.base import BaseTranslationProvider, TranslateRequest
from .cache import PairCache, TranslationCacheStore, normalize_phrase, persist_translation_cache
from .errors import TranslationError
from .exclusion import PhraseFilter
from .extract import PhraseMatch, PhraseScanner, extract_phrases
from .grammar import (
    COMMENT_SCOPES,
    STRING_SCOPES,
    DocumentTokens,
    LexicalRules,
    find_scopes_range,
    is_comment,
    is_keyword,
    is_string,
    parse_document_to_tokens,
)

from config.logging_config import get_logger
logger = get_logger(__name__)


@dataclass
class DocumentTranslation:
    """Outcome of one translation pass"""
    phrases: List[str] = field(default_factory=list)  # queued batch, document order
    comments: List[str] = field(default_factory=list)  # skipped comment snippets
    strings: List[str] = field(default_factory=list)  # skipped string snippets
    keywords: List[str] = field(default_factory=list)  # phrases starting on a keyword
    translated: Dict[str, str] = field(default_factory=dict)
    error: Optional[TranslationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DocumentScanner:
    """
    Classification loop shared by translation and annotation.

    code_phrases() yields the phrase matches that sit in plain code, in
    document order. Comment and string regions are recorded in `comments` /
    `strings` and skipped as a whole by moving the scanner past them.
    """

    def __init__(self, document, tokens: DocumentTokens):
        self.document = document
        self.tokens = tokens
        self.comments: List[str] = []
        self.strings: List[str] = []
        self.keywords: List[str] = []

    def _line_tokens(self, line: int):
        return self.tokens[line] if 0 <= line < len(self.tokens) else None

    def _skip_scope(self, scanner: PhraseScanner, match: PhraseMatch, position, ref_scopes, bucket: List[str]) -> None:
        scopes_range = find_scopes_range(position, self.tokens, ref_scopes)
        if scopes_range is None:
            # Only this occurrence is dropped, the cursor stays put
            logger.debug(f"No scope range for {match.phrase!r} at {position}")
            return
        bucket.append(self.document.get_text(scopes_range))
        scanner.seek(self.document.offset_at(scopes_range.end))

    def code_phrases(self, should_skip: Optional[Callable[[PhraseMatch], bool]] = None) -> Iterator[PhraseMatch]:
        scanner = extract_phrases(self.document.get_text())
        for match in scanner:
            if should_skip is not None and should_skip(match):
                continue

            position = self.document.position_at(match.match_index)
            line_tokens = self._line_tokens(position.line)

            if is_comment(position.character, line_tokens):
                self._skip_scope(scanner, match, position, COMMENT_SCOPES, self.comments)
                continue

            if is_string(position.character, line_tokens):
                self._skip_scope(scanner, match, position, STRING_SCOPES, self.strings)
                continue

            if is_keyword(position.character, line_tokens):
                self.keywords.append(match.phrase)
                continue

            yield match


def collect_phrases(
    document,
    cache: PairCache,
    phrase_filter: PhraseFilter,
    rules: Optional[LexicalRules] = None,
) -> DocumentTranslation:
    """Build the deduplicated batch of untranslated code phrases, no provider call"""
    tokens = parse_document_to_tokens(document, rules)

    queued: List[str] = []
    seen = set()

    def should_skip(match: PhraseMatch) -> bool:
        if match.already_translated:
            return True
        if phrase_filter.is_excluded(match.phrase):
            return True
        # Deduplicate
        if normalize_phrase(match.phrase) in seen:
            return True
        return cache.has(match.phrase)

    scan = DocumentScanner(document, tokens)
    for match in scan.code_phrases(should_skip):
        queued.append(match.phrase)
        seen.add(normalize_phrase(match.phrase))

    logger.debug(f"phrasesFromDoc: {queued}")
    logger.debug(f"skip comments: {scan.comments}")
    logger.debug(f"skip strings: {scan.strings}")

    return DocumentTranslation(
        phrases=queued,
        comments=scan.comments,
        strings=scan.strings,
        keywords=scan.keywords,
    )


async def translate_document(
    document,
    source_lang: str,
    target_lang: str,
    *,
    store: TranslationCacheStore,
    provider: BaseTranslationProvider,
    phrase_filter: Optional[PhraseFilter] = None,
    rules: Optional[LexicalRules] = None,
    notify: Optional[Callable[[str], None]] = None,
    persist: bool = True,
) -> DocumentTranslation:
    """
    Translate the untranslated code phrases of a document into the cache.

    Args:
        document: TextDocument or any object with get_text(), position_at()
            and offset_at().
        source_lang: Source language code (e.g. 'en').
        target_lang: Target language code (e.g. 'zh-CN').
        store: Session cache store; the (source_lang, target_lang) pair
            cache is read and updated.
        provider: Translation provider for the batch call.
        phrase_filter: Exclusion rules; defaults to the global settings.
        rules: Lexical rules; defaults to the document's language rules.
        notify: Called with the provider's message when translation fails,
            e.g. to show an error in the host UI.
        persist: Write the store to disk after a successful batch.

    Returns:
        DocumentTranslation with the queued batch, the skipped buckets, the
        new translations and, on provider failure, the error. Nothing is
        written to the cache unless the provider call succeeds.
    """
    if phrase_filter is None:
        from config.settings import settings
        phrase_filter = PhraseFilter.from_settings(settings)

    cache = store.cache_for(source_lang, target_lang)
    result = collect_phrases(document, cache, phrase_filter, rules)
    queued = result.phrases

    if not queued:
        return result

    response = await provider.translate(TranslateRequest(
        text=BATCH_DELIMITER.join(queued),
        source_lang=source_lang,
        target_lang=target_lang,
    ))

    if not response.ok:
        result.error = TranslationError(response.message, response.original_error)
        logger.error(f" Translation of {getattr(document, 'uri', 'document')} failed: {response.message}")
        if notify is not None:
            notify(response.message)
        return result

    translated_phrases = response.text.split(BATCH_DELIMITER)
    if len(translated_phrases) < len(queued):
        logger.warning(f" Provider returned {len(translated_phrases)} of {len(queued)} phrases, caching the returned prefix")

    # zip stops at the shorter list, unmatched phrases stay uncached
    for phrase, translated in zip(queued, translated_phrases):
        translated = translated.strip()
        if translated:
            cache.set(phrase, translated)
            result.translated[phrase] = translated

    logger.info(f" Translated {len(result.translated)}/{len(queued)} phrases ({source_lang}->{target_lang})")

    if persist:
        persist_translation_cache(store)

    return result
