#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Overlay - render cached translations next to the phrases they belong to.

Only Code-scope phrases are annotated, the same ones a translation pass
queues. The output uses the `phrase [[translation]]` form, which the phrase
extractor recognises as already translated.
"""

from typing import List, Optional, Tuple

from .cache import PairCache
from .document import Position
from .extract import annotate_phrase
from .grammar import LexicalRules, parse_document_to_tokens
from .translator import DocumentScanner

from config.logging_config import get_logger
logger = get_logger(__name__)


def _code_phrases(document, rules: Optional[LexicalRules]):
    scanner = DocumentScanner(document, parse_document_to_tokens(document, rules))
    return scanner.code_phrases(lambda match: match.already_translated)


def phrase_table(
    document,
    cache: PairCache,
    rules: Optional[LexicalRules] = None,
) -> List[Tuple[Position, str, Optional[str]]]:
    """(position, phrase, cached translation or None) for each code phrase"""
    return [
        (document.position_at(match.match_index), match.phrase, cache.get(match.phrase))
        for match in _code_phrases(document, rules)
    ]


def annotate_document(document, cache: PairCache, rules: Optional[LexicalRules] = None) -> str:
    """Return the document text with cached translations inserted inline"""
    text = document.get_text()
    parts = []
    last = 0
    annotated = 0

    for match in _code_phrases(document, rules):
        translation = cache.get(match.phrase)
        if not translation:
            continue
        parts.append(text[last:match.match_index])
        parts.append(annotate_phrase(match.phrase, translation))
        last = match.end_index
        annotated += 1

    parts.append(text[last:])
    logger.debug(f"Annotated {annotated} phrases in {getattr(document, 'uri', 'document')}")
    return "".join(parts)
