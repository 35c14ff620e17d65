"""
Interline Translate - translate natural-language phrases found in source code

Core modules:
- document: positions, ranges and an in-memory text document
- grammar: scope-tagged tokens (code, comment, string, keyword)
- extract: phrase scanner
- exclusion: short / non-alphabetic / known-word phrase filter
- cache: per language pair translation cache with JSON persistence
- translator: document translation pass
- overlay: inline `[[translation]]` annotations

TranslationSession lives in interline.session.
"""

from .document import Position, Range, TextDocument
from .errors import TranslationError
from .exclusion import PhraseFilter, is_phrase_excluded
from .extract import PhraseMatch, extract_phrases
from .grammar import find_scopes_range, parse_document_to_tokens
from .translator import DocumentTranslation, collect_phrases, translate_document

__all__ = [
    'DocumentTranslation',
    'PhraseFilter',
    'PhraseMatch',
    'Position',
    'Range',
    'TextDocument',
    'TranslationError',
    'collect_phrases',
    'extract_phrases',
    'find_scopes_range',
    'is_phrase_excluded',
    'parse_document_to_tokens',
    'translate_document',
]

__version__ = "1.0.0"
