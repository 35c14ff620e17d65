"""
Phrase exclusion - too short, already known, or not words at all.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import FrozenSet, Iterable, Optional, Tuple

from wordfreq import top_n_list

_NON_WORD = re.compile(r"[^\w._-]", re.ASCII)
_ALPHA = re.compile(r"[a-zA-Z]")


def normalize_known_word(word: str) -> str:
    """Lowercase and drop everything but ASCII word chars, '.', '_' and '-'"""
    return _NON_WORD.sub("", word.lower())


@lru_cache(maxsize=8)
def popular_words(count: int, lang: str = "en") -> Tuple[str, ...]:
    """The `count` most frequent words of a language"""
    if count <= 0:
        return ()
    return tuple(top_n_list(lang, count))


@dataclass(frozen=True)
class PhraseFilter:
    """Exclusion rules for candidate phrases"""
    min_word_length: int = 4
    known_words: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        min_word_length: int,
        known_words: Iterable[str] = (),
        popular_word_count: int = 0,
        lang: str = "en",
    ) -> "PhraseFilter":
        words = {normalize_known_word(word) for word in known_words}
        words.update(normalize_known_word(word) for word in popular_words(popular_word_count, lang))
        words.discard("")
        return cls(min_word_length=min_word_length, known_words=frozenset(words))

    @classmethod
    def from_settings(cls, settings) -> "PhraseFilter":
        return cls.build(
            min_word_length=settings.min_word_length,
            known_words=settings.known_words,
            popular_word_count=settings.known_popular_word_count,
            lang=settings.source_language,
        )

    def is_known_word(self, word: str) -> bool:
        return normalize_known_word(word) in self.known_words

    def is_known_phrase(self, phrase: str) -> bool:
        """Known as a whole, or every word of it is known"""
        if not self.known_words:
            return False
        if self.is_known_word(phrase):
            return True
        words = phrase.split()
        return len(words) > 1 and all(self.is_known_word(word) for word in words)

    def is_excluded(self, phrase: str) -> bool:
        if len(phrase) < self.min_word_length:
            return True
        # Skip phrase that contains no alphabet characters
        if not _ALPHA.search(phrase):
            return True
        return self.is_known_phrase(phrase)


def is_phrase_excluded(phrase: str, phrase_filter: Optional[PhraseFilter] = None) -> bool:
    """Exclusion check against `phrase_filter`, or the one built from global settings"""
    if phrase_filter is None:
        from config.settings import settings
        phrase_filter = PhraseFilter.from_settings(settings)
    return phrase_filter.is_excluded(phrase)
