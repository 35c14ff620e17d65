"""
Phrase extraction - lazy, restartable scan for natural-language phrases.

A phrase is two or more alphabetic words separated by spaces or tabs. It
never touches identifier characters, dots or "$", is never followed by "(",
and never crosses a line break. A phrase directly followed by an inline
annotation ("hello world [[...]]") is reported as already translated.
"""

from dataclasses import dataclass
from typing import Iterator

import regex

from config.constants import ANNOTATION_CLOSE, ANNOTATION_OPEN

_WORD = r"\p{L}(?:[\p{L}'\-]*\p{L})?"

PHRASE_PATTERN = regex.compile(
    rf"""
    (?<![\p{{L}}\p{{N}}_$.\-])
    (?P<phrase>{_WORD}(?:[\x20\t]+{_WORD})+)
    (?![\p{{L}}\p{{N}}_$(\-])
    (?P<annotation>[\x20\t]*{regex.escape(ANNOTATION_OPEN)}[^\r\n\]]*{regex.escape(ANNOTATION_CLOSE)})?
    """,
    regex.VERBOSE,
)


@dataclass(frozen=True)
class PhraseMatch:
    """One candidate phrase; match_index is its absolute offset in the text"""
    phrase: str
    match_index: int
    raw_match: str
    already_translated: bool = False

    @property
    def end_index(self) -> int:
        return self.match_index + len(self.raw_match)


class PhraseScanner(Iterator[PhraseMatch]):
    """
    Single-pass iterator over the phrases of a text.

    The cursor can be moved forward with seek() so a caller can skip a whole
    comment or string once it has been classified. Matches come out in
    increasing match_index order.
    """

    def __init__(self, text: str, pattern=PHRASE_PATTERN):
        self.text = text
        self.pattern = pattern
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def seek(self, offset: int) -> None:
        """Move the cursor to offset; moving backwards is ignored"""
        if offset > self._position:
            self._position = min(offset, len(self.text))

    def __iter__(self) -> "PhraseScanner":
        return self

    def __next__(self) -> PhraseMatch:
        if self._position >= len(self.text):
            raise StopIteration
        match = self.pattern.search(self.text, self._position)
        if match is None:
            self._position = len(self.text)
            raise StopIteration
        self._position = max(match.end(), match.start() + 1)
        return PhraseMatch(
            phrase=match.group("phrase"),
            match_index=match.start(),
            raw_match=match.group(0),
            already_translated=match.group("annotation") is not None,
        )


def extract_phrases(text: str) -> PhraseScanner:
    return PhraseScanner(text)


def annotate_phrase(phrase: str, translation: str) -> str:
    """Inline annotation recognised by PHRASE_PATTERN as already translated"""
    # The annotation body may not contain "]"
    clean = " ".join(translation.replace("]", "").split())
    return f"{phrase} {ANNOTATION_OPEN}{clean}{ANNOTATION_CLOSE}"
