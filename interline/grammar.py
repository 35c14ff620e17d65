#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Grammar - lexical scope classification of source documents

Turns document text into one ordered list of scope-tagged tokens per line
(Code, Comment, String, Keyword) using a small configurable rule set per
language, and resolves the full region of a comment or string from a single
position inside it.

This is not a parser: rules cover comment markers, quote delimiters and a
keyword set, which is all phrase classification needs. Malformed input never
raises; an unterminated block comment or multi-line string runs to the end
of the document.
"""

import keyword
import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from pathlib import Path
from typing import Collection, FrozenSet, List, Optional, Sequence, Tuple, Union

from .document import EXTENSION_LANGUAGES, Position, Range, TextDocument

from config.logging_config import get_logger
logger = get_logger(__name__)


class ScopeKind(str, Enum):
    """Lexical category of a token"""
    CODE = "code"
    COMMENT = "comment"
    STRING = "string"
    KEYWORD = "keyword"


COMMENT_SCOPES: FrozenSet[ScopeKind] = frozenset({ScopeKind.COMMENT})
STRING_SCOPES: FrozenSet[ScopeKind] = frozenset({ScopeKind.STRING})


@dataclass(frozen=True)
class Token:
    """A scope-tagged span of one line, columns are [start, end)"""
    text: str
    scope: ScopeKind
    start_column: int
    end_column: int
    continued: bool = False  # block scope runs on into the next line

    def covers(self, character: int) -> bool:
        return self.start_column <= character < self.end_column


# Tokens of one line, and of a whole document
LineTokens = List[Token]
DocumentTokens = List[LineTokens]


@dataclass(frozen=True)
class LexicalRules:
    """Comment, quote and keyword rules for one language"""
    name: str
    line_comments: Tuple[str, ...] = ()
    block_comments: Tuple[Tuple[str, str], ...] = ()
    quotes: Tuple[str, ...] = ()  # closed by the same delimiter or the line end
    multiline_quotes: Tuple[str, ...] = ()  # may span lines
    escape: Optional[str] = "\\"
    keywords: FrozenSet[str] = field(default_factory=frozenset)

    @cached_property
    def openers(self) -> List[Tuple[str, str, ScopeKind, bool]]:
        """(opener, closer, scope, spans_lines), longest opener first"""
        found = []
        for marker in self.line_comments:
            found.append((marker, "", ScopeKind.COMMENT, False))
        for opener, closer in self.block_comments:
            found.append((opener, closer, ScopeKind.COMMENT, True))
        for quote in self.multiline_quotes:
            found.append((quote, quote, ScopeKind.STRING, True))
        for quote in self.quotes:
            found.append((quote, quote, ScopeKind.STRING, False))
        # Stable sort keeps ''' ahead of ' and /* ahead of /
        return sorted(found, key=lambda item: -len(item[0]))


_C_KEYWORDS = frozenset("""
    auto break case catch char class const continue default delete do double
    else enum extern final float for friend goto if import inline int interface
    long namespace new operator package private protected public register
    return short signed sizeof static struct super switch template this throw
    try typedef typename union unsigned using virtual void volatile while
    func fn let mut impl trait pub mod match loop val var fun when object
    override true false null nullptr nil
""".split())

_JS_KEYWORDS = frozenset("""
    await break case catch class const continue debugger default delete do
    else enum export extends false finally for from function if import in
    instanceof let new null of return static super switch this throw true try
    typeof undefined var void while with yield async
""".split())

_TS_KEYWORDS = _JS_KEYWORDS | frozenset("""
    abstract any as boolean declare implements interface keyof namespace
    never number private protected public readonly string symbol type unknown
""".split())

_SHELL_KEYWORDS = frozenset("""
    if then else elif fi case esac for while until do done in function
    select time return export local readonly
""".split())

_SQL_KEYWORDS = frozenset(variant for word in """
    SELECT FROM WHERE AND OR NOT INSERT INTO VALUES UPDATE SET DELETE CREATE
    TABLE DROP ALTER INDEX JOIN LEFT RIGHT INNER OUTER ON AS GROUP BY ORDER
    HAVING LIMIT UNION ALL DISTINCT NULL IS IN LIKE BETWEEN CASE WHEN THEN
    ELSE END PRIMARY KEY FOREIGN REFERENCES
""".split() for variant in (word, word.lower()))


LEXICAL_RULES = {
    "plaintext": LexicalRules(name="plaintext", escape=None),
    "markdown": LexicalRules(
        name="markdown",
        block_comments=(("<!--", "-->"),),
        quotes=("`",),
        multiline_quotes=("```",),
        escape=None,
    ),
    "python": LexicalRules(
        name="python",
        line_comments=("#",),
        quotes=('"', "'"),
        multiline_quotes=('"""', "'''"),
        keywords=frozenset(keyword.kwlist),
    ),
    "javascript": LexicalRules(
        name="javascript",
        line_comments=("//",),
        block_comments=(("/*", "*/"),),
        quotes=('"', "'"),
        multiline_quotes=("`",),
        keywords=_JS_KEYWORDS,
    ),
    "typescript": LexicalRules(
        name="typescript",
        line_comments=("//",),
        block_comments=(("/*", "*/"),),
        quotes=('"', "'"),
        multiline_quotes=("`",),
        keywords=_TS_KEYWORDS,
    ),
    "c": LexicalRules(
        name="c",
        line_comments=("//",),
        block_comments=(("/*", "*/"),),
        quotes=('"', "'"),
        keywords=_C_KEYWORDS,
    ),
    "shellscript": LexicalRules(
        name="shellscript",
        line_comments=("#",),
        quotes=('"', "'"),
        keywords=_SHELL_KEYWORDS,
    ),
    "sql": LexicalRules(
        name="sql",
        line_comments=("--",),
        block_comments=(("/*", "*/"),),
        quotes=("'",),
        escape=None,
        keywords=_SQL_KEYWORDS,
    ),
    "yaml": LexicalRules(
        name="yaml",
        line_comments=("#",),
        quotes=('"', "'"),
        escape=None,
        keywords=frozenset({"true", "false", "null", "yes", "no"}),
    ),
}

# Language ids sharing a rule set
LANGUAGE_ALIASES = {
    "text": "plaintext",
    "javascriptreact": "javascript",
    "typescriptreact": "typescript",
    "cpp": "c", "csharp": "c", "java": "c", "go": "c", "rust": "c",
    "kotlin": "c", "swift": "c",
    "shell": "shellscript", "bash": "shellscript", "sh": "shellscript",
    "toml": "yaml",
}

_WORD = re.compile(r"[\w$]+")


def rules_for(language_id: Optional[str]) -> LexicalRules:
    """Rule set for a language id, plaintext when unknown"""
    name = (language_id or "plaintext").lower()
    name = LANGUAGE_ALIASES.get(name, name)
    return LEXICAL_RULES.get(name, LEXICAL_RULES["plaintext"])


def rules_for_path(path: Union[str, Path]) -> LexicalRules:
    return rules_for(EXTENSION_LANGUAGES.get(Path(path).suffix.lower()))


def _find_closer(line: str, start: int, closer: str, escape: Optional[str]) -> int:
    """Index of `closer` in line at or after start, skipping escaped chars; -1 if absent"""
    index = start
    while index < len(line):
        if escape and line[index] == escape:
            index += 2
            continue
        if line.startswith(closer, index):
            return index
        index += 1
    return -1


def _match_opener(line: str, index: int, rules: LexicalRules):
    for opener in rules.openers:
        if line.startswith(opener[0], index):
            return opener
    return None


def _tokenize_line(
    line: str,
    rules: LexicalRules,
    open_scope: Optional[Tuple[ScopeKind, str]],
) -> Tuple[LineTokens, Optional[Tuple[ScopeKind, str]]]:
    """Tokenize one line; open_scope is a block scope carried over from the previous line"""
    tokens: LineTokens = []
    length = len(line)
    index = 0

    if open_scope is not None:
        scope, closer = open_scope
        escape = rules.escape if scope is ScopeKind.STRING else None
        end = _find_closer(line, 0, closer, escape)
        if end == -1:
            tokens.append(Token(line, scope, 0, length, continued=True))
            return tokens, open_scope
        index = end + len(closer)
        tokens.append(Token(line[:index], scope, 0, index))

    while index < length:
        char = line[index]
        if char.isspace():
            index += 1
            continue

        opener = _match_opener(line, index, rules)
        if opener is not None:
            marker, closer, scope, spans_lines = opener
            if not closer:
                # Line comment
                tokens.append(Token(line[index:], scope, index, length))
                break
            escape = rules.escape if scope is ScopeKind.STRING else None
            end = _find_closer(line, index + len(marker), closer, escape)
            if end == -1:
                tokens.append(Token(line[index:], scope, index, length, continued=spans_lines))
                if spans_lines:
                    return tokens, (scope, closer)
                break
            stop = end + len(closer)
            tokens.append(Token(line[index:stop], scope, index, stop))
            index = stop
            continue

        word = _WORD.match(line, index)
        if word is not None:
            text = word.group(0)
            scope = ScopeKind.KEYWORD if text in rules.keywords else ScopeKind.CODE
            tokens.append(Token(text, scope, index, word.end()))
            index = word.end()
            continue

        # Punctuation is left uncovered
        index += 1

    return tokens, None


def parse_document_to_tokens(
    document: Union[TextDocument, str],
    rules: Optional[LexicalRules] = None,
) -> DocumentTokens:
    """
    Classify a document into per-line token lists.

    Args:
        document: TextDocument (or raw text, treated as plaintext unless
            `rules` is given).
        rules: Lexical rules; defaults to the rules for the document's
            language id.

    Returns:
        One ordered token list per document line.
    """
    if isinstance(document, str):
        document = TextDocument(document)
    elif not isinstance(document, TextDocument):
        # Host document: only get_text() is needed to split lines
        document = TextDocument(
            document.get_text(),
            uri=getattr(document, "uri", "untitled"),
            language_id=getattr(document, "language_id", "plaintext"),
        )
    if rules is None:
        rules = rules_for(getattr(document, "language_id", None))

    tokens_of_doc: DocumentTokens = []
    open_scope = None
    for line in document.lines:
        line_tokens, open_scope = _tokenize_line(line, rules, open_scope)
        tokens_of_doc.append(line_tokens)

    if open_scope is not None:
        logger.debug(f"Unterminated {open_scope[0].value} in {getattr(document, 'uri', '?')}, runs to end of document")
    return tokens_of_doc


def token_at(character: int, tokens_of_line: Optional[Sequence[Token]]) -> Optional[Token]:
    """Token covering `character` on a line, or None"""
    if not tokens_of_line:
        return None
    for token in tokens_of_line:
        if token.covers(character):
            return token
        if token.start_column > character:
            break
    return None


def _is_scope(character: int, tokens_of_line: Optional[Sequence[Token]], scope: ScopeKind) -> bool:
    token = token_at(character, tokens_of_line)
    return token is not None and token.scope is scope


def is_comment(character: int, tokens_of_line: Optional[Sequence[Token]]) -> bool:
    return _is_scope(character, tokens_of_line, ScopeKind.COMMENT)


def is_string(character: int, tokens_of_line: Optional[Sequence[Token]]) -> bool:
    return _is_scope(character, tokens_of_line, ScopeKind.STRING)


def is_keyword(character: int, tokens_of_line: Optional[Sequence[Token]]) -> bool:
    return _is_scope(character, tokens_of_line, ScopeKind.KEYWORD)


def find_scopes_range(
    position: Position,
    tokens_of_doc: DocumentTokens,
    ref_scopes: Collection[ScopeKind],
) -> Optional[Range]:
    """
    Expand a position inside a comment or string to the whole region.

    Single-line scopes resolve to the token's own span. Block scopes
    (block comments, multi-line strings) are followed backwards and forwards
    across lines through their `continued` tokens.

    Args:
        position: Position already known to sit in one of `ref_scopes`.
        tokens_of_doc: Output of parse_document_to_tokens.
        ref_scopes: Accepted scope kinds, e.g. COMMENT_SCOPES.

    Returns:
        The region's Range, or None when no token of `ref_scopes` covers
        the position.
    """
    if not 0 <= position.line < len(tokens_of_doc):
        return None
    token = token_at(position.character, tokens_of_doc[position.line])
    if token is None or token.scope not in ref_scopes:
        return None

    start_line, start_token = position.line, token
    while start_token.start_column == 0 and start_line > 0:
        previous = tokens_of_doc[start_line - 1]
        if not previous or not previous[-1].continued or previous[-1].scope is not token.scope:
            break
        start_line -= 1
        start_token = previous[-1]

    end_line, end_token = position.line, token
    while end_token.continued and end_line + 1 < len(tokens_of_doc):
        following = tokens_of_doc[end_line + 1]
        if not following or following[0].start_column != 0 or following[0].scope is not token.scope:
            break
        end_line += 1
        end_token = following[0]

    return Range(
        Position(start_line, start_token.start_column),
        Position(end_line, end_token.end_column),
    )
