"""
Document accessor - positions, ranges and a plain-text document.

The core only needs get_text / position_at / offset_at; any host document
with the same methods can be passed instead of TextDocument.
"""

from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line / character position"""
    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """Span between two positions, start <= end"""
    start: Position
    end: Position

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    def contains(self, position: Position) -> bool:
        return self.start <= position < self.end


# File extension -> language id, used by TextDocument.from_path
EXTENSION_LANGUAGES = {
    ".py": "python", ".pyi": "python",
    ".js": "javascript", ".mjs": "javascript", ".cjs": "javascript", ".jsx": "javascript",
    ".ts": "typescript", ".tsx": "typescript", ".mts": "typescript",
    ".c": "c", ".h": "c", ".cpp": "cpp", ".hpp": "cpp", ".cc": "cpp",
    ".cs": "csharp", ".java": "java", ".go": "go", ".rs": "rust",
    ".kt": "kotlin", ".swift": "swift",
    ".sh": "shellscript", ".bash": "shellscript", ".zsh": "shellscript",
    ".sql": "sql",
    ".yml": "yaml", ".yaml": "yaml", ".toml": "yaml",
    ".md": "markdown", ".markdown": "markdown",
    ".txt": "plaintext",
}


class TextDocument:
    """
    In-memory text document.

    Lines break on "\\n"; a "\\r" before it belongs to the line break, not
    to the line, so character offsets match what an editor shows.
    """

    def __init__(self, text: str, uri: str = "untitled", language_id: str = "plaintext"):
        self._text = text
        self.uri = uri
        self.language_id = language_id

        # Offsets where each line starts
        self._line_starts: List[int] = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

    @classmethod
    def from_path(cls, path: Union[str, Path], language_id: Optional[str] = None) -> "TextDocument":
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        if language_id is None:
            language_id = EXTENSION_LANGUAGES.get(path.suffix.lower(), "plaintext")
        return cls(text, uri=path.resolve().as_uri(), language_id=language_id)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    @property
    def lines(self) -> List[str]:
        return [self.line_text(i) for i in range(self.line_count)]

    def _line_end(self, line: int) -> int:
        """Offset of the first line-break character of `line` (or text end)"""
        if line + 1 < len(self._line_starts):
            end = self._line_starts[line + 1] - 1
        else:
            end = len(self._text)
        if end > self._line_starts[line] and self._text[end - 1] == "\r":
            end -= 1
        return end

    def line_text(self, line: int) -> str:
        if not 0 <= line < self.line_count:
            raise IndexError(f"Line {line} out of range (0-{self.line_count - 1})")
        return self._text[self._line_starts[line]:self._line_end(line)]

    def get_text(self, range: Optional[Range] = None) -> str:
        if range is None:
            return self._text
        return self._text[self.offset_at(range.start):self.offset_at(range.end)]

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self._text)))
        line = bisect_right(self._line_starts, offset) - 1
        start = self._line_starts[line]
        return Position(line, min(offset, self._line_end(line)) - start)

    def offset_at(self, position: Position) -> int:
        if position.line < 0:
            return 0
        if position.line >= self.line_count:
            return len(self._text)
        start = self._line_starts[position.line]
        length = self._line_end(position.line) - start
        return start + max(0, min(position.character, length))

    def __repr__(self) -> str:
        return f"<TextDocument uri={self.uri!r} language={self.language_id!r} lines={self.line_count}>"
