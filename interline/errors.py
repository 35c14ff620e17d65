"""
Errors surfaced to callers of the translation core.
"""

from typing import Optional


class TranslationError(Exception):
    """A translation pass failed; `cause` is the provider's original error, if any"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
            self.__traceback__ = cause.__traceback__

    def __repr__(self) -> str:
        return f"TranslationError({self.message!r})"
