#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management

Values come from the environment (``INTERLINE_`` prefix) or a ``.env`` file
at the project root. The core treats them as read-only inputs.
"""

from pathlib import Path
from typing import Dict, List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_MIN_WORD_LENGTH,
    DEFAULT_PROVIDER,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    OPENAI_DEFAULT_MODEL,
    REQUEST_TIMEOUT_SECONDS,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="INTERLINE_",
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ========== Languages ==========
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    default_target_language: str = DEFAULT_TARGET_LANGUAGE

    # ========== Provider ==========
    provider: str = DEFAULT_PROVIDER  # google | openai
    google_proxy: str = ""  # host that mirrors translate.googleapis.com
    cors_proxy: str = ""  # URL prefix, e.g. https://cors-anywhere.herokuapp.com/
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("INTERLINE_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    openai_model: str = OPENAI_DEFAULT_MODEL
    request_timeout: float = REQUEST_TIMEOUT_SECONDS

    # ========== Phrase filtering ==========
    min_word_length: int = DEFAULT_MIN_WORD_LENGTH
    known_words: List[str] = []
    known_popular_word_count: int = 0
    custom_translations: Dict[str, str] = {}

    # ========== Directories ==========
    cache_dir: Path = BASE_DIR / "data" / "cache"

    @field_validator("min_word_length", "known_popular_word_count")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be >= 0")
        return value

    def get_api_key(self) -> str:
        """Get API key for the configured provider ('' when none is needed)"""
        if self.provider == "openai":
            if not self.openai_api_key:
                raise ValueError("OPENAI_API_KEY not set in .env")
            return self.openai_api_key
        return ""

    def print_config(self):
        """Print configuration summary"""
        print("\n" + "=" * 70)
        print("CONFIGURATION")
        print("=" * 70)
        print(f"Provider:          {self.provider}")
        print(f"Source language:   {self.source_language}")
        print(f"Target language:   {self.default_target_language}")
        print(f"Min word length:   {self.min_word_length}")
        print(f"Known words:       {len(self.known_words)} (+{self.known_popular_word_count} popular)")
        print(f"Cache directory:   {self.cache_dir}")
        print("=" * 70 + "\n")


# Global settings instance
settings = Settings()
