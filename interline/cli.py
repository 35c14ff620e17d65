#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Interline Translate CLI - translate the phrases of source files into the cache

Usage:
    interline-translate src/app.py README.md --to ja
    interline-translate notes.txt --dry-run
    interline-translate main.c --annotate
    interline-translate --list-languages
"""

import sys
import asyncio
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from config.logging_config import get_logger, set_console_level
from providers.manager import PROVIDER_REGISTRY
from .document import TextDocument
from .language import GOOGLE_SUPPORTED_LANGUAGES, language_options
from .overlay import annotate_document
from .session import TranslationSession
from .translator import collect_phrases

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="interline-translate",
        description="Translate natural-language phrases in source files and cache the results",
        epilog="""
Examples:
  %(prog)s src/app.py --to ja
  %(prog)s notes.txt --dry-run
  %(prog)s main.c --annotate --no-persist
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        'files',
        nargs='*',
        help='Files to translate'
    )

    parser.add_argument(
        '--from',
        dest='source_lang',
        help='Source language code (default: from settings, en)'
    )

    parser.add_argument(
        '--to',
        dest='target_lang',
        help='Target language code (default: from settings, zh-CN)'
    )

    parser.add_argument(
        '--provider',
        choices=sorted(t.value for t in PROVIDER_REGISTRY),
        help='Translation provider (default: from settings, google)'
    )

    parser.add_argument(
        '--language',
        help='Language id used to tokenize the files (default: from file extension)'
    )

    parser.add_argument(
        '--cache-dir',
        type=Path,
        help='Directory of the translation cache file'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='List the phrases that would be translated, do not call the provider'
    )

    parser.add_argument(
        '--annotate',
        action='store_true',
        help='Print each file with cached translations inserted inline'
    )

    parser.add_argument(
        '--no-persist',
        action='store_true',
        help='Do not write new translations to the cache file'
    )

    parser.add_argument(
        '--list-languages',
        action='store_true',
        help='List the supported target languages and exit'
    )

    parser.add_argument(
        '--show-config',
        action='store_true',
        help='Print the effective configuration'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log debug output to the console'
    )

    return parser


def cmd_list_languages() -> int:
    for label, code in language_options(GOOGLE_SUPPORTED_LANGUAGES):
        print(f"{code:<8} {label}")
    return 0


def _print_list(title: str, items: List[str]) -> None:
    print(f"   {title}: {len(items)}")
    for item in items:
        print(f"     - {item!r}")


async def run(args, settings) -> int:
    """Translate every file, returns the exit status"""
    failures = 0

    async with TranslationSession(settings) as session:
        meta = session.translation_meta(args.target_lang)

        for path in args.files:
            try:
                document = TextDocument.from_path(path, args.language)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Cannot read {path}: {e}")
                print(f"❌ Cannot read {path}: {e}", file=sys.stderr)
                failures += 1
                continue

            print(f"\n📄 {path} ({document.language_id}, {meta.source_lang} → {meta.target_lang})")

            if args.dry_run:
                cache = session.store.cache_for(meta.source_lang, meta.target_lang)
                result = collect_phrases(document, cache, session.phrase_filter)
                _print_list("Phrases to translate", result.phrases)
                _print_list("Skipped comments", result.comments)
                _print_list("Skipped strings", result.strings)
            else:
                result = await session.translate(
                    document,
                    meta.target_lang,
                    persist=not args.no_persist,
                )
                if result.ok:
                    print(f"✅ Translated {len(result.translated)} of {len(result.phrases)} new phrases")
                    for phrase, translated in result.translated.items():
                        print(f"   {phrase} → {translated}")
                else:
                    print(f"❌ {result.error}", file=sys.stderr)
                    failures += 1

            if args.annotate:
                cache = session.store.cache_for(meta.source_lang, meta.target_lang)
                print(annotate_document(document, cache))

    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_console_level(logging.DEBUG)

    if args.list_languages:
        return cmd_list_languages()

    if not args.files:
        parser.error("at least one file is required")

    from config.settings import settings

    overrides = {}
    if args.source_lang:
        overrides["source_language"] = args.source_lang
    if args.target_lang:
        overrides["default_target_language"] = args.target_lang
    if args.provider:
        overrides["provider"] = args.provider
    if args.cache_dir:
        overrides["cache_dir"] = args.cache_dir
    if overrides:
        settings = settings.model_copy(update=overrides)

    if args.show_config:
        settings.print_config()

    try:
        return asyncio.run(run(args, settings))
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
