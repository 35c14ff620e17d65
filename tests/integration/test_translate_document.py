#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Integration Tests for the document translation pass

Tests cover:
- Comment / string / keyword classification and queuing
- Batch request, positional pairing and partial responses
- Provider failures leave the cache untouched
- Idempotence across passes
- Cancellation while the provider call is pending
"""

import asyncio
import json

import pytest

from interline.document import TextDocument
from interline.errors import TranslationError
from interline.exclusion import PhraseFilter, is_phrase_excluded
from interline.grammar import parse_document_to_tokens, rules_for
from interline.translator import DocumentScanner, collect_phrases, translate_document
from providers.base import TranslateFailed, TranslateOk
from providers.google_provider import GoogleTranslateProvider


async def run_pass(document, store, provider, phrase_filter, target="zh-CN", **kwargs):
    return await translate_document(
        document, "en", target,
        store=store, provider=provider, phrase_filter=phrase_filter, **kwargs
    )


class TestClassification:
    """What gets queued"""

    @pytest.mark.asyncio
    async def test_comment_string_and_keyword_are_skipped(self, store, fake_provider, phrase_filter):
        doc = TextDocument('// hello world\nlet greeting = "hi there"', language_id="javascript")
        result = await run_pass(doc, store, fake_provider, phrase_filter)

        assert result.ok
        assert result.phrases == []
        assert result.comments == ["// hello world"]
        assert result.strings == ['"hi there"']
        assert fake_provider.requests == []
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_comment_phrase_is_never_queued(self, store, fake_provider, phrase_filter):
        doc = TextDocument(
            "displayMessage() // Show the welcome banner to new users",
            language_id="javascript",
        )
        result = await run_pass(doc, store, fake_provider, phrase_filter)
        assert result.phrases == []
        assert result.comments == ["// Show the welcome banner to new users"]
        assert fake_provider.requests == []

    @pytest.mark.asyncio
    async def test_plaintext_phrase_translated_once(self, store, phrase_filter, provider_factory):
        provider = provider_factory(TranslateOk("显示欢迎横幅给新用户"))
        doc = TextDocument("displayMessage() // Show the welcome banner to new users")

        first = await run_pass(doc, store, provider, phrase_filter)
        assert first.ok
        assert first.phrases == ["Show the welcome banner to new users"]
        assert store.to_dict() == {
            "en:zh-CN": {"show the welcome banner to new users": "显示欢迎横幅给新用户"}
        }

        second = await run_pass(doc, store, provider, phrase_filter)
        assert second.ok
        assert second.phrases == []
        assert len(provider.requests) == 1

    @pytest.mark.asyncio
    async def test_queued_phrases_never_inside_comments_or_strings(self, store, fake_provider, phrase_filter):
        text = "\n".join([
            "def compute total price(items):",
            '    """Return the grand total',
            '    of all line items"""',
            "    # sum every line item",
            '    label = "order total here"',
            "    apply sales tax now",
        ])
        doc = TextDocument(text, language_id="python")
        result = await run_pass(doc, store, fake_provider, phrase_filter)

        assert result.phrases == ["apply sales tax now"]
        assert result.strings == ['"""Return the grand total\n    of all line items"""', '"order total here"']
        assert result.comments == ["# sum every line item"]
        # Starts on a keyword, "price" is dropped because a call follows
        assert result.keywords == ["def compute total"]

    @pytest.mark.asyncio
    async def test_batch_is_deduplicated_in_document_order(self, store, fake_provider, phrase_filter):
        doc = TextDocument("first phrase here\nsecond phrase here\nfirst phrase here")
        result = await run_pass(doc, store, fake_provider, phrase_filter)

        assert result.phrases == ["first phrase here", "second phrase here"]
        assert fake_provider.requests[0].text == "first phrase here\nsecond phrase here"

    @pytest.mark.asyncio
    async def test_case_variants_are_queued_once(self, store, fake_provider, phrase_filter):
        doc = TextDocument("Hello World again\nhello world again\nHELLO WORLD AGAIN")
        result = await run_pass(doc, store, fake_provider, phrase_filter)

        assert result.phrases == ["Hello World again"]
        assert fake_provider.requests[0].text == "Hello World again"
        assert store.cache_for("en", "zh-CN").get("hello world again") == "HELLO WORLD AGAIN"

    @pytest.mark.asyncio
    async def test_excluded_and_annotated_phrases(self, store, fake_provider):
        phrase_filter = PhraseFilter.build(min_word_length=8, known_words=["good morning"])
        doc = TextDocument("a b c\ngood morning\nhello world [[你好世界]]\nsee you later")
        result = await run_pass(doc, store, fake_provider, phrase_filter)
        assert result.phrases == ["see you later"]

    @pytest.mark.asyncio
    async def test_cached_phrases_are_not_requeued(self, store, fake_provider, phrase_filter):
        store.cache_for("en", "zh-CN").set("Known Phrase Here", "已知")
        doc = TextDocument("known phrase here\nfresh phrase here")
        result = await run_pass(doc, store, fake_provider, phrase_filter)
        assert result.phrases == ["fresh phrase here"]

    @pytest.mark.asyncio
    async def test_cache_is_per_language_pair(self, store, fake_provider, phrase_filter):
        doc = TextDocument("same phrase again")
        await run_pass(doc, store, fake_provider, phrase_filter, target="zh-CN")
        result = await run_pass(doc, store, fake_provider, phrase_filter, target="ja")
        assert result.phrases == ["same phrase again"]
        assert len(fake_provider.requests) == 2

    @pytest.mark.asyncio
    async def test_host_document_accessor(self, store, fake_provider, phrase_filter):
        class HostDocument:
            """Exposes only the accessor operations"""

            def __init__(self, text):
                self._doc = TextDocument(text)

            def get_text(self, range=None):
                return self._doc.get_text(range)

            def position_at(self, offset):
                return self._doc.position_at(offset)

            def offset_at(self, position):
                return self._doc.offset_at(position)

        document = HostDocument("plain words here /* not these */")
        result = await run_pass(document, store, fake_provider, phrase_filter, rules=rules_for("c"))
        assert result.phrases == ["plain words here"]
        assert result.comments == ["/* not these */"]

    @pytest.mark.asyncio
    async def test_unresolved_scope_skips_only_the_occurrence(self, monkeypatch, store, fake_provider, phrase_filter):
        monkeypatch.setattr("interline.translator.find_scopes_range", lambda *args: None)
        doc = TextDocument("// hello world\nreal code phrase", language_id="javascript")
        result = await run_pass(doc, store, fake_provider, phrase_filter)
        assert result.phrases == ["real code phrase"]
        assert result.comments == []


class TestProviderResults:
    """Pairing results back into the cache"""

    @pytest.mark.asyncio
    async def test_results_paired_by_position(self, store, fake_provider, phrase_filter, cache_path):
        doc = TextDocument("alpha beta\ngamma delta\nepsilon zeta")
        result = await run_pass(doc, store, fake_provider, phrase_filter)

        assert result.translated == {
            "alpha beta": "ALPHA BETA",
            "gamma delta": "GAMMA DELTA",
            "epsilon zeta": "EPSILON ZETA",
        }
        cache = store.cache_for("en", "zh-CN")
        assert cache.get("gamma delta") == "GAMMA DELTA"
        # Persisted after the batch
        assert json.loads(cache_path.read_text(encoding="utf-8")) == store.to_dict()

    @pytest.mark.asyncio
    async def test_partial_response_caches_prefix(self, store, phrase_filter, provider_factory):
        provider = provider_factory(TranslateOk("一\n二"))
        doc = TextDocument("first phrase here\nsecond phrase here\nthird phrase here")
        result = await run_pass(doc, store, provider, phrase_filter)

        assert result.ok
        cache = store.cache_for("en", "zh-CN")
        assert cache.get("first phrase here") == "一"
        assert cache.get("second phrase here") == "二"
        assert not cache.has("third phrase here")

    @pytest.mark.asyncio
    async def test_empty_and_padded_translations(self, store, phrase_filter, provider_factory):
        provider = provider_factory(TranslateOk("  一  \n\n三"))
        doc = TextDocument("first phrase here\nsecond phrase here\nthird phrase here")
        await run_pass(doc, store, provider, phrase_filter)

        cache = store.cache_for("en", "zh-CN")
        assert cache.get("first phrase here") == "一"
        assert cache.get("second phrase here") is None
        assert cache.get("third phrase here") == "三"

    @pytest.mark.asyncio
    async def test_request_languages(self, store, fake_provider, phrase_filter):
        await run_pass(TextDocument("one more thing"), store, fake_provider, phrase_filter, target="ko")
        request = fake_provider.requests[0]
        assert (request.source_lang, request.target_lang) == ("en", "ko")

    @pytest.mark.asyncio
    async def test_persist_can_be_disabled(self, store, fake_provider, phrase_filter, cache_path):
        await run_pass(TextDocument("one more thing"), store, fake_provider, phrase_filter, persist=False)
        assert store.cache_for("en", "zh-CN").has("one more thing")
        assert not cache_path.exists()


class TestFailures:
    """Provider failure and cancellation"""

    @pytest.mark.asyncio
    async def test_failure_returns_error_without_cache_changes(self, store, failing_provider, phrase_filter, cache_path):
        messages = []
        doc = TextDocument("alpha beta\ngamma delta")
        result = await run_pass(doc, store, failing_provider, phrase_filter, notify=messages.append)

        assert not result.ok
        assert isinstance(result.error, TranslationError)
        assert result.error.message == "Service unavailable"
        assert isinstance(result.error.cause, RuntimeError)
        assert result.error.__cause__ is result.error.cause
        assert messages == ["Service unavailable"]
        assert result.phrases == ["alpha beta", "gamma delta"]
        assert len(store) == 0
        assert not cache_path.exists()

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, store, failing_provider, phrase_filter, caplog):
        await run_pass(TextDocument("alpha beta"), store, failing_provider, phrase_filter)
        assert "Service unavailable" in caplog.text

    @pytest.mark.asyncio
    async def test_unsupported_language_is_a_provider_failure(self, store, phrase_filter):
        provider = GoogleTranslateProvider()
        result = await run_pass(TextDocument("alpha beta"), store, provider, phrase_filter, target="xx-YY")
        assert not result.ok
        assert "Unsupported target language" in result.error.message
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_failure_then_retry_succeeds(self, store, phrase_filter, provider_factory):
        replies = [TranslateFailed("rate limited"), TranslateOk("阿尔法")]
        provider = provider_factory(lambda request: replies.pop(0))
        doc = TextDocument("alpha beta")

        assert not (await run_pass(doc, store, provider, phrase_filter)).ok
        assert (await run_pass(doc, store, provider, phrase_filter)).ok
        assert store.cache_for("en", "zh-CN").get("alpha beta") == "阿尔法"

    @pytest.mark.asyncio
    async def test_cancellation_leaves_cache_untouched(self, store, phrase_filter, cache_path, provider_factory):
        started = asyncio.Event()

        class SlowProvider(provider_factory):
            async def translate(self, request):
                started.set()
                await asyncio.sleep(3600)
                return TranslateOk("never")

        task = asyncio.ensure_future(
            run_pass(TextDocument("alpha beta"), store, SlowProvider(), phrase_filter)
        )
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert len(store) == 0
        assert not cache_path.exists()


class TestScannerProperties:
    """Scanner-level guarantees"""

    def test_no_match_inside_skipped_comment(self):
        text = "before code here /* one two three\nfour five six */ after code here"
        doc = TextDocument(text, language_id="c")
        scanner = DocumentScanner(doc, parse_document_to_tokens(doc))
        comment_end = text.index("*/") + 2

        yielded = list(scanner.code_phrases())
        assert [m.phrase for m in yielded] == ["before code here", "after code here"]
        assert all(m.match_index >= comment_end for m in yielded[1:])
        assert scanner.comments == ["/* one two three\nfour five six */"]

    def test_collect_phrases_has_no_side_effects(self, store, phrase_filter):
        cache = store.cache_for("en", "zh-CN")
        result = collect_phrases(TextDocument("alpha beta"), cache, phrase_filter)
        assert result.phrases == ["alpha beta"]
        assert len(store) == 0

    def test_exclusion_examples(self):
        assert is_phrase_excluded("the", PhraseFilter(min_word_length=4))
        assert is_phrase_excluded("the", PhraseFilter.build(min_word_length=0, known_words=["the"]))
        assert is_phrase_excluded("1234", PhraseFilter(min_word_length=0))
        assert is_phrase_excluded("12345678", PhraseFilter(min_word_length=4))

    def test_popular_words_exclude_common_phrases(self, store):
        phrase_filter = PhraseFilter.build(min_word_length=4, popular_word_count=5000)
        cache = store.cache_for("en", "zh-CN")
        doc = TextDocument("of the people\nthank you\nmeasure photosynthesis rates")

        result = collect_phrases(doc, cache, phrase_filter)
        assert result.phrases == ["measure photosynthesis rates"]

    def test_known_single_words_cover_a_phrase(self, store):
        phrase_filter = PhraseFilter.build(min_word_length=4, known_words=["Build", "Cache"])
        cache = store.cache_for("en", "zh-CN")
        doc = TextDocument("build cache\nbuild the cache")

        result = collect_phrases(doc, cache, phrase_filter)
        assert result.phrases == ["build the cache"]
