"""Tests for the TranslationPipeline orchestrator."""

import random
from dataclasses import replace

import pytest

from srt_master.exceptions import ConfigurationError, ModelClientError
from srt_master.models import (
    ContextSuggestion,
    ItemStatus,
    LogSeverity,
    ModelTier,
    SubtitleItem,
    SubtitleStore,
    Translation,
)
from srt_master.orchestration import TranslationPipeline
from srt_master.orchestration.translation_pipeline import MISSING_TRANSLATION_MESSAGE
from srt_master.services import LogSink, RoutingPolicy


@pytest.fixture
def make_pipeline(test_config, fake_client, log_sink):
    """Factory fixture for a pipeline over ``count`` items."""

    def _make(count=5, config=None, pro_allocation=0, sleep=None, store=None):
        config = config or test_config
        return TranslationPipeline(
            config=config,
            store=store if store is not None else _store(count),
            model_client=fake_client,
            log_sink=log_sink,
            routing_policy=RoutingPolicy(pro_allocation, random.Random(0)),
            sleep=sleep or (lambda seconds: None),
        )

    return _make


def _store(count):
    return SubtitleStore(
        SubtitleItem(
            id=i,
            start_time="00:00:01,000",
            end_time="00:00:02,000",
            original_text=f"Line {i}",
        )
        for i in range(1, count + 1)
    )


class TestRunBasics:
    """Tests for a normal run."""

    def test_translates_every_item(self, make_pipeline):
        pipeline = make_pipeline(count=5)

        result = pipeline.run()

        for item in pipeline.store.get_snapshot():
            assert item.status == ItemStatus.DONE
            assert item.translated_text == f"fast:Line {item.id}"
            assert item.model_used == ModelTier.FAST
        assert result.items_done == 5
        assert result.success is True

    def test_original_text_unchanged(self, make_pipeline):
        pipeline = make_pipeline(count=3)
        pipeline.run()
        assert [item.original_text for item in pipeline.store.get_snapshot()] == [
            "Line 1",
            "Line 2",
            "Line 3",
        ]

    def test_batches_processed_in_order(self, make_pipeline, fake_client, test_config):
        pipeline = make_pipeline(count=25)

        result = pipeline.run()

        assert fake_client.context_calls == [
            list(range(1, 11)),
            list(range(11, 21)),
            list(range(21, 26)),
        ]
        assert [ids for ids, _ in fake_client.translate_calls] == fake_client.context_calls
        assert result.total_batches == 3
        assert result.batches_processed == 3
        assert pipeline.progress == pytest.approx(100.0)

    def test_progress_callbacks(self, make_pipeline, recording_progress):
        pipeline = make_pipeline(count=25)

        pipeline.run(progress_callback=recording_progress)

        assert recording_progress.starts == [(25, "Translating 25 subtitles in 3 batches")]
        assert [current for current, _ in recording_progress.progresses] == [10, 20, 25]
        assert recording_progress.progresses[-1][1] == "Batch 3/3"
        assert recording_progress.completes == 1
        assert recording_progress.errors == []

    def test_start_and_complete_logged(self, make_pipeline, log_sink):
        make_pipeline(count=2).run()

        messages = [entry.message for entry in log_sink.entries]
        assert messages[0] == "Starting batch translation..."
        assert messages[-1] == "Job complete."
        assert log_sink.entries[-1].severity == LogSeverity.SUCCESS

    def test_empty_store_rejected(self, make_pipeline, fake_client):
        pipeline = make_pipeline(store=SubtitleStore())

        with pytest.raises(ConfigurationError):
            pipeline.run()
        assert fake_client.context_calls == []

    def test_invalid_config_rejected(self, make_pipeline, test_config, fake_client):
        pipeline = make_pipeline(config=replace(test_config, batch_size=0))

        with pytest.raises(ConfigurationError):
            pipeline.run()
        assert fake_client.translate_calls == []

    def test_rerun_resets_results(self, make_pipeline, fake_client):
        pipeline = make_pipeline(count=3)
        fake_client.drop_ids = {2}
        pipeline.run()
        assert pipeline.store.get(2).status == ItemStatus.ERROR

        fake_client.drop_ids = set()
        result = pipeline.run()

        assert pipeline.store.get(2).status == ItemStatus.DONE
        assert result.items_failed == 0


class TestDelay:
    """Tests for the delay between batches."""

    def test_sleeps_between_batches_only(self, make_pipeline, test_config):
        calls = []
        config = replace(test_config, inter_batch_delay=1.5)
        pipeline = make_pipeline(count=25, config=config, sleep=calls.append)

        pipeline.run()

        assert calls == [1.5, 1.5]

    def test_no_sleep_when_delay_is_zero(self, make_pipeline):
        calls = []
        make_pipeline(count=25, sleep=calls.append).run()
        assert calls == []

    def test_no_sleep_for_single_batch(self, make_pipeline, test_config):
        calls = []
        config = replace(test_config, inter_batch_delay=2.0)
        make_pipeline(count=4, config=config, sleep=calls.append).run()
        assert calls == []


class TestContextCheck:
    """Tests for the context-check phase."""

    def test_suggestion_merged_and_routes_quality(self, make_pipeline, fake_client):
        fake_client.suggestions = {2: "Line 2 (clarified)"}
        pipeline = make_pipeline(count=5, pro_allocation=0)

        pipeline.run()

        item = pipeline.store.get(2)
        assert item.context_suggestion == "Line 2 (clarified)"
        assert item.is_context_applied is False
        assert item.model_used == ModelTier.QUALITY
        assert fake_client.translate_calls[0][1] == ModelTier.QUALITY

    def test_suggestion_not_applied_translates_original(self, make_pipeline, fake_client):
        fake_client.suggestions = {1: "Clarified"}
        pipeline = make_pipeline(count=2)

        pipeline.run()

        assert pipeline.store.get(1).translated_text == "quality:Line 1"

    def test_auto_apply_translates_suggestion(self, make_pipeline, fake_client, test_config):
        fake_client.suggestions = {1: "Clarified"}
        config = replace(test_config, auto_apply_suggestions=True)
        pipeline = make_pipeline(count=2, config=config)

        pipeline.run()

        item = pipeline.store.get(1)
        assert item.is_context_applied is True
        assert item.original_text == "Line 1"
        assert item.translated_text == "quality:Clarified"

    def test_empty_and_foreign_suggestions_ignored(self, make_pipeline, fake_client, log_sink):
        pipeline = make_pipeline(count=3)
        original = fake_client.check_context

        def check_context(items, config):
            original(items, config)
            return [
                ContextSuggestion(id=1, suggestion=""),
                ContextSuggestion(id=99, suggestion="not in batch"),
            ]

        fake_client.check_context = check_context

        pipeline.run()

        assert all(item.context_suggestion is None for item in pipeline.store.get_snapshot())
        assert fake_client.translate_calls[0][1] == ModelTier.FAST
        assert not any("Flagged" in entry.message for entry in log_sink.entries)

    def test_flag_count_logged(self, make_pipeline, fake_client, log_sink):
        fake_client.suggestions = {1: "a", 3: "b"}

        make_pipeline(count=3).run()

        flagged = [entry for entry in log_sink.entries if "Flagged" in entry.message]
        assert len(flagged) == 1
        assert "Flagged 2 potential context issues" in flagged[0].message
        assert flagged[0].severity == LogSeverity.INFO

    def test_context_failure_is_not_fatal(self, make_pipeline, fake_client, log_sink):
        fake_client.context_error = ModelClientError("context service down")
        pipeline = make_pipeline(count=3)

        result = pipeline.run()

        assert result.items_done == 3
        assert fake_client.translate_calls[0][1] == ModelTier.FAST
        warnings = log_sink.filter(LogSeverity.WARNING)
        assert len(warnings) == 1
        assert "Context check failed" in warnings[0].message

    def test_applied_suggestion_kept(self, make_pipeline, fake_client):
        store = SubtitleStore(
            [
                SubtitleItem(
                    id=1,
                    start_time="00:00:01,000",
                    end_time="00:00:02,000",
                    original_text="crane",
                    context_suggestion="crane (bird)",
                    is_context_applied=True,
                )
            ]
        )
        fake_client.suggestions = {1: "crane (machine)"}
        pipeline = make_pipeline(store=store)

        pipeline.run()

        item = pipeline.store.get(1)
        assert item.context_suggestion == "crane (bird)"
        assert item.translated_text == "quality:crane (bird)"


class TestRouting:
    """Tests for per-batch routing."""

    def test_tier_applies_to_whole_batch(self, make_pipeline, fake_client):
        fake_client.suggestions = {4: "x"}
        pipeline = make_pipeline(count=5)

        pipeline.run()

        assert {item.model_used for item in pipeline.store.get_snapshot()} == {ModelTier.QUALITY}

    def test_full_allocation_routes_quality(self, make_pipeline, fake_client):
        pipeline = make_pipeline(count=25, pro_allocation=100)

        result = pipeline.run()

        assert {tier for _, tier in fake_client.translate_calls} == {ModelTier.QUALITY}
        assert result.tier_usage == {ModelTier.QUALITY: 3}

    def test_default_routing_policy_uses_config(self, test_config, fake_client, log_sink):
        config = test_config.with_allocation(100)
        pipeline = TranslationPipeline(
            config=config,
            store=_store(3),
            model_client=fake_client,
            log_sink=log_sink,
        )

        pipeline.run()

        assert fake_client.translate_calls[0][1] == ModelTier.QUALITY


class TestFallback:
    """Tests for the single fast-tier retry."""

    def test_primary_failure_recovered(self, make_pipeline, fake_client, log_sink):
        fake_client.suggestions = {1: "flag"}
        fake_client.fail_tiers = {ModelTier.QUALITY}
        pipeline = make_pipeline(count=3)

        result = pipeline.run()

        assert [tier for _, tier in fake_client.translate_calls] == [
            ModelTier.QUALITY,
            ModelTier.FAST,
        ]
        for item in pipeline.store.get_snapshot():
            assert item.status == ItemStatus.DONE
            assert item.model_used == ModelTier.FAST
        assert result.fallback_batches == 1
        assert result.tier_usage == {ModelTier.FAST: 1}
        assert any("Recovered with fast tier" in e.message for e in log_sink.entries)

    def test_fast_primary_failure_retried_once_on_fast(self, make_pipeline, fake_client):
        fake_client.fail_all_translations = True
        pipeline = make_pipeline(count=3)

        pipeline.run()

        assert [tier for _, tier in fake_client.translate_calls] == [ModelTier.FAST, ModelTier.FAST]

    def test_double_failure_marks_batch_error(
        self, make_pipeline, fake_client, log_sink, recording_progress
    ):
        fake_client.fail_all_translations = True
        pipeline = make_pipeline(count=3)

        result = pipeline.run(progress_callback=recording_progress)

        for item in pipeline.store.get_snapshot():
            assert item.status == ItemStatus.ERROR
            assert item.translated_text is None
            assert "unavailable" in item.error_message
        assert result.items_failed == 3
        assert result.success is False
        assert len(result.errors) == 1
        assert len(recording_progress.errors) == 1
        assert len(log_sink.filter(LogSeverity.ERROR)) == 1

    def test_fallback_sends_batch_contents(self, make_pipeline, fake_client):
        fake_client.fail_tiers = {ModelTier.QUALITY}
        fake_client.suggestions = {2: "flag"}
        pipeline = make_pipeline(count=3)

        pipeline.run()

        assert fake_client.translate_calls[1][0] == [1, 2, 3]


class TestPartialResponse:
    """Tests for replies that leave items out."""

    def test_missing_items_marked_error(self, make_pipeline, fake_client, log_sink):
        fake_client.drop_ids = {2}
        pipeline = make_pipeline(count=3)

        result = pipeline.run()

        assert pipeline.store.get(1).status == ItemStatus.DONE
        assert pipeline.store.get(3).status == ItemStatus.DONE
        missing = pipeline.store.get(2)
        assert missing.status == ItemStatus.ERROR
        assert missing.error_message == MISSING_TRANSLATION_MESSAGE
        assert result.items_done == 2
        assert result.items_failed == 1
        assert any("missing from model response" in e.message for e in log_sink.entries)

    def test_blank_translations_marked_error(self, make_pipeline, fake_client, log_sink):
        pipeline = make_pipeline(count=3)
        fake_client.translate = lambda items, config, tier: [
            Translation(id=1, translated_text="one"),
            Translation(id=2, translated_text=""),
            Translation(id=3, translated_text="   \n"),
        ]

        result = pipeline.run()

        assert pipeline.store.get(1).status == ItemStatus.DONE
        for item_id in (2, 3):
            item = pipeline.store.get(item_id)
            assert item.status == ItemStatus.ERROR
            assert item.translated_text is None
            assert item.error_message == MISSING_TRANSLATION_MESSAGE
        assert result.items_failed == 2
        assert result.success is False
        assert any("2 item(s) missing" in e.message for e in log_sink.entries)

    def test_extra_ids_ignored(self, make_pipeline, fake_client):
        pipeline = make_pipeline(count=2)
        fake_client.translate = lambda items, config, tier: [
            Translation(id=1, translated_text="one"),
            Translation(id=2, translated_text="two"),
            Translation(id=42, translated_text="stray"),
        ]

        pipeline.run()

        assert 42 not in pipeline.store
        assert pipeline.store.get(2).translated_text == "two"


class TestCancel:
    """Tests for cancellation between batches."""

    def test_cancel_flag_initially_false(self, make_pipeline):
        assert make_pipeline().cancelled is False

    def test_cancel_sets_flag(self, make_pipeline):
        pipeline = make_pipeline()
        pipeline.cancel()
        assert pipeline.cancelled is True

    def test_cancel_during_batch_stops_before_next(self, make_pipeline, fake_client, log_sink):
        pipeline = make_pipeline(count=25)
        original = fake_client.translate

        def translate_and_cancel(items, config, tier):
            pipeline.cancel()
            return original(items, config, tier)

        fake_client.translate = translate_and_cancel

        result = pipeline.run()

        assert result.cancelled is True
        assert result.batches_processed == 1
        assert result.items_done == 10
        assert len(fake_client.context_calls) == 1
        untouched = [item for item in pipeline.store.get_snapshot() if item.id > 10]
        assert all(item.status == ItemStatus.PENDING for item in untouched)
        assert log_sink.entries[-1].message == "Job cancelled."
        assert "Translation cancelled by user" in result.errors

    def test_cancel_before_run_stops_first_batch(self, make_pipeline, fake_client):
        pipeline = make_pipeline(count=3)
        pipeline.cancel()

        result = pipeline.run()

        assert result.cancelled is True
        assert result.batches_processed == 0
        assert fake_client.context_calls == []
        assert all(item.status == ItemStatus.PENDING for item in pipeline.store.get_snapshot())

    def test_cancel_flag_cleared_after_run(self, make_pipeline):
        pipeline = make_pipeline(count=3)
        pipeline.cancel()
        pipeline.run()

        assert pipeline.cancelled is False
        result = pipeline.run()

        assert result.cancelled is False
        assert result.items_done == 3

    def test_cancelled_run_skips_remaining_delay(self, make_pipeline, fake_client, test_config):
        calls = []
        config = replace(test_config, inter_batch_delay=1.0)
        pipeline = make_pipeline(count=25, config=config, sleep=calls.append)
        original = fake_client.translate

        def translate_and_cancel(items, config, tier):
            if items[0].id == 11:
                pipeline.cancel()
            return original(items, config, tier)

        fake_client.translate = translate_and_cancel

        result = pipeline.run()

        assert result.batches_processed == 2
        assert calls == [1.0]


class TestLogSinkIntegration:
    """Tests for log entry tagging."""

    def test_entries_carry_tiers(self, test_config, fake_client):
        sink = LogSink()
        pipeline = TranslationPipeline(
            config=test_config,
            store=_store(2),
            model_client=fake_client,
            log_sink=sink,
            routing_policy=RoutingPolicy(0, random.Random(0)),
        )

        pipeline.run()

        checking = [e for e in sink.entries if "Checking context" in e.message]
        assert checking[0].model == ModelTier.QUALITY
        complete = [e for e in sink.entries if "Translation complete" in e.message]
        assert complete[0].model == ModelTier.FAST
        assert complete[0].severity == LogSeverity.SUCCESS
