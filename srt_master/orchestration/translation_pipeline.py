"""Orchestrator for the two-phase batch translation run."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace

from srt_master.config import TranslatorConfig
from srt_master.exceptions import ConfigurationError
from srt_master.interfaces import ModelClient, ProgressCallback
from srt_master.models import (
    ItemStatus,
    LogSeverity,
    ModelTier,
    RunResult,
    SubtitleItem,
    SubtitleStore,
    Translation,
)
from srt_master.services import LogSink, RoutingPolicy
from srt_master.utils import partition_batches

logger = logging.getLogger(__name__)

MISSING_TRANSLATION_MESSAGE = "Missing from model response"


class TranslationPipeline:
    """Orchestrate context checking and translation of a subtitle store.

    Batches are processed strictly one after another. For each batch the
    pipeline runs a context check, routes the batch to a model tier,
    translates it, and falls back once to the fast tier if translation
    fails. A failed batch never stops the run.
    """

    def __init__(
        self,
        config: TranslatorConfig,
        store: SubtitleStore,
        model_client: ModelClient,
        log_sink: LogSink,
        routing_policy: RoutingPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the translation pipeline.

        Args:
            config: Configuration snapshot for the run
            store: Subtitle item collection to process
            model_client: Remote model client
            log_sink: Destination for run events
            routing_policy: Tier routing; defaults to the configured split
                with an unseeded random source
            sleep: Function used for the delay between batches
        """
        self.config = config
        self.store = store
        self.model_client = model_client
        self.log_sink = log_sink
        self.routing_policy = routing_policy or RoutingPolicy(config.pro_allocation)
        self._sleep = sleep
        self._cancelled = False
        self.progress = 0.0

    def cancel(self) -> None:
        """Request cancellation; the run stops before the next batch starts."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        return self._cancelled

    def run(self, progress_callback: ProgressCallback | None = None) -> RunResult:
        """Translate every item in the store.

        Args:
            progress_callback: Optional progress callback

        Returns:
            RunResult with batch and item statistics

        Raises:
            ConfigurationError: If the configuration is invalid or the store
                is empty (nothing has been processed in that case)
        """
        self.config.validate()
        if len(self.store) == 0:
            raise ConfigurationError("No subtitles loaded")

        start_time = time.time()
        self.progress = 0.0

        self.store.reset_for_run()
        batches = partition_batches(self.store.get_snapshot(), self.config.batch_size)
        total_items = sum(len(batch) for batch in batches)
        result = RunResult(total_items=total_items, total_batches=len(batches))

        self.log_sink.add_log("Starting batch translation...")
        if progress_callback:
            progress_callback.on_start(
                total_items, f"Translating {total_items} subtitles in {len(batches)} batches"
            )

        for index, batch in enumerate(batches, 1):
            if self._cancelled:
                result.cancelled = True
                break

            self._process_batch(batch, index, len(batches), result, progress_callback)

            result.batches_processed += 1
            result.items_processed += len(batch)
            self.progress = result.progress
            if progress_callback:
                progress_callback.on_progress(
                    result.items_processed, f"Batch {index}/{len(batches)}"
                )

            if index < len(batches) and self.config.inter_batch_delay > 0 and not self._cancelled:
                self._sleep(self.config.inter_batch_delay)

        stats = self.store.stats()
        result.items_done = stats.done
        result.items_failed = stats.failed
        result.elapsed_time = time.time() - start_time
        # Cancellation applies to one run only
        self._cancelled = False

        if result.cancelled:
            result.errors.append("Translation cancelled by user")
            self.log_sink.add_log("Job cancelled.", LogSeverity.WARNING)
        else:
            self.log_sink.add_log("Job complete.", LogSeverity.SUCCESS)
        if progress_callback:
            progress_callback.on_complete()

        logger.info(str(result))
        return result

    def _process_batch(
        self,
        batch: list[SubtitleItem],
        index: int,
        total: int,
        result: RunResult,
        progress_callback: ProgressCallback | None,
    ) -> None:
        """Run both phases for one batch and record the outcome."""
        ids = [item.id for item in batch]

        # Phase 1: context check
        self.store.apply_patch(ids, lambda item: replace(item, status=ItemStatus.CHECKING_CONTEXT))
        self.log_sink.add_log(
            f"[Batch {index}/{total}] Checking context...", tier=ModelTier.QUALITY
        )
        self._check_context(ids, index)

        # Routing reads the current state: suggestions just merged or
        # applied earlier by the user both count
        tier, flagged = self.routing_policy.select_for_batch(self.store.get_items(ids))
        if flagged:
            self.log_sink.add_log(
                f"[Batch {index}] Routed to quality tier (context flags detected)",
                tier=ModelTier.QUALITY,
            )
        else:
            self.log_sink.add_log(f"[Batch {index}] Routed to {tier.value} tier", tier=tier)

        # Phase 2: translation
        self.store.apply_patch(
            ids, lambda item: replace(item, status=ItemStatus.TRANSLATING, model_used=tier)
        )

        try:
            translations = self.model_client.translate(
                self.store.get_items(ids), self.config, tier
            )
        except Exception as e:
            self.log_sink.add_log(
                f"[Batch {index}] Translation failed on {tier.value} tier ({e}). "
                "Retrying with fast tier...",
                LogSeverity.WARNING,
                tier,
            )
            result.fallback_batches += 1
            tier = ModelTier.FAST

            try:
                translations = self.model_client.translate(batch, self.config, tier)
            except Exception as fallback_error:
                message = f"Translation failed: {fallback_error}"
                self._fail_batch(ids, message)
                result.errors.append(f"Batch {index}: {message}")
                self.log_sink.add_log(
                    f"[Batch {index}] Fallback translation failed: {fallback_error}",
                    LogSeverity.ERROR,
                    tier,
                )
                if progress_callback:
                    progress_callback.on_error(f"Batch {index}/{total}", message)
                return

            missing = self._merge_translations(ids, translations, tier)
            self.log_sink.add_log(
                f"[Batch {index}] Recovered with fast tier.", LogSeverity.SUCCESS, tier
            )
        else:
            missing = self._merge_translations(ids, translations, tier)
            self.log_sink.add_log(
                f"[Batch {index}] Translation complete.", LogSeverity.SUCCESS, tier
            )

        result.tier_usage[tier] = result.tier_usage.get(tier, 0) + 1
        if missing:
            self.log_sink.add_log(
                f"[Batch {index}] {missing} item(s) missing from model response.",
                LogSeverity.WARNING,
                tier,
            )

    def _check_context(self, ids: list[int], index: int) -> None:
        """Merge context suggestions into the batch; failures are non-fatal."""
        try:
            suggestions = self.model_client.check_context(
                self.store.get_items(ids), self.config
            )
        except Exception as e:
            self.log_sink.add_log(
                f"[Batch {index}] Context check failed ({e}). "
                "Proceeding to translate without suggestions.",
                LogSeverity.WARNING,
                ModelTier.QUALITY,
            )
            return

        batch_ids = set(ids)
        by_id: dict[int, str] = {}
        for suggestion in suggestions:
            if suggestion.id in batch_ids and suggestion.suggestion:
                by_id.setdefault(suggestion.id, suggestion.suggestion)

        # A suggestion the user already applied is kept as is
        applied = {item.id for item in self.store.get_items(by_id) if item.is_context_applied}
        for item_id in applied:
            del by_id[item_id]
        if not by_id:
            return

        auto_apply = self.config.auto_apply_suggestions

        def _merge(item: SubtitleItem) -> SubtitleItem:
            return replace(
                item,
                context_suggestion=by_id[item.id],
                is_context_applied=item.is_context_applied or auto_apply,
            )

        self.store.apply_patch(list(by_id), _merge)
        self.log_sink.add_log(
            f"[Batch {index}] Flagged {len(by_id)} potential context issues.",
            tier=ModelTier.QUALITY,
        )

    def _merge_translations(
        self, ids: list[int], translations: list[Translation], tier: ModelTier
    ) -> int:
        """Store translations for the batch.

        Items without a returned translation, or with a blank one, are
        marked as errors.

        Returns:
            Number of items missing from the response
        """
        batch_ids = set(ids)
        by_id: dict[int, str] = {}
        for translation in translations:
            if translation.id in batch_ids and translation.translated_text.strip():
                by_id.setdefault(translation.id, translation.translated_text)

        def _update(item: SubtitleItem) -> SubtitleItem:
            text = by_id.get(item.id)
            if text is None:
                return replace(
                    item,
                    status=ItemStatus.ERROR,
                    translated_text=None,
                    error_message=MISSING_TRANSLATION_MESSAGE,
                )
            return replace(
                item,
                status=ItemStatus.DONE,
                translated_text=text,
                model_used=tier,
                error_message=None,
            )

        self.store.apply_patch(ids, _update)
        return len(ids) - len(by_id)

    def _fail_batch(self, ids: list[int], message: str) -> None:
        """Mark every item of a batch as failed."""
        self.store.apply_patch(
            ids,
            lambda item: replace(
                item, status=ItemStatus.ERROR, translated_text=None, error_message=message
            ),
        )
