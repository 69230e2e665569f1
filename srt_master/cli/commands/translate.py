"""CLI command for translating a subtitle file."""

import random
from pathlib import Path

from srt_master.cli.commands.common import build_config
from srt_master.exceptions import SrtMasterException
from srt_master.models import SubtitleStore
from srt_master.orchestration import TranslationPipeline
from srt_master.presenters import ConsolePresenter, ConsoleProgressCallback
from srt_master.services import (
    ExportService,
    GeminiModelClient,
    LogSink,
    RoutingPolicy,
    SubtitleParserService,
    ValidationService,
)


def translate_command(args) -> int:
    """Execute the translate subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()
    progress = ConsoleProgressCallback()

    presenter.show_info("SRT Master - Batch Subtitle Translator")
    presenter.show_info("=" * 50)

    subtitle_file = Path(args.subtitle)
    if not subtitle_file.exists():
        presenter.show_error(f"Subtitle file not found: {subtitle_file}")
        return 1

    config = build_config(args)

    validation_result = ValidationService(config).validate_setup()
    if not validation_result.all_passed:
        presenter.show_validation_result(validation_result)
        presenter.show_error("\nValidation failed. Please fix the issues above.")
        return 1

    try:
        items = SubtitleParserService().parse_file(subtitle_file)
    except SrtMasterException as e:
        presenter.show_error(f"Error: {e}")
        return 1

    if not items:
        presenter.show_error(f"No subtitles found in {subtitle_file.name}")
        return 1

    store = SubtitleStore(items)
    log_sink = LogSink(presenter)
    log_sink.add_log(f"Loaded {subtitle_file.name} with {len(items)} subtitles.")

    rng = random.Random(args.seed) if args.seed is not None else None
    pipeline = TranslationPipeline(
        config=config,
        store=store,
        model_client=GeminiModelClient(config),
        log_sink=log_sink,
        routing_policy=RoutingPolicy(config.pro_allocation, rng),
    )

    try:
        result = pipeline.run(progress_callback=progress)
    except KeyboardInterrupt:
        presenter.show_warning("Interrupted; no output written")
        return 130
    except SrtMasterException as e:
        presenter.show_error(f"Error: {e}")
        return 1

    stats = store.stats()
    presenter.show_run_result(result, stats)

    if stats.done == 0:
        presenter.show_error("No lines were translated; no output written")
        return 1

    export_service = ExportService()
    output_path = (
        Path(args.output)
        if args.output
        else export_service.default_output_path(subtitle_file, config.target_lang)
    )
    try:
        written = export_service.export_srt(store.get_snapshot(), output_path)
    except OSError as e:
        presenter.show_error(f"Could not write {output_path}: {e}")
        return 1
    presenter.show_success(f"Wrote {written} subtitles to {output_path}")

    return 0 if result.success else 1
