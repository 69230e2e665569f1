"""Helpers shared by CLI subcommands."""

from pathlib import Path

from srt_master.config import TranslatorConfig, create_default_config, load_config_file

# argparse destination -> TranslatorConfig field
CONFIG_ARGUMENTS = {
    "source_lang": "source_lang",
    "target_lang": "target_lang",
    "genre": "genre",
    "prompt": "custom_prompt",
    "batch_size": "batch_size",
    "pro_allocation": "pro_allocation",
    "delay": "inter_batch_delay",
    "fast_model": "fast_model",
    "quality_model": "quality_model",
}


def build_config(args) -> TranslatorConfig:
    """Build the run configuration from a config file and CLI flags.

    Flags that were not given keep the file (or default) value.

    Args:
        args: Parsed command-line arguments

    Returns:
        Configuration for the run
    """
    overrides = {}
    for dest, field_name in CONFIG_ARGUMENTS.items():
        value = getattr(args, dest, None)
        if value is not None:
            overrides[field_name] = value
    if getattr(args, "auto_apply", False):
        overrides["auto_apply_suggestions"] = True

    config_file = getattr(args, "config", None)
    if config_file:
        return load_config_file(Path(config_file), **overrides)
    return create_default_config(**overrides)
