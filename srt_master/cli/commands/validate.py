"""CLI command for checking API access and settings."""

from srt_master.cli.commands.common import build_config
from srt_master.presenters import ConsolePresenter
from srt_master.services import ValidationService


def validate_command(args) -> int:
    """Execute the validate subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()
    config = build_config(args)

    result = ValidationService(config).validate_setup()
    presenter.show_validation_result(result)
    return 0 if result.all_passed else 1
