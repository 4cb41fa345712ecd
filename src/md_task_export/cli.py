"""Command-line interface for Markdown Task Export."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import ExportConfig, load_config, parse_delimiter, resolve_output_path
from .collector import collect_tasks
from .export import export_to_file
from .exceptions import (
    InputNotFoundError,
    EmptyInputError,
    WriteFailure,
    InvalidOptionError,
)


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INPUT_NOT_FOUND = 2
EXIT_NO_TASKS = 3
EXIT_WRITE_FAILED = 4

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def get_console(stderr: bool = False) -> Console:
    """Console bound to the current stdout/stderr."""
    return Console(stderr=stderr)


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging with a rich handler on stderr."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=get_console(stderr=True), show_path=False)],
        force=True,
    )


def _validate_delimiter(ctx, param, value):
    if value is None:
        return None
    try:
        parse_delimiter(value)
    except InvalidOptionError as e:
        raise click.BadParameter(str(e))
    return value


class ExportCommand(click.Command):
    """Command that reports argument errors with exit code 1."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = EXIT_USAGE
            raise


def run_export(config: ExportConfig) -> int:
    """Run a full export and return the process exit code."""
    try:
        options = config.to_format_options()
    except InvalidOptionError as e:
        logger.error(str(e))
        return EXIT_USAGE

    output_path = resolve_output_path(config.output_path)

    logger.info("Markdown Task Export Tool")
    logger.info(f"Input: {config.input_path}")
    logger.info(f"Output: {output_path}")
    logger.info(f"Delimiter: {options.delimiter_name}")
    logger.info(f"Compress Levels: {options.compress_levels}")
    logger.info(f"Include Header: {options.include_header}")

    try:
        result = collect_tasks(config.input_path, verbose=config.verbose)
    except InputNotFoundError as e:
        logger.error(str(e))
        return EXIT_INPUT_NOT_FOUND

    logger.info(f"Customers with tasks: {len(result.customers)}")
    if result.failures:
        logger.warning(f"Skipped {len(result.failures)} unreadable file(s)")

    try:
        count = export_to_file(result.records, options, output_path)
    except EmptyInputError:
        logger.warning("No outstanding tasks found.")
        return EXIT_NO_TASKS
    except WriteFailure as e:
        logger.error(str(e))
        return EXIT_WRITE_FAILED

    console = get_console()
    console.print(f"Found [bold]{count}[/bold] outstanding task(s)")
    console.print(f"[green]Successfully exported to: {output_path}[/green]")
    return EXIT_OK


@click.command(cls=ExportCommand, context_settings=CONTEXT_SETTINGS)
@click.option("--input", "-i", "input_path", type=click.Path(),
              help="Path to Customers folder (required)")
@click.option("--output", "-o", "output_path", type=click.Path(),
              help="Output CSV file path (default: outstanding_tasks.csv)")
@click.option("--delimiter", "-d", callback=_validate_delimiter,
              help="CSV delimiter: 'comma' or 'semicolon' (default: comma)")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Show detailed processing information")
@click.option("--compress-levels", is_flag=True, default=False,
              help="Compress empty levels (skip empty hierarchy columns)")
@click.option("--no-header", is_flag=True, default=False,
              help="Exclude CSV header row")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False),
              help="YAML file with default options")
@click.version_option(__version__, "--version", prog_name="Markdown Task Export",
                      message="%(prog)s v%(version)s")
@click.pass_context
def main(ctx, input_path: Optional[str], output_path: Optional[str],
         delimiter: Optional[str], verbose: bool,
         compress_levels: bool, no_header: bool,
         config_path: Optional[str]):
    """Export outstanding markdown tasks to CSV.

    \b
    Examples:
      md-task-export -i ./Customers -o tasks.csv
      md-task-export -i ./Customers -v --compress-levels
      md-task-export -i ./Customers --delimiter semicolon --no-header
    """
    try:
        config = load_config(Path(config_path) if config_path else None)
        config = config.merge(
            input_path=input_path,
            output_path=output_path,
            delimiter=delimiter,
            verbose=verbose or None,
            compress_levels=compress_levels or None,
            include_header=False if no_header else None,
        )
    except InvalidOptionError as e:
        setup_logging(False)
        logger.error(str(e))
        ctx.exit(EXIT_USAGE)

    setup_logging(config.verbose)

    if not config.input_path:
        error = click.UsageError("Missing option '-i' / '--input'.", ctx)
        error.exit_code = EXIT_USAGE
        raise error

    try:
        exit_code = run_export(config)
    except Exception:
        logger.exception("Unexpected error occurred")
        exit_code = EXIT_USAGE

    ctx.exit(exit_code)


if __name__ == "__main__":
    main()
