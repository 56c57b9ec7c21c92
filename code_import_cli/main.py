"""code-import CLI - embed source file regions into markdown code blocks."""

import logging

import click

from .commands.config import config as config_group
from .commands.embed import embed_cmd
from .commands.embed import extract_cmd
from .logging_setup import init_json_logging

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(package_name="code-import-cli")
@click.option("--verbose", "-v", is_flag=True, help="Show tracebacks for errors")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    envvar="CODE_IMPORT_LOG_PATH",
    help="Append JSONL logs to this file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    envvar="CODE_IMPORT_LOG_LEVEL",
    help="Log level for the JSONL log (default: INFO)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_file: str | None, log_level: str | None):
    """code-import - keep code samples in markdown in sync with source files.

    Annotate a fenced code block with a file reference and run `embed`:

    \b
      ```js file=./src/app.js#L2-L10
      ```
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    init_json_logging(log_file, log_level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(embed_cmd)
cli.add_command(extract_cmd)
cli.add_command(config_group)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
