"""Configuration commands.

Shows and edits the `code_import` options stored in settings files.
"""

from __future__ import annotations

from pathlib import Path
from typing import cast

import click
import yaml
from rich.table import Table

from ..console import console
from ..console import err_console
from ..errors import CodeImportError
from ..settings import OPTION_KEYS
from ..settings import Scope
from ..settings import get_settings
from ..ui.error_display import display_import_error

SCOPES = ("local", "project", "global")


@click.group(name="config", invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context):
    """Show or change code-import options.

    Options are merged from settings files (local > project > global):

    \b
      .code-import/settings.local.yaml
      .code-import/settings.yaml
      ~/.code-import/settings.yaml
    """
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Show effective options."""
    settings = get_settings()
    try:
        options = settings.get_options()
        root_dir = options.effective_root_dir()
    except CodeImportError as e:
        display_import_error(err_console, e)
        ctx.exit(1)
        return

    table = Table(title="Code Import Options", show_header=True, header_style="bold cyan")
    table.add_column("Option", style="green")
    table.add_column("Value", style="white")
    table.add_row("root_dir", f"{root_dir}" + ("" if options.root_dir else " (CWD)"))
    table.add_row("allow_importing_from_outside", str(options.allow_importing_from_outside))
    table.add_row("preserve_trailing_newline", str(options.preserve_trailing_newline))
    table.add_row("remove_redundant_indentations", str(options.remove_redundant_indentations))
    console.print(table)

    console.print("\n[dim]Settings files:[/dim]")
    for scope in SCOPES:
        path = settings.get_scope_path(cast(Scope, scope))
        state = "exists" if path.exists() else "missing"
        console.print(f"  [dim]{scope:<8}[/dim] {path} [dim]({state})[/dim]")


@config.command("set")
@click.argument("key", type=click.Choice(OPTION_KEYS))
@click.argument("value")
@click.option("--scope", type=click.Choice(SCOPES), default="project", help="Settings file to write")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str, scope: str):
    """Set option KEY to VALUE.

    VALUE is parsed as YAML, so true/false become booleans.

    Examples:
        code-import config set root_dir /srv/docs
        code-import config set preserve_trailing_newline true --scope local
    """
    if key == "root_dir":
        if not Path(value).is_absolute():
            raise click.BadParameter("root_dir has to be an absolute path", param_hint="VALUE")
        parsed: object = value
    else:
        parsed = yaml.safe_load(value)
        if not isinstance(parsed, bool):
            raise click.BadParameter(f"{key} expects true or false", param_hint="VALUE")

    try:
        get_settings().set_option(key, parsed, scope=cast(Scope, scope))
    except CodeImportError as e:
        display_import_error(err_console, e)
        ctx.exit(1)
        return

    console.print(f"[green]✓ Set {key} = {parsed!r} ({scope})[/green]")


@config.command("unset")
@click.argument("key", type=click.Choice(OPTION_KEYS))
@click.option("--scope", type=click.Choice(SCOPES), default="project", help="Settings file to edit")
def config_unset(key: str, scope: str):
    """Remove option KEY from a settings file."""
    get_settings().clear_option(key, scope=cast(Scope, scope))
    console.print(f"[green]✓ Removed {key} ({scope})[/green]")
