"""Embedding commands.

`embed` rewrites the annotated code blocks of markdown documents;
`extract` prints what a single annotation would import.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click

from ..console import console
from ..console import err_console
from ..errors import CodeImportError
from ..lib.code_loading import CodeImporter
from ..lib.code_loading import TransformResult
from ..settings import CodeImportOptions
from ..settings import get_settings
from ..ui.error_display import display_import_error
from ..utils.error_format import escape_markup
from ..utils.paths import normalize

logger = logging.getLogger(__name__)


def import_options(func):
    """Shared option flags overriding settings files."""
    decorators = [
        click.option(
            "--root-dir",
            type=click.Path(file_okay=False, path_type=Path),
            default=None,
            help="Directory imports must stay inside (default: settings, then CWD)",
        ),
        click.option(
            "--allow-outside/--no-allow-outside",
            "allow_outside",
            default=None,
            help="Allow importing files outside the root directory",
        ),
        click.option(
            "--preserve-trailing-newline/--no-preserve-trailing-newline",
            default=None,
            help="Keep the trailing newline of imported files",
        ),
        click.option(
            "--remove-redundant-indentations/--no-remove-redundant-indentations",
            default=None,
            help="Strip common indentation from whole-file imports",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _load_options(
    root_dir: Path | None,
    allow_outside: bool | None,
    preserve_trailing_newline: bool | None,
    remove_redundant_indentations: bool | None,
) -> CodeImportOptions:
    # Lexical, like document paths: a root given through a symlink stays unresolved
    if root_dir is not None:
        root_dir = Path(normalize(root_dir.absolute()))
    return get_settings().get_options(
        root_dir=root_dir,
        allow_importing_from_outside=allow_outside,
        preserve_trailing_newline=preserve_trailing_newline,
        remove_redundant_indentations=remove_redundant_indentations,
    )


def _fail(ctx: click.Context, error: CodeImportError, document: str | None = None) -> None:
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    logger.info(f"Code import failed: {error}")
    display_import_error(err_console, error, document=document, verbose=verbose)
    ctx.exit(1)


@click.command("embed")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--check", is_flag=True, help="Report out-of-date documents without writing (exit 1 if any)")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print transformed documents instead of writing them")
@import_options
@click.pass_context
def embed_cmd(
    ctx: click.Context,
    files: tuple[Path, ...],
    check: bool,
    to_stdout: bool,
    root_dir: Path | None,
    allow_outside: bool | None,
    preserve_trailing_newline: bool | None,
    remove_redundant_indentations: bool | None,
):
    """Import referenced code into the `file=` code blocks of FILES.

    Every document is transformed before anything is written; any error
    aborts the run and leaves all files untouched.

    Examples:
        code-import embed README.md docs/*.md
        code-import embed --check README.md
        code-import embed --root-dir . --stdout guide.md
    """
    if check and to_stdout:
        raise click.UsageError("--check and --stdout are mutually exclusive")

    try:
        importer = CodeImporter(
            _load_options(root_dir, allow_outside, preserve_trailing_newline, remove_redundant_indentations)
        )
    except CodeImportError as e:
        _fail(ctx, e)
        return

    results: list[tuple[Path, TransformResult]] = []
    for path in files:
        try:
            results.append((path, asyncio.run(importer.transform_file(path))))
        except CodeImportError as e:
            _fail(ctx, e, document=str(path))
            return

    if to_stdout:
        for _, result in results:
            click.echo(result.markdown, nl=False)
        return

    stale = [(path, result) for path, result in results if result.changed]

    if check:
        for path, result in stale:
            err_console.print(f"[yellow]✗ Out of date:[/yellow] {escape_markup(path)} ({len(result.imports)} block(s))")
        if stale:
            ctx.exit(1)
        console.print(f"[green]✓ {len(results)} document(s) up to date[/green]")
        return

    for path, result in stale:
        path.write_text(result.markdown, encoding="utf-8", newline="")
        logger.info(f"Updated {path} ({len(result.imports)} imported block(s))")
        console.print(f"[green]✓ Updated[/green] {escape_markup(path)} ({len(result.imports)} block(s))")

    unchanged = len(results) - len(stale)
    if unchanged:
        console.print(f"[dim]{unchanged} document(s) already up to date[/dim]")


@click.command("extract")
@click.argument("annotation")
@click.option(
    "--base-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Directory relative targets resolve from (default: CWD)",
)
@import_options
@click.pass_context
def extract_cmd(
    ctx: click.Context,
    annotation: str,
    base_dir: Path,
    root_dir: Path | None,
    allow_outside: bool | None,
    preserve_trailing_newline: bool | None,
    remove_redundant_indentations: bool | None,
):
    """Print the text ANNOTATION would import.

    Examples:
        code-import extract 'file=./src/app.py#L10-L20'
        code-import extract 'file=<rootDir>/setup.cfg#L3-'
    """
    try:
        importer = CodeImporter(
            _load_options(root_dir, allow_outside, preserve_trailing_newline, remove_redundant_indentations)
        )
        text = asyncio.run(importer.import_reference(annotation, base_dir.absolute()))
    except CodeImportError as e:
        _fail(ctx, e)
        return

    click.echo(text)
