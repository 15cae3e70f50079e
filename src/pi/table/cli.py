"""CLI entry point for pi-table. Uses Click for argument parsing."""

from __future__ import annotations

import csv
import logging

import click

from pi.table.buffer import TextBuffer
from pi.table.columns import ColumnModel, default_column_model
from pi.table.config import TableOptions
from pi.table.errors import TableError
from pi.table.host import HostPosition
from pi.table.layout import render_header
from pi.table.model import ListTableModel
from pi.table.utils import ALIGNMENTS
from pi.table.view import TableView

logger = logging.getLogger(__name__)


def _load_csv(path: str, header: bool) -> ListTableModel:
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    headers = rows.pop(0) if header and rows else None
    try:
        return ListTableModel(rows, headers)
    except TableError as exc:
        raise click.ClickException(f"{path}: {exc}") from exc


def _apply_alignments(columns: ColumnModel, specs: tuple[str, ...]) -> ColumnModel:
    for spec in specs:
        name, sep, alignment = spec.rpartition("=")
        if not sep or alignment not in ALIGNMENTS:
            raise click.BadParameter(
                f"expected NAME=ALIGN with ALIGN in {', '.join(ALIGNMENTS)}, got {spec!r}",
                param_hint="--align",
            )
        for i, column in enumerate(columns.columns()):
            if column.title == name or str(i) == name:
                columns = columns.with_column(i, alignment=alignment)
                break
        else:
            raise click.BadParameter(f"no column named {name!r}", param_hint="--align")
    return columns


def _build_view(
    path: str,
    header: bool,
    margin: int,
    width: int | None,
    max_width: int | None,
    align: tuple[str, ...],
) -> TableView:
    model = _load_csv(path, header)
    options = TableOptions(margin=margin, default_width=width, max_width=max_width)
    try:
        columns = _apply_alignments(default_column_model(model, options), align)
    except TableError as exc:
        raise click.ClickException(str(exc)) from exc
    logger.debug("Loaded %r from %s", model, path)
    return TableView(TextBuffer(), model, columns, options)


_table_options = [
    click.argument("path", type=click.Path(exists=True, dir_okay=False)),
    click.option("--no-header", is_flag=True, help="Treat the first CSV row as data"),
    click.option("--margin", type=click.IntRange(min=0), default=1, show_default=True,
                 help="Spaces between columns"),
    click.option("--width", type=click.IntRange(min=1), default=None,
                 help="Fixed width for every column (default: fit content)"),
    click.option("--max-width", type=click.IntRange(min=1), default=None,
                 help="Upper bound for content-fitted widths"),
    click.option("--align", multiple=True, metavar="NAME=ALIGN",
                 help="Column alignment (left, right, center); repeatable"),
]


def table_options(fn):
    for decorator in reversed(_table_options):
        fn = decorator(fn)
    return fn


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
)
@click.pass_context
def main(ctx, log_level):
    """Render CSV data as a fixed-width grid and map grid coordinates to cells."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command("render")
@table_options
def render_cmd(path, no_header, margin, width, max_width, align):
    """Print PATH as a grid."""
    view = _build_view(path, not no_header, margin, width, max_width, align)
    buffer = view.host
    if not no_header:
        click.echo(render_header(view.column_model, view.options.ellipsis))
    view.draw(HostPosition(0, 0))
    click.echo(buffer.text)


@main.command("locate")
@table_options
@click.argument("line", type=int)
@click.argument("column", type=int)
def locate_cmd(path, no_header, margin, width, max_width, align, line, column):
    """Show the cell at grid LINE and COLUMN (both 0-based, header excluded)."""
    view = _build_view(path, not no_header, margin, width, max_width, align)
    try:
        position = view.mapper().forward(line, column)
    except TableError as exc:
        raise click.ClickException(str(exc)) from exc
    value = view.value_at(position)
    click.echo(
        f"row={position.row} col={position.col} offset={position.offset} value={value!r}"
    )


if __name__ == "__main__":
    main()
