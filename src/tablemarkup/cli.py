from pathlib import Path

import click

from bs4 import BeautifulSoup
from rich.console import Console
from rich.table import Table
from rich.traceback import install as install_traceback

from tablemarkup.environment import Environment
from tablemarkup.errors import TableMarkupError
from tablemarkup.log import configure_logging
from tablemarkup.models import RenderContext
from tablemarkup.settings import get_settings
from tablemarkup.table_definition import TableDefinition
from tablemarkup.table_markup_generator import TableMarkupGenerator


console = Console(stderr=True)
stdout  = Console()
install_traceback(show_locals=False, word_wrap=True, console=console)


@click.group()
@click.option('--env', type=click.Choice([e.value for e in Environment]), default=None, help='Environment whose .env file is read.')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']), default=None, help='Override the configured log level.')
def cli(env: str | None, log_level: str | None) -> None:
    """tablemarkup: render DataTables markup from table definitions."""
    if env:
        Environment(env).activate()
    configure_logging(log_level, console=console)


@cli.command()
@click.argument('definition', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--rows', 'rows_path', type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help='YAML or JSON file with the rows; replaces rows in the definition.')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Write the markup here instead of stdout.')
@click.option('--locale', default=None, help='Ambient locale of the request, e.g. de_DE.')
@click.option('--pretty', is_flag=True, help='Indent the generated markup.')
def render(definition: Path, rows_path: Path | None, output: Path | None, locale: str | None, pretty: bool) -> None:
    """Render the table described by DEFINITION."""
    try:
        table_definition = TableDefinition.from_path(definition)
        rows = TableDefinition.load_rows(rows_path) if rows_path else None
        table = table_definition.to_table(rows)
        markup = TableMarkupGenerator().render(table, table_definition.to_settings(), RenderContext(locale=locale))
    except TableMarkupError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if pretty:
        markup = BeautifulSoup(markup, "html.parser").prettify()

    if output:
        output.write_text(markup, encoding="utf-8")
        console.log(f"Wrote {table.client_id} ({table.row_count} rows) to {output}")
    else:
        click.echo(markup)


@cli.command()
def languages() -> None:
    """List the languages a DataTables translation is shipped for."""
    resources = get_settings().resources
    table = Table(title="DataTables translations")
    table.add_column("Language")
    table.add_column("Resource")
    for lang in resources.supported_languages:
        table.add_row(lang, resources.resolve(resources.locale_path_pattern.format(lang=lang)))
    stdout.print(table)


if __name__ == "__main__":
    cli()
