"""Command line interface for :mod:`arqtab`."""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from .config import HTTP_METHODS, OUTPUT_FORMATS, Config
from .prefixes import STANDARD_PREFIXES, PrefixRegistry
from .query import execute_local, execute_sparql, load_graph, to_sparql_json
from .render import render_result
from .table import render_table
from .version import VERSION

__all__ = [
    "main",
]

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=VERSION)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """arqtab - run SPARQL queries and print the results as a table.

    Typical use:
      arqtab query --data data.ttl --query query.rq
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
        logging.getLogger("arqtab").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s", force=True)


@main.command()
@click.option(
    "--query",
    "-q",
    "query_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="The query to process.",
)
@click.option(
    "--data",
    "-d",
    "data_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="RDF file to query (format guessed from extension).",
)
@click.option("--endpoint", "-e", help="Remote SPARQL endpoint URL")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS)),
    default=Config.OUTPUT_FORMAT,
    show_default=True,
    help="Output format",
)
@click.option(
    "--standard-prefixes",
    is_flag=True,
    help="Also compact IRIs from well-known namespaces (rdf, rdfs, owl, ...)",
)
@click.option(
    "--method",
    type=click.Choice(list(HTTP_METHODS), case_sensitive=False),
    default=Config.SPARQL_METHOD,
    show_default=True,
    help="HTTP method for --endpoint",
)
@click.option(
    "--timeout",
    type=int,
    default=Config.SPARQL_TIMEOUT,
    show_default=True,
    help="Request timeout in seconds for --endpoint",
)
def query(
    query_file: Path,
    data_file: Optional[Path],
    endpoint: Optional[str],
    output_format: str,
    standard_prefixes: bool,
    method: str,
    timeout: int,
) -> None:
    """Run a SPARQL query against a data file or an endpoint.

    IRIs in the results are shortened using the PREFIX declarations of
    the query itself.


    Examples:
      arqtab query --data people.ttl --query friends.rq

      arqtab query --endpoint https://sparql.uniprot.org/sparql -q q.rq
    """
    if (data_file is None) == (endpoint is None):
        raise click.UsageError("Exactly one of --data or --endpoint is required")

    source = str(data_file) if data_file is not None else endpoint
    logger.info(f"Processing '{query_file}' on '{source}'")

    try:
        query_str = query_file.read_text(encoding="utf-8")

        registry = PrefixRegistry.from_query(query_str)
        if standard_prefixes:
            for name, namespace in STANDARD_PREFIXES.items():
                registry.register(name, namespace)

        if data_file is not None:
            graph = load_graph(data_file)
            result = execute_local(query_str, graph, source=str(data_file))
        else:
            result = execute_sparql(
                query_str,
                endpoint,
                method=method,
                timeout=timeout,
                max_retries=Config.SPARQL_MAX_RETRIES,
            )
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    if result.error:
        click.echo(f"Error: {result.error}", err=True)
        raise click.Abort()

    if output_format == "json":
        click.echo(json.dumps(to_sparql_json(result), indent=2))
        return

    for line in render_result(result, registry):
        click.echo(line)
    plural = "" if result.row_count == 1 else "s"
    click.echo(f"({result.row_count} row{plural}, {result.duration_ms} ms)")


@main.command()
@click.option(
    "--query",
    "-q",
    "query_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="The query to scan.",
)
def prefixes(query_file: Path) -> None:
    """List the PREFIX declarations found in a query file.

    Example:
      arqtab prefixes --query friends.rq
    """
    registry = PrefixRegistry.from_query(query_file.read_text(encoding="utf-8"))
    if not len(registry):
        click.echo("No PREFIX declarations found")
        return

    for line in render_table(["prefix", "namespace"], [list(pair) for pair in registry]):
        click.echo(line)


if __name__ == "__main__":
    main()
