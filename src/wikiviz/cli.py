"""Command line interface for :mod:`wikiviz`."""

import json
from pathlib import Path

import click
import pandas as pd

from . import aggregate, dashboard
from .backend.config import Config
from .cache import DEFAULT_TTL_MINUTES, QueryCache
from .exceptions import WikivizError
from .normalize import normalize
from .retry import query_with_retry
from .sparql_client import CORS_PROXY, SparqlClient

__all__ = [
    "main",
]


@click.group()
@click.version_option()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--mock-fallback",
    is_flag=True,
    help="Use placeholder data when Wikidata cannot be reached",
)
@click.option(
    "--cors-proxy",
    default=CORS_PROXY,
    show_default=True,
    help="Proxy prefix for the query service ('' to call it directly)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, mock_fallback: bool, cors_proxy: str) -> None:
    r"""wikiviz - Wikidata dashboard data toolkit.

    Query Wikidata over SPARQL and aggregate the results behind the
    gender representation and scientific discoveries views.
    """
    import logging

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["mock_fallback"] = mock_fallback
    ctx.obj["cors_proxy"] = cors_proxy
    ctx.obj["client"] = SparqlClient(cors_proxy=cors_proxy, mock_fallback=mock_fallback)
    ctx.call_on_close(ctx.obj["client"].close)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
        logging.getLogger("wikiviz").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s", force=True)


def _read_query(query_or_file: str) -> str:
    path = Path(query_or_file)
    if path.is_file():
        return path.read_text(encoding="utf-8")
    return query_or_file


@main.command()
@click.argument("query_or_file")
@click.option(
    "--ttl",
    type=float,
    default=DEFAULT_TTL_MINUTES,
    show_default=True,
    help="Cache lifetime in minutes",
)
@click.option(
    "--retry/--no-retry",
    default=False,
    help="Retry on HTTP 429 instead of going through the cache",
)
@click.option(
    "--max-retries",
    type=int,
    default=None,
    help="Attempts when --retry is set [default: $WIKIVIZ_MAX_RETRIES or 3]",
)
@click.option("--raw", is_flag=True, help="Print raw SPARQL bindings")
@click.pass_context
def query(
    ctx: click.Context,
    query_or_file: str,
    ttl: float,
    retry: bool,
    max_retries: int | None,
    raw: bool,
) -> None:
    """Run a SPARQL query and print the results as JSON.

    QUERY_OR_FILE is either the query text or a path to a file holding it.


    Example:
      wikiviz query "SELECT ?item WHERE { ?item wdt:P31 wd:Q5 } LIMIT 3"
    """
    client: SparqlClient = ctx.obj["client"]
    sparql = _read_query(query_or_file)
    if max_retries is None:
        max_retries = Config.MAX_RETRIES

    try:
        if retry:
            bindings = query_with_retry(sparql, max_retries, client=client)
        else:
            bindings = QueryCache(client.query).get_or_fetch(sparql, ttl)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    output = bindings if raw else normalize(bindings)
    click.echo(json.dumps(output, indent=2, ensure_ascii=False))


@main.command()
@click.option("--field", default=aggregate.ALL, show_default=True, help="Field label to show")
@click.option(
    "--mode",
    type=click.Choice(dashboard.MODES),
    default="percentage",
    show_default=True,
)
@click.pass_context
def gender(ctx: click.Context, field: str, mode: str) -> None:
    """Print gender representation per decade."""
    cache = QueryCache(ctx.obj["client"].query)
    result = dashboard.gender_representation(cache, field=field, mode=mode)

    if result.fields:
        click.echo(f"Fields: {', '.join(result.fields)}")
    if not result.rows:
        click.echo("No data available for the selected field.")
        return
    click.echo(pd.DataFrame(result.rows).to_string(index=False, float_format="{:.1f}".format))


@main.command()
@click.option("--start", type=int, default=aggregate.TIMELINE_START, show_default=True)
@click.option("--end", type=int, default=aggregate.TIMELINE_END, show_default=True)
@click.option("--field", default=aggregate.ALL, show_default=True, help="Field category to show")
@click.option("--decade", type=int, default=None, help="List key discoveries of this decade")
@click.pass_context
def discoveries(
    ctx: click.Context, start: int, end: int, field: str, decade: int | None
) -> None:
    """Print located scientific discoveries and their decade histogram."""
    cache = QueryCache(ctx.obj["client"].query)
    try:
        result = dashboard.scientific_discoveries(
            cache, start=start, end=end, field=field, decade=decade
        )
    except WikivizError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    click.echo(f"{len(result.discoveries)} discoveries between {start} and {end}")
    for item in result.discoveries:
        place = f" ({item['locationLabel']})" if item.get("locationLabel") else ""
        click.echo(f"  {item.get('year')}  {item.get('discoveryLabel', '?')}{place}")

    click.echo("\nTimeline:")
    for bucket in result.timeline:
        click.echo(f"  {bucket.decade}s  {'#' * bucket.count} {bucket.count}")

    if decade is not None:
        click.echo(f"\nKey discoveries in the {decade}s:")
        if not result.highlighted:
            click.echo("  none")
        for item in result.highlighted:
            click.echo(f"  {item.get('year')}  {item.get('discoveryLabel', '?')}")


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=5000, show_default=True)
@click.option("--debug", is_flag=True, help="Run Flask in debug mode")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, debug: bool) -> None:
    """Serve the dashboard data as a JSON API."""
    from .backend.app import create_app

    config_class = type(
        "CliConfig",
        (Config,),
        {"MOCK_FALLBACK": ctx.obj["mock_fallback"], "CORS_PROXY": ctx.obj["cors_proxy"]},
    )

    click.echo(f"Serving wikiviz API at http://{host}:{port}/api/health")
    app = create_app(config_class)
    try:
        # One request at a time; the shared cache is not locked
        app.run(host=host, port=port, debug=debug, threaded=False)
    finally:
        app.config["CLIENT"].close()


if __name__ == "__main__":
    main()
