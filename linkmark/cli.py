"""Entrypoint for the command line interface."""

import asyncio

import typer
from pydantic import ValidationError

from linkmark.configs.app_configs.config_logging import configure_logging
from linkmark.exceptions import PageFetchError
from linkmark.icons.http import AsyncIconFetcher
from linkmark.icons.metadata import fetch_bookmark_details
from linkmark.icons.models import BookmarkDetails, IconQuery, IconResult
from linkmark.icons.resolver import IconResolver
from linkmark.utils.metrics import configure_metrics, get_metrics_client

cli = typer.Typer(no_args_is_help=True, add_completion=False)


async def _resolve(query: IconQuery) -> IconResult:
    await configure_metrics()
    resolver = IconResolver(fetcher=AsyncIconFetcher(), metrics_client=get_metrics_client())
    try:
        return await resolver.resolve_icon(query)
    finally:
        await resolver.close()
        await get_metrics_client().close()


async def _fetch_details(url: str) -> BookmarkDetails:
    await configure_metrics()
    fetcher = AsyncIconFetcher()
    resolver = IconResolver(fetcher=fetcher, metrics_client=get_metrics_client())
    try:
        return await fetch_bookmark_details(url, fetcher, resolver)
    finally:
        await resolver.close()
        await get_metrics_client().close()


@cli.callback()
def setup():
    """CLI Entrypoint"""
    configure_logging()


@cli.command()
def resolve(
    url: str = typer.Argument(..., help="URL of the bookmarked page"),
    title: str = typer.Option("", "--title", "-t", help="Title used for the letter icon"),
):
    """Resolve the icon of a bookmark and print it as JSON."""
    try:
        query = IconQuery(url=url, title=title)
    except ValidationError:
        typer.echo(f"Invalid URL: {url}", err=True)
        raise typer.Exit(code=2)

    result = asyncio.run(_resolve(query))
    typer.echo(result.model_dump_json())


@cli.command()
def metadata(url: str = typer.Argument(..., help="URL of the bookmarked page")):
    """Fetch the title, description and icon of a page and print them as JSON."""
    try:
        IconQuery(url=url)
    except ValidationError:
        typer.echo(f"Invalid URL: {url}", err=True)
        raise typer.Exit(code=2)

    try:
        details = asyncio.run(_fetch_details(url))
    except PageFetchError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(details.model_dump_json())


if __name__ == "__main__":
    cli()
