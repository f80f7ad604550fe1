"""
Command line entry points: run a harvest, read one article, or serve the API.
"""
from __future__ import annotations

import json
from typing import Optional

import click
import requests
from dotenv import load_dotenv

from newsharvest.models import HarvestConfigError
from newsharvest.pipeline import HarvestPipeline
from newsharvest.reader import ArticleReader
from newsharvest.service import ROUTE, configure_logging, create_app
from newsharvest.settings import load_settings


@click.group()
@click.option("--env-file", default=".env", show_default=True, help="dotenv file loaded before settings.")
@click.pass_context
def cli(ctx: click.Context, env_file: str):
    load_dotenv(env_file)
    settings = load_settings()
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.command("harvest")
@click.option("--base-url", default=None, help="Listing URL; pages are appended to it.")
@click.option("--first-page", type=int, default=None)
@click.option("--last-page", type=int, default=None)
@click.option("--max-concurrent", type=int, default=None)
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Print at most this many records.")
@click.pass_obj
def harvest_cmd(settings, base_url: Optional[str], first_page, last_page, max_concurrent, limit):
    pipeline = HarvestPipeline(settings)
    try:
        params = pipeline.params(base_url, first_page, last_page, max_concurrent)
    except HarvestConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    result = pipeline.run(params)
    if not result.found:
        click.echo("No data found", err=True)
        return
    records = result.records if limit is None else result.records[:limit]
    for record in records:
        click.echo(json.dumps(record.model_dump(), ensure_ascii=False))
    click.echo(f"{len(result.records)} records in {int(result.elapsed_ms or 0)} ms", err=True)


@cli.command("read")
@click.argument("url")
@click.pass_obj
def read_cmd(settings, url: str):
    reader = ArticleReader(user_agent=settings.user_agent, timeout=settings.fetch_timeout)
    try:
        detail = reader.read(url)
    except (requests.RequestException, ValueError) as exc:
        raise click.ClickException(f"Error scraping URL: {exc}") from exc
    finally:
        reader.close()
    click.echo(json.dumps(detail.model_dump(), ensure_ascii=False))


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8080, show_default=True)
@click.option("--debug", is_flag=True)
@click.pass_obj
def serve_cmd(settings, host: str, port: int, debug: bool):
    app = create_app(settings)
    click.echo(f"Serving on http://{host}:{port}{ROUTE}")
    app.run(host=host, port=port, debug=debug, threaded=True)


if __name__ == "__main__":  # pragma: no cover
    cli()
