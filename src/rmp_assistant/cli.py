"""Command-line entry point: serve the API or seed the index."""

import sys
from pathlib import Path

import click

from rmp_assistant.application.use_cases import load_reviews
from rmp_assistant.config import get_settings
from rmp_assistant.infrastructure.container import ProviderClients, build_seed_use_case
from rmp_assistant.logging_config import setup_logging


@click.group()
def cli():
    """RateMyProfessor assistant."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Bind address.")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port.")
@click.option("--reload", is_flag=True, help="Reload on code changes (development).")
def serve(host: str, port: int, reload: bool):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("rmp_assistant.main:app", host=host, port=port, reload=reload)


@cli.command()
@click.option(
    "--file",
    "reviews_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Reviews JSON file. Defaults to REVIEWS_PATH.",
)
def seed(reviews_file: Path | None):
    """Embed professor reviews and upsert them into the Pinecone index."""
    settings = get_settings()
    setup_logging(level=settings.log_level, json=settings.log_json)
    path = reviews_file or settings.reviews_path

    click.echo(f"Seeding index '{settings.pinecone_index_name}' from {path}")

    clients = ProviderClients(settings)
    try:
        reviews = load_reviews(path)
        click.echo(f"   Loaded {len(reviews)} reviews")
        upserted = build_seed_use_case(settings, clients).execute(reviews)
    except Exception as e:
        click.echo(f"✗ Seeding failed: {e}", err=True)
        sys.exit(1)
    finally:
        clients.close()

    click.echo(f"✓ Upserted {upserted} vectors into namespace '{settings.pinecone_namespace}'")


if __name__ == "__main__":
    cli()
