# cli.py
import logging
import os

import click

from contracts_api.config.settings import DEPLOYMENT_MODES, Settings, configure_logging
from contracts_api.database.local import init_db

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Contracts API"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = Settings()

    click.echo("Current Configuration:")
    for key, value in settings.get_environment_dict().items():
        click.echo(f"  {key}: {value}")
    if settings.uses_s3:
        click.echo(f"  S3 Object URL Base: {settings.s3_base_url}")


@cli.command(name="init-db")
@click.option("--db-path", default=None, help="SQLite file to initialize (defaults to DATABASE_PATH)")
def init_db_command(db_path):
    """Create the contracts table if it does not exist"""
    settings = Settings()
    configure_logging(settings.log_level)
    db_path = db_path or settings.database_path
    init_db(db_path)
    logger.info(f"Initialized database at {db_path}")
    click.echo(f"Database ready: {db_path}")


@cli.command()
@click.option("--host", default="0.0.0.0", help="API host address")
@click.option("--port", default=8000, type=int, help="API port")
@click.option("--mode",
              type=click.Choice(DEPLOYMENT_MODES),
              default=None,
              help="Deployment mode (defaults to DEPLOYMENT_MODE)")
@click.option("--reload/--no-reload", default=False, help="Enable/disable auto-reload for development")
def serve(host: str, port: int, mode: str, reload: bool):
    """Run the API with uvicorn"""
    import uvicorn

    if mode:
        os.environ["DEPLOYMENT_MODE"] = mode

    uvicorn.run(
        "contracts_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    cli()
